import pytest


@pytest.mark.parametrize(
    "symbol_name",
    [
        "Tree",
        "Person",
        "Family",
        "Place",
        "Gazetteer",
        "IdentityMap",
        "Annotations",
        "Relation",
        "parse_date",
        "label_relations",
        "load_tree",
    ],
)
def test_import_symbol(symbol_name):
    """Test that each key symbol can be imported from family_graph."""
    module = __import__("family_graph", fromlist=[symbol_name])
    symbol = getattr(module, symbol_name, None)
    assert symbol is not None, f"{symbol_name} could not be imported"


def test_import_failure():
    """Test that importing a non-existent symbol raises ImportError or AttributeError."""
    with pytest.raises((ImportError, AttributeError)):
        from family_graph import NotARealClass  # noqa: F401
