import pytest

from family_graph.place_name import CountryNames, normalize_place_name, parse_hierarchy, split_place_name


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("abc,,def", "abc, def"),
        ("  abc   ", "abc"),
        ("Abc,dEf", "abc, def"),
        (",", ""),
        ("", ""),
        ("Hove ;  Sussex,England", "hove, sussex, england"),
        ("St. Mary's,  London", "st marys, london"),
        ("Stoke-on-Trent, Staffordshire", "stoke-on-trent, staffordshire"),
    ]
)
def test_normalize_place_name(raw, expected):
    assert normalize_place_name(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["abc,,def", "  abc   ", "Abc,dEf", ",", "Hove ;  Sussex,England", "Zürich,\tSchweiz"]
)
def test_normalize_is_idempotent(raw):
    once = normalize_place_name(raw)
    assert normalize_place_name(once) == once


def test_split_preserves_case():
    assert split_place_name(" Hove ,, Sussex ") == ["Hove", "Sussex"]


def test_parse_hierarchy():
    assert parse_hierarchy("Hove, Sussex, England") == [
        "hove, sussex, england",
        "sussex, england",
        "england",
    ]


@pytest.fixture(scope="module")
def country_names():
    return CountryNames()


@pytest.mark.parametrize(
    "name,expected",
    [
        ("France", "France"),
        ("france", "France"),
        ("USA", "United States"),
        ("Holland", "Netherlands"),
        ("Sussex", None),
    ]
)
def test_country_name(country_names, name, expected):
    assert country_names.country_name(name) == expected


def test_uk_nation_name(country_names):
    assert country_names.uk_nation_name("scotland") == "Scotland"
    assert country_names.uk_nation_name("France") is None
