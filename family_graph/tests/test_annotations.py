import json

import pytest

from family_graph.annotations import (
    TREE_ID,
    Annotations,
    FieldRegistry,
    FieldSetter,
    load_annotations,
    parse_latlong,
    save_annotations,
)
from family_graph.errors import ConfigurationError, StoreError, UnknownFieldError
from family_graph.gender import Gender


@pytest.mark.parametrize(
    "value,expected",
    [
        ("51.5074, -0.1278", (51.5074, -0.1278)),
        ("-33.8688 151.2093", (-33.8688, 151.2093)),
    ]
)
def test_parse_latlong(value, expected):
    lat, lon = parse_latlong(value)
    assert lat == pytest.approx(expected[0])
    assert lon == pytest.approx(expected[1])


@pytest.mark.parametrize("value", ["", "   ", "somewhere near London"])
def test_parse_latlong_invalid(value):
    with pytest.raises(ConfigurationError):
        parse_latlong(value)


@pytest.mark.parametrize(
    "kind,field_name,operation",
    [
        ("person", "shoe_size", "replace"),
        ("person", "nickname", "add"),
        ("person", "tags", "replace"),
        ("place", "nickname", "replace"),
        ("family", "name", "replace"),
    ]
)
def test_unknown_field_rejected_when_recorded(kind, field_name, operation):
    annotations = Annotations()
    with pytest.raises(UnknownFieldError) as excinfo:
        getattr(annotations, operation)(kind, "X1", field_name, "value")
    assert excinfo.value.kind == kind
    assert len(annotations) == 0


def test_invalid_value_rejected_when_recorded():
    annotations = Annotations()
    with pytest.raises(ConfigurationError):
        annotations.replace("place", "P1", "latlong", "not a coordinate")


def test_apply_person(tree):
    person = tree.find_person("test", "I1")
    annotations = Annotations()
    annotations.replace("person", person.id, "nickname", "Bert")
    annotations.replace("person", person.id, "gender", "F")
    annotations.replace("person", person.id, "redacted", "yes")
    annotations.add("person", person.id, "tags", "soldier")
    annotations.add("person", person.id, "tags", "soldier")
    annotations.add("person", person.id, "links", "https://example.org/bert")

    assert annotations.apply_person(person)
    assert person.nickname == "Bert"
    assert person.gender is Gender.FEMALE
    assert person.redacted
    assert person.tags == ["soldier"]
    assert person.links == ["https://example.org/bert"]


def test_apply_without_annotations(tree):
    assert not Annotations().apply_person(tree.find_person("test", "I1"))


def test_apply_place(tree):
    place = tree.find_place_unstructured("Hove, Sussex, England")
    annotations = Annotations()
    annotations.replace("place", place.id, "latlong", "50.8279, -0.1688")
    annotations.replace("place", place.id, "preferred_name", "Hove (Brighton and Hove)")
    annotations.apply_place(place)

    assert place.has_coordinates()
    assert place.latitude == pytest.approx(50.8279)
    assert place.preferred_name == "Hove (Brighton and Hove)"


def test_apply_source(tree):
    source = tree.find_source("test", "S1")
    annotations = Annotations()
    annotations.replace("source", source.id, "title", "1881 Census")
    annotations.replace("source", source.id, "search_link", "https://example.org/1881")
    annotations.apply_source(source)
    assert source.title == "1881 Census"
    assert source.search_link == "https://example.org/1881"


def test_apply_tree(tree):
    key = tree.find_person("test", "I1")
    annotations = Annotations()
    annotations.replace("tree", TREE_ID, "name", "Smith family")
    annotations.replace("tree", TREE_ID, "key_person", key.id)
    annotations.apply_tree(tree)
    assert tree.name == "Smith family"
    assert tree.key_person is key


def test_custom_registry(tree):
    registry = FieldRegistry({
        "person": {"olb": FieldSetter(replace=lambda p, v: setattr(p, "olb", v.upper()))},
    })
    annotations = Annotations(registry=registry)
    person = tree.find_person("test", "I1")
    annotations.replace("person", person.id, "olb", "born in hove")
    annotations.apply_person(person)
    assert person.olb == "BORN IN HOVE"
    with pytest.raises(UnknownFieldError):
        annotations.replace("person", person.id, "nickname", "Bert")


def test_registry_rejects_unknown_kind():
    with pytest.raises(ConfigurationError):
        FieldRegistry({"family": {}})


def test_save_and_load(tmp_path, tree):
    path = tmp_path / "annotations.json"
    annotations = Annotations()
    annotations.replace("person", "I2", "nickname", "Bert", comment="known as Bert")
    annotations.add("person", "I1", "tags", "soldier")
    annotations.replace("place", "P1", "latlong", "50.8279, -0.1688")
    save_annotations(path, annotations)

    doc = json.loads(path.read_text())
    assert [item["id"] for item in doc["person"]] == ["I1", "I2"]
    assert doc["person"][1]["comment"] == "known as Bert"

    reloaded = load_annotations(path)
    assert reloaded.to_dict() == annotations.to_dict()


def test_load_missing_file(tmp_path):
    assert len(load_annotations(tmp_path / "missing.json")) == 0


def test_load_unknown_field(tmp_path):
    path = tmp_path / "annotations.json"
    path.write_text(json.dumps({"person": [{"id": "I1", "replace": {"shoe_size": "9"}}]}))
    with pytest.raises(UnknownFieldError):
        load_annotations(path)


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"person": ["I1"]}',
        '{"person": [{"id": "I1", "replace": ["nickname"]}]}',
        '{"person": [{"id": "I1", "add": {"tags": [["soldier"]]}}]}',
        '{"place": [{"id": "P1", "replace": {"latlong": [50.8, -0.1]}}]}',
    ]
)
def test_load_malformed_file(tmp_path, content):
    path = tmp_path / "annotations.json"
    path.write_text(content)
    with pytest.raises(StoreError) as excinfo:
        load_annotations(path)
    assert excinfo.value.store == "annotations"


def test_load_converts_json_scalars(tmp_path, tree):
    person = tree.find_person("test", "I1")
    path = tmp_path / "annotations.json"
    path.write_text(json.dumps({
        "person": [{"id": person.id, "replace": {"redacted": True, "nickname": 7}, "add": {"tags": 1914}}],
    }))
    tree.annotations = load_annotations(path)
    entry = tree.annotations.entries["person"][person.id]
    assert entry.replace == {"nickname": "7", "redacted": "true"}
    assert entry.add == {"tags": ["1914"]}

    tree.generate(redact_living=False)
    assert person.redacted is True
