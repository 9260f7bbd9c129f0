"""
Relationship labelling over a small extended family:

    GF + GM
      |-- F + M
      |     |-- K (key) + W
      |     |     |-- S
      |     |-- B
      |-- U + A
            |-- C
                 |-- CC
"""
import pytest

from family_graph.gender import Gender
from family_graph.person import unknown_person
from family_graph.relationship import label_relations
from family_graph.tree import Tree

EXPECTED_NAMES = {
    "K": "self",
    "F": "father",
    "M": "mother",
    "GF": "grandfather",
    "GM": "grandmother",
    "S": "son",
    "W": "wife",
    "B": "brother",
    "U": "uncle",
    "A": "wife of the uncle",
    "C": "first cousin",
    "CC": "first cousin once removed",
}


def build_family(reverse_lists=False):
    tree = Tree()
    people = {}

    def add(local_id, gender, father=None, mother=None):
        p = tree.find_person("test", local_id)
        p.full_name = local_id
        p.gender = gender
        for parent, attr in ((father, 'father'), (mother, 'mother')):
            if parent is not None:
                setattr(p, attr, parent)
                parent.children.append(p)
        people[local_id] = p
        return p

    def wed(a, b):
        a.spouses.append(b)
        b.spouses.append(a)

    gf = add("GF", Gender.MALE)
    gm = add("GM", Gender.FEMALE)
    wed(gf, gm)
    f = add("F", Gender.MALE, gf, gm)
    u = add("U", Gender.MALE, gf, gm)
    m = add("M", Gender.FEMALE)
    wed(f, m)
    a = add("A", Gender.FEMALE)
    wed(u, a)
    k = add("K", Gender.MALE, f, m)
    add("B", Gender.MALE, f, m)
    w = add("W", Gender.FEMALE)
    wed(k, w)
    add("S", Gender.MALE, k, w)
    c = add("C", Gender.FEMALE, u, a)
    add("CC", Gender.MALE, None, c)

    if reverse_lists:
        for p in people.values():
            p.children.reverse()
            p.spouses.reverse()
    return people


@pytest.mark.parametrize("reverse_lists", [False, True])
def test_relation_names(reverse_lists):
    people = build_family(reverse_lists)
    labelled = label_relations(people["K"])

    assert len(labelled) == len(EXPECTED_NAMES)
    assert labelled[0] is people["K"]
    names = {local_id: p.relation_to_key_person.name() for local_id, p in people.items()}
    assert names == EXPECTED_NAMES


def test_generations():
    people = build_family()
    label_relations(people["K"])

    cousin = people["C"].relation_to_key_person
    assert cousin.common_ancestor is people["GF"]
    assert (cousin.from_generations, cousin.to_generations) == (2, 2)

    second = people["CC"].relation_to_key_person
    assert (second.from_generations, second.to_generations) == (2, 3)

    grandmother = people["GM"].relation_to_key_person
    assert grandmother.is_direct_ancestor()
    assert grandmother.from_generations == 2


def test_labelling_is_deterministic():
    first = build_family()
    second = build_family()
    order_first = [p.id for p in label_relations(first["K"])]
    order_second = [p.id for p in label_relations(second["K"])]
    assert order_first == order_second


def test_relations_never_overwritten():
    people = build_family()
    label_relations(people["K"])
    relation = people["U"].relation_to_key_person

    assert label_relations(people["K"]) == []
    assert people["U"].relation_to_key_person is relation


def test_key_person_keeps_name_when_redacted():
    people = build_family()
    label_relations(people["K"])
    assert people["K"].redaction_keeps_name
    assert not people["F"].redaction_keeps_name


def test_unrelated_people_not_labelled():
    people = build_family()
    stranger = Tree().find_person("other", "X")
    label_relations(people["K"])
    assert stranger.relation_to_key_person is None


def test_unknown_key_person():
    assert label_relations(unknown_person()) == []
