import pytest

from family_graph.gender import Gender
from family_graph.person import Person
from family_graph.relation import Relation


def _person(id, gender=Gender.UNKNOWN):
    p = Person(id)
    p.gender = gender
    return p


@pytest.fixture
def key():
    return _person("K", Gender.MALE)


def _blood(key, gender, from_generations, to_generations):
    return Relation(
        from_person=key,
        to_person=_person("X", gender),
        common_ancestor=_person("A"),
        from_generations=from_generations,
        to_generations=to_generations,
    )


def _ancestor(key, gender, generations):
    to_person = _person("X", gender)
    return Relation(from_person=key, to_person=to_person, common_ancestor=to_person,
                    from_generations=generations)


def _descendant(key, gender, generations):
    return Relation(from_person=key, to_person=_person("X", gender), common_ancestor=key,
                    to_generations=generations)


def test_self(key):
    rel = Relation.self_relation(key)
    assert rel.name() == "self"
    assert rel.is_self()
    assert rel.distance() == 0


@pytest.mark.parametrize(
    "gender,generations,name",
    [
        (Gender.MALE, 1, "father"),
        (Gender.FEMALE, 1, "mother"),
        (Gender.UNKNOWN, 1, "parent"),
        (Gender.FEMALE, 2, "grandmother"),
        (Gender.MALE, 3, "great grandfather"),
        (Gender.MALE, 4, "great great grandfather"),
        (Gender.FEMALE, 5, "3x great grandmother"),
    ]
)
def test_ancestor_names(key, gender, generations, name):
    assert _ancestor(key, gender, generations).name() == name


@pytest.mark.parametrize(
    "gender,generations,name",
    [
        (Gender.MALE, 1, "son"),
        (Gender.FEMALE, 1, "daughter"),
        (Gender.UNKNOWN, 2, "grandchild"),
        (Gender.MALE, 3, "great grandson"),
    ]
)
def test_descendant_names(key, gender, generations, name):
    assert _descendant(key, gender, generations).name() == name


@pytest.mark.parametrize(
    "gender,f,t,name",
    [
        (Gender.MALE, 1, 1, "brother"),
        (Gender.FEMALE, 1, 1, "sister"),
        (Gender.UNKNOWN, 1, 1, "sibling"),
        (Gender.MALE, 2, 1, "uncle"),
        (Gender.FEMALE, 3, 1, "great aunt"),
        (Gender.FEMALE, 1, 2, "niece"),
        (Gender.MALE, 1, 3, "great nephew"),
        (Gender.MALE, 2, 2, "first cousin"),
        (Gender.MALE, 3, 3, "second cousin"),
        (Gender.MALE, 2, 3, "first cousin once removed"),
        (Gender.MALE, 4, 2, "first cousin twice removed"),
        (Gender.MALE, 4, 5, "third cousin once removed"),
    ]
)
def test_collateral_names(key, gender, f, t, name):
    assert _blood(key, gender, f, t).name() == name


def test_sibling_noun_uses_relative_gender():
    sister = _person("S", Gender.FEMALE)
    rel = Relation(from_person=_person("K", Gender.MALE), to_person=sister,
                   common_ancestor=_person("A"), from_generations=1, to_generations=1)
    assert rel.name() == "sister"


def test_extend_up_and_down(key):
    father = _person("F", Gender.MALE)
    grandfather = _person("GF", Gender.MALE)
    uncle = _person("U", Gender.MALE)
    cousin = _person("C", Gender.FEMALE)

    to_father = Relation.self_relation(key).extend_to_parent(father)
    to_grandfather = to_father.extend_to_parent(grandfather)
    to_uncle = to_grandfather.extend_to_child(uncle)
    to_cousin = to_uncle.extend_to_child(cousin)

    assert to_father.name() == "father"
    assert to_grandfather.name() == "grandfather"
    assert to_uncle.name() == "uncle"
    assert to_cousin.name() == "first cousin"
    assert to_cousin.common_ancestor is grandfather
    assert (to_cousin.from_generations, to_cousin.to_generations) == (2, 2)
    assert to_cousin.distance() == 4


def test_spouse_names(key):
    wife = _person("W", Gender.FEMALE)
    assert Relation.self_relation(key).extend_to_spouse(wife).name() == "wife"

    uncle = _blood(key, Gender.MALE, 2, 1)
    to_aunt = uncle.extend_to_spouse(_person("A", Gender.FEMALE))
    assert to_aunt.name() == "wife of the uncle"
    assert to_aunt.is_by_marriage()
    assert to_aunt.distance() == 4


def test_step_parent(key):
    father = _person("F", Gender.MALE)
    to_father = Relation.self_relation(key).extend_to_parent(father)
    assert to_father.extend_to_spouse(_person("S", Gender.FEMALE)).name() == "step-mother"


def test_in_laws_and_step_children(key):
    wife = _person("W", Gender.FEMALE)
    to_wife = Relation.self_relation(key).extend_to_spouse(wife)

    father_in_law = Relation(
        from_person=key,
        to_person=_person("FL", Gender.MALE),
        closest_direct_relation=to_wife.closest_direct_relation,
        spouse_relation=to_wife.spouse_relation.extend_to_parent(_person("FL", Gender.MALE)),
    )
    assert father_in_law.name() == "father-in-law"

    stepson = to_wife.extend_to_child(_person("SS", Gender.MALE))
    assert stepson.name() == "stepson"


def test_unknown_relation(key):
    assert Relation(from_person=key, to_person=_person("X")).name() == "unknown relation"
