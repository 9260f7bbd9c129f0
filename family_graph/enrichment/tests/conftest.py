"""
Pytest fixtures for generation pipeline tests.
"""
from __future__ import annotations

from types import SimpleNamespace
from typing import Optional, Union

import pytest

from family_graph.dates import Date, parse_date
from family_graph.enrichment.config import GenerationConfig
from family_graph.gender import Gender
from family_graph.life_event import (
    BaptismEvent,
    BirthEvent,
    BurialEvent,
    DeathEvent,
    MarriageEvent,
)
from family_graph.person import Person
from family_graph.tree import Tree

DateLike = Optional[Union[str, Date]]


def _date(value: DateLike) -> Optional[Date]:
    if value is None or isinstance(value, Date):
        return value
    return parse_date(value)


@pytest.fixture
def tree():
    """An empty tree."""
    return Tree()


@pytest.fixture
def config():
    """Packaged configuration pinned to 2024 so results do not depend on today's date."""
    return GenerationConfig.from_dict({"current_year": 2024})


@pytest.fixture
def make_person(tree):
    """Create a person in the tree with optional vital events and parents."""
    def _create_person(local_id: str, full_name: str = "Test Person", gender: Gender = Gender.UNKNOWN,
                       birth: DateLike = None, baptism: DateLike = None,
                       death: DateLike = None, burial: DateLike = None,
                       father: Optional[Person] = None, mother: Optional[Person] = None,
                       death_detail: str = "") -> Person:
        person = tree.find_person("test", local_id)
        given, _, family = full_name.rpartition(" ")
        person.full_name = full_name
        person.given_name = given or full_name
        person.family_name = family if given else ""
        person.sort_name = f"{person.family_name}, {person.given_name}"
        person.gender = gender

        for event_class, value in (
            (BirthEvent, birth),
            (BaptismEvent, baptism),
            (DeathEvent, death),
            (BurialEvent, burial),
        ):
            if value is not None:
                detail = death_detail if event_class is DeathEvent else ""
                person.add_event(event_class(principal=person, date=_date(value), detail=detail))

        if father is not None:
            person.father = father
        if mother is not None:
            person.mother = mother
        return person

    return _create_person


@pytest.fixture
def marry():
    """Record a marriage event on both spouses' timelines."""
    def _marry(husband: Person, wife: Person, date: DateLike = None) -> MarriageEvent:
        ev = MarriageEvent(husband=husband, wife=wife, date=_date(date))
        husband.add_event(ev)
        wife.add_event(ev)
        return ev

    return _marry


@pytest.fixture
def small_tree(tree, make_person, marry):
    """
    Key person with parents, paternal grandparents, a sister and a son.

        grandfather (1890-1960) + grandmother (1895-1970)
                      |
        father (1920-1990) + mother (1925-2000)
                      |
            key (1950) , sister (1952)
                      |
                 son (1980)
    """
    grandfather = make_person("GF", "George Smith", Gender.MALE, birth="1890", death="1960")
    grandmother = make_person("GM", "Grace Jones", Gender.FEMALE, birth="1895", death="1970")
    father = make_person("F", "Frank Smith", Gender.MALE, birth="1920", death="1990",
                         father=grandfather, mother=grandmother)
    mother = make_person("M", "Mary Brown", Gender.FEMALE, birth="1925", death="2000")
    key = make_person("K", "Keith Smith", Gender.MALE, birth="1950", father=father, mother=mother)
    sister = make_person("S", "Sarah Smith", Gender.FEMALE, birth="1952", father=father, mother=mother)
    son = make_person("C", "Colin Smith", Gender.MALE, birth="1980", father=key)
    marry(grandfather, grandmother, "1915")
    marry(father, mother, "1948")
    tree.set_key_person(key)
    return SimpleNamespace(
        tree=tree,
        grandfather=grandfather,
        grandmother=grandmother,
        father=father,
        mother=mother,
        key=key,
        sister=sister,
        son=son,
    )
