"""
person.py - Person model for the family graph.

This module provides the Person class. A person is identified by a canonical
id and carries name variants, a timeline of events, the best birth-like and
death-like events selected from it, and everything the generation pipeline
derives (vital years, alive status, inferences, anomalies, relation to the key
person).

Father and mother are never None: a missing parent is the shared unknown
person returned by ``unknown_person()``.

Module: family_graph.person
"""
from __future__ import annotations

__all__ = ['Person', 'unknown_person', 'UNKNOWN_PERSON_ID', 'UNKNOWN_NAME']

import logging
from typing import TYPE_CHECKING, List, Optional

from .enrichment.model import Anomaly, Fact, Inference, Occupation
from .gender import Gender

if TYPE_CHECKING:
    from .family import Family
    from .life_event import TimelineEvent
    from .relation import Relation

logger = logging.getLogger(__name__)

UNKNOWN_PERSON_ID = "unknown"
UNKNOWN_NAME = "unknown person"

_UNKNOWN_PERSON: Optional["Person"] = None


class Person:
    """
    Represents a person in the family graph.

    Attributes:
        id (str): Canonical identifier.
        full_name (str): Preferred full name.
        given_name (str): Preferred given name(s).
        family_name (str): Preferred family name.
        nickname (str): Nickname, if any.
        familiar_name (str): Name used in narrative (nickname or first given name).
        familiar_full_name (str): Familiar name plus family name.
        sort_name (str): Name used for ordering lists of people.
        unique_name (str): Full name qualified by vital years.
        olb (str): One line biography.
        gender (Gender): Resolved gender.
        vital_years (str): Summary such as "1850-1921".
        possibly_alive (bool): True if the person may still be living.
        redacted (bool): True if personal details have been removed.
        redaction_keeps_name (bool): Keep name fields when redacting (key person).
        father (Person): Father, or the unknown person.
        mother (Person): Mother, or the unknown person.
        children (List[Person]): Children, rebuilt on each generation run.
        spouses (List[Person]): Spouses, rebuilt on each generation run.
        families (List[Family]): Families in which this person is a parent.
        timeline (List[TimelineEvent]): Events involving this person.
        best_birthlike_event (Optional[TimelineEvent]): Best evidence of birth.
        best_deathlike_event (Optional[TimelineEvent]): Best evidence of death.
        occupations (List[Occupation]): Occupation records.
        primary_occupation (str): Summary of the single known occupation.
        facts (List[Fact]): General facts about the person.
        inferences (List[Inference]): Values derived by the pipeline.
        anomalies (List[Anomaly]): Data quality notes.
        cause_of_death (str): Inferred mode of death, if any.
        relation_to_key_person (Optional[Relation]): Set once by the relationship labeler.
        tags (List[str]): Free-form tags.
        links (List[str]): External links.
    """
    __slots__ = [
        'id',
        'full_name', 'given_name', 'family_name', 'nickname',
        'familiar_name', 'familiar_full_name', 'sort_name', 'unique_name',
        'olb', 'gender', 'vital_years', 'possibly_alive',
        'redacted', 'redaction_keeps_name',
        'father', 'mother', 'children', 'spouses', 'families',
        'timeline', 'best_birthlike_event', 'best_deathlike_event',
        'occupations', 'primary_occupation', 'facts', 'inferences', 'anomalies',
        'cause_of_death', 'relation_to_key_person', 'tags', 'links',
    ]

    def __init__(self, id: str):
        self.id: str = id

        self.full_name: str = UNKNOWN_NAME
        self.given_name: str = UNKNOWN_NAME
        self.family_name: str = UNKNOWN_NAME
        self.nickname: str = ""
        self.familiar_name: str = UNKNOWN_NAME
        self.familiar_full_name: str = UNKNOWN_NAME
        self.sort_name: str = UNKNOWN_NAME
        self.unique_name: str = UNKNOWN_NAME
        self.olb: str = ""

        self.gender: Gender = Gender.UNKNOWN
        self.vital_years: str = ""
        self.possibly_alive: bool = False
        self.redacted: bool = False
        self.redaction_keeps_name: bool = False

        # the sentinel is its own parent
        self.father: Person = _UNKNOWN_PERSON or self
        self.mother: Person = _UNKNOWN_PERSON or self
        self.children: List[Person] = []
        self.spouses: List[Person] = []
        self.families: List['Family'] = []

        self.timeline: List['TimelineEvent'] = []
        self.best_birthlike_event: Optional['TimelineEvent'] = None
        self.best_deathlike_event: Optional['TimelineEvent'] = None

        self.occupations: List[Occupation] = []
        self.primary_occupation: str = ""
        self.facts: List[Fact] = []
        self.inferences: List[Inference] = []
        self.anomalies: List[Anomaly] = []
        self.cause_of_death: str = ""

        self.relation_to_key_person: Optional['Relation'] = None
        self.tags: List[str] = []
        self.links: List[str] = []

    def __str__(self) -> str:
        return f"Person(id={self.id}, name={self.full_name})"

    def __repr__(self) -> str:
        return f"[ {self.id} : {self.full_name} ({self.vital_years}) ]"

    def is_unknown(self) -> bool:
        return self.id == UNKNOWN_PERSON_ID

    def same_as(self, other: Optional['Person']) -> bool:
        """Identity comparison by canonical id; the unknown person is never the same as anyone."""
        if other is None or self.is_unknown() or other.is_unknown():
            return False
        return self.id == other.id

    def add_anomaly(self, category: str, text: str, context: str = "") -> None:
        anomaly = Anomaly(category=category, text=text, context=context)
        self.anomalies.append(anomaly)
        logger.debug(f"Person {self.id}: {category} anomaly: {text}")

    def add_inference(self, inference: Inference) -> None:
        self.inferences.append(inference)
        logger.debug(f"Person {self.id}: inferred {inference.type} {inference.value}: {inference.reason}")

    def add_event(self, event: 'TimelineEvent') -> None:
        self.timeline.append(event)

    def birth_year(self) -> Optional[int]:
        """Year of the best birth-like event, if its date is known."""
        if self.best_birthlike_event is None:
            return None
        return self.best_birthlike_event.date.year()

    def death_year(self) -> Optional[int]:
        """Year of the best death-like event, if its date is known."""
        if self.best_deathlike_event is None:
            return None
        return self.best_deathlike_event.date.year()

    def age_at_death(self) -> Optional[int]:
        born, died = self.birth_year(), self.death_year()
        if born is None or died is None:
            return None
        return died - born


_UNKNOWN_PERSON = Person(UNKNOWN_PERSON_ID)


def unknown_person() -> Person:
    """Shared sentinel used wherever a parent or spouse is not known."""
    return _UNKNOWN_PERSON
