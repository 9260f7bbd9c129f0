"""
family.py - Family units formed by a pair of parents and their children.

Module: family_graph.family
"""
from __future__ import annotations

__all__ = ['Family', 'FamilyBond', 'FamilyEndReason']

import enum
from typing import TYPE_CHECKING, List, Optional

from .person import Person, unknown_person

if TYPE_CHECKING:
    from .dates import Date
    from .life_event import TimelineEvent


class FamilyBond(str, enum.Enum):
    UNKNOWN = "unknown"
    MARRIED = "married"
    UNMARRIED = "unmarried"
    LIKELY_MARRIED = "likely married"
    LIKELY_UNMARRIED = "likely unmarried"


class FamilyEndReason(str, enum.Enum):
    UNKNOWN = "unknown"
    DEATH = "death"
    DIVORCE = "divorce"
    ANNULMENT = "annulment"


class Family:
    """
    A family unit: father, mother (either may be the unknown person) and children.

    Attributes:
        id (str): Deterministic id derived from the parents' ids.
        father (Person): Father, or the unknown person.
        mother (Person): Mother, or the unknown person.
        children (List[Person]): Children of this couple.
        bond (FamilyBond): Kind of bond between the parents.
        timeline (List[TimelineEvent]): Events of the family unit.
        best_start_event (Optional[TimelineEvent]): Event that started the family, e.g. a marriage.
        best_start_date (Optional[Date]): Best estimate of when the family started.
        best_end_event (Optional[TimelineEvent]): Event that ended the family.
        best_end_date (Optional[Date]): Best estimate of when the family ended.
        end_reason (FamilyEndReason): Why the family ended.
        end_death_person (Optional[Person]): Parent whose death ended the family.
    """
    __slots__ = [
        'id', 'father', 'mother', 'children', 'bond', 'timeline',
        'best_start_event', 'best_start_date', 'best_end_event', 'best_end_date',
        'end_reason', 'end_death_person', 'tags',
    ]

    def __init__(self, id: str, father: Optional[Person] = None, mother: Optional[Person] = None):
        self.id = id
        self.father: Person = father if father is not None else unknown_person()
        self.mother: Person = mother if mother is not None else unknown_person()
        self.children: List[Person] = []
        self.bond: FamilyBond = FamilyBond.UNKNOWN
        self.timeline: List['TimelineEvent'] = []
        self.best_start_event: Optional['TimelineEvent'] = None
        self.best_start_date: Optional['Date'] = None
        self.best_end_event: Optional['TimelineEvent'] = None
        self.best_end_date: Optional['Date'] = None
        self.end_reason: FamilyEndReason = FamilyEndReason.UNKNOWN
        self.end_death_person: Optional[Person] = None
        self.tags: List[str] = []

    def __repr__(self) -> str:
        return f"Family(id={self.id!r}, father={self.father.full_name!r}, mother={self.mother.full_name!r})"

    def same_as(self, other: Optional['Family']) -> bool:
        return other is not None and (self is other or self.id == other.id)

    def other_parent(self, person: Person) -> Person:
        if person.same_as(self.father):
            return self.mother
        if person.same_as(self.mother):
            return self.father
        return unknown_person()

    def has_child(self, person: Person) -> bool:
        return any(c.same_as(person) for c in self.children)

    def add_child(self, person: Person) -> None:
        if not self.has_child(person):
            self.children.append(person)

    def preferred_unique_name(self) -> str:
        return f"{self.father.unique_name} and {self.mother.unique_name}"
