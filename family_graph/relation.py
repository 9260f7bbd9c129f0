"""
relation.py - Relationship between two people and its English name.

A Relation describes how the ``to_person`` is related to the ``from_person``
(usually the key person) in terms of a common ancestor and the number of
generations from each person up to that ancestor. People related only by
marriage carry the relation of the blood relative they married
(``closest_direct_relation``) and their own relation to that spouse
(``spouse_relation``).

Module: family_graph.relation
"""
from __future__ import annotations

__all__ = ['Relation']

from dataclasses import dataclass
from typing import Optional

from .person import Person

_ORDINALS = [
    "", "first", "second", "third", "fourth", "fifth", "sixth",
    "seventh", "eighth", "ninth", "tenth", "eleventh", "twelfth",
]

_REMOVALS = [
    "", "once", "twice", "three times", "four times", "five times",
    "six times", "seven times", "eight times", "nine times", "ten times",
]


def _same(a: Optional[Person], b: Optional[Person]) -> bool:
    if a is None or b is None:
        return False
    return a is b or a.same_as(b)


def _greats(generations: int, name: str) -> str:
    # generations counts from the person, so 2 is the grand- level
    if generations < 5:
        return "great " * (generations - 2) + name
    return f"{generations - 2}x great {name}"


@dataclass
class Relation:
    """
    How ``to_person`` is related to ``from_person``.

    Attributes:
        from_person (Person): The person the relation is measured from.
        to_person (Person): The related person.
        common_ancestor (Optional[Person]): Nearest shared ancestor, None for relations by marriage.
        from_generations (int): Generations from from_person up to the common ancestor.
        to_generations (int): Generations from to_person up to the common ancestor.
        closest_direct_relation (Optional[Relation]): For relations by marriage, the relation
            of the blood relative whose spouse to_person is.
        spouse_relation (Optional[Relation]): For relations by marriage, the relation of
            to_person to that spouse.
    """
    from_person: Person
    to_person: Person
    common_ancestor: Optional[Person] = None
    from_generations: int = 0
    to_generations: int = 0
    closest_direct_relation: Optional['Relation'] = None
    spouse_relation: Optional['Relation'] = None

    @classmethod
    def self_relation(cls, person: Person) -> 'Relation':
        return cls(from_person=person, to_person=person, common_ancestor=person)

    def extend_to_parent(self, parent: Person) -> 'Relation':
        """Relation from the same person to a parent of to_person."""
        if _same(self.to_person, self.common_ancestor):
            # walking up the direct line moves the common ancestor
            return Relation(
                from_person=self.from_person,
                to_person=parent,
                common_ancestor=parent,
                from_generations=self.from_generations + 1,
                to_generations=0,
            )
        return Relation(
            from_person=self.from_person,
            to_person=parent,
            common_ancestor=self.common_ancestor,
            from_generations=self.from_generations,
            to_generations=self.to_generations - 1,
        )

    def extend_to_child(self, child: Person) -> 'Relation':
        """Relation from the same person to a child of to_person."""
        if self.common_ancestor is None and self.closest_direct_relation is not None and self.spouse_relation is not None:
            return Relation(
                from_person=self.from_person,
                to_person=child,
                closest_direct_relation=self.closest_direct_relation,
                spouse_relation=self.spouse_relation.extend_to_child(child),
            )
        return Relation(
            from_person=self.from_person,
            to_person=child,
            common_ancestor=self.common_ancestor,
            from_generations=self.from_generations,
            to_generations=self.to_generations + 1,
        )

    def extend_to_spouse(self, spouse: Person) -> 'Relation':
        """Relation by marriage to the spouse of to_person."""
        return Relation(
            from_person=self.from_person,
            to_person=spouse,
            from_generations=self.from_generations,
            to_generations=self.to_generations,
            closest_direct_relation=self,
            spouse_relation=Relation.self_relation(spouse),
        )

    def is_self(self) -> bool:
        return _same(self.to_person, self.from_person)

    def is_direct_ancestor(self) -> bool:
        return _same(self.to_person, self.common_ancestor)

    def is_parent(self) -> bool:
        return self.is_direct_ancestor() and self.from_generations == 1

    def is_direct_descendant(self) -> bool:
        return _same(self.from_person, self.common_ancestor)

    def is_child(self) -> bool:
        return self.is_direct_descendant() and self.to_generations == 1

    def has_common_ancestor(self) -> bool:
        return self.common_ancestor is not None and not self.common_ancestor.is_unknown()

    def is_by_marriage(self) -> bool:
        return self.common_ancestor is None and self.closest_direct_relation is not None

    def distance(self) -> int:
        """Number of parent, child or spouse steps between the two people."""
        if self.is_by_marriage():
            return self.closest_direct_relation.distance() + 1
        return self.from_generations + self.to_generations

    def name(self) -> str:
        """
        English name of the relation, read as "to_person is the <name> of from_person".

        Returns:
            str: e.g. "grandmother", "first cousin twice removed", "wife of the grandfather".
        """
        if self.common_ancestor is not None:
            return self._blood_name()
        if self.closest_direct_relation is not None and self.spouse_relation is not None:
            return self._marriage_name()
        return "unknown relation"

    def _blood_name(self) -> str:
        gender = self.to_person.gender
        f, t = self.from_generations, self.to_generations

        if self.is_direct_ancestor():
            if f == 0:
                return "self"
            noun = gender.relation_to_children_noun()
            if f == 1:
                return noun
            return _greats(f, "grand" + noun)

        if self.is_direct_descendant():
            noun = gender.relation_to_parent_noun()
            if t == 1:
                return noun
            return _greats(t, "grand" + noun)

        if f == 1 and t == 1:
            return gender.relation_to_siblings_noun()

        if f > 1 and t == 1:
            noun = {"male": "uncle", "female": "aunt"}.get(gender.value, "uncle or aunt")
            return "great " * (f - 2) + noun

        if f == 1 and t > 1:
            noun = {"male": "nephew", "female": "niece"}.get(gender.value, "nephew or niece")
            return "great " * (t - 2) + noun

        degree = min(f, t) - 1
        removal = abs(f - t)
        name = "cousin"
        if degree < len(_ORDINALS):
            name = f"{_ORDINALS[degree]} cousin"
        else:
            name = f"{degree}th cousin"
        if removal:
            times = _REMOVALS[removal] if removal < len(_REMOVALS) else f"{removal} times"
            name += f" {times} removed"
        return name

    def _marriage_name(self) -> str:
        gender = self.to_person.gender
        closest = self.closest_direct_relation
        rel = ""
        if self.spouse_relation.is_self():
            if closest.is_parent():
                return {"male": "step-father", "female": "step-mother"}.get(gender.value, "step-parent")
            rel = gender.relation_to_spouse_noun()
        elif self.spouse_relation.is_parent():
            rel = {"male": "father-in-law", "female": "mother-in-law"}.get(gender.value, "parent-in-law")
        elif self.spouse_relation.is_child():
            rel = {"male": "stepson", "female": "stepdaughter"}.get(gender.value, "stepchild")

        if not rel:
            return "unknown relation"
        if closest.is_self():
            return rel
        return f"{rel} of the {closest.name()}"
