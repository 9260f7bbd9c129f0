"""
gender.py - Gender values and the kinship nouns that depend on them.

Module: family_graph.gender
"""
from __future__ import annotations

__all__ = ['Gender']

import enum
from typing import Optional


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"

    @classmethod
    def from_value(cls, value: Optional[str]) -> 'Gender':
        """Parse "male"/"m"/"female"/"f"; anything else is unknown."""
        v = (value or "").strip().lower()
        if v in ("male", "m"):
            return cls.MALE
        if v in ("female", "f"):
            return cls.FEMALE
        return cls.UNKNOWN

    def is_male(self) -> bool:
        return self is Gender.MALE

    def is_female(self) -> bool:
        return self is Gender.FEMALE

    def is_unknown(self) -> bool:
        return self is Gender.UNKNOWN

    def opposite(self) -> 'Gender':
        if self is Gender.MALE:
            return Gender.FEMALE
        if self is Gender.FEMALE:
            return Gender.MALE
        return Gender.UNKNOWN

    def _pick(self, male: str, female: str, other: str) -> str:
        if self is Gender.MALE:
            return male
        if self is Gender.FEMALE:
            return female
        return other

    def subject_pronoun(self) -> str:
        return self._pick("he", "she", "they")

    def possessive_pronoun(self) -> str:
        return self._pick("his", "her", "their")

    def relation_to_parent_noun(self) -> str:
        """This person is the ___ of their parent."""
        return self._pick("son", "daughter", "child")

    def relation_to_children_noun(self) -> str:
        """This person is the ___ of their child."""
        return self._pick("father", "mother", "parent")

    def relation_to_siblings_noun(self) -> str:
        return self._pick("brother", "sister", "sibling")

    def relation_to_spouse_noun(self) -> str:
        return self._pick("husband", "wife", "spouse")
