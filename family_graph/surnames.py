"""
surnames.py - Groups of surname spellings that refer to the same family name.

Old records spell surnames inconsistently ("Smyth", "Smythe", "Smith").
A surname group names one canonical spelling and the variants that should be
counted under it.

Module: family_graph.surnames
"""
from __future__ import annotations

__all__ = ['SurnameGroup', 'SurnameGroups', 'load_surname_groups']

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import StoreError

logger = logging.getLogger(__name__)

STORE_NAME = "surname groups"


@dataclass
class SurnameGroup:
    surname: str
    variants: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.surname} ({', '.join(self.variants)})"


class SurnameGroups:
    """
    Variant surname -> canonical surname lookup.

    Lookups ignore case; a surname that is in no group is its own canonical form.
    """

    def __init__(self) -> None:
        self.groups: Dict[str, SurnameGroup] = {}
        self._lookup: Dict[str, SurnameGroup] = {}

    def __len__(self) -> int:
        return len(self.groups)

    def add_group(self, surname: str, variants: List[str]) -> SurnameGroup:
        group = self.groups.get(surname)
        if group is None:
            group = SurnameGroup(surname)
            self.groups[surname] = group
            self._lookup[surname.lower()] = group
        for variant in variants:
            if variant == surname or variant in group.variants:
                continue
            existing = self._lookup.get(variant.lower())
            if existing is not None and existing is not group:
                logger.warning(f"Surname {variant!r} is in groups {existing.surname!r} and {surname!r}, keeping {existing.surname!r}")
                continue
            group.variants.append(variant)
            self._lookup[variant.lower()] = group
        group.variants.sort()
        return group

    def canonical_surname(self, name: str) -> str:
        group = self._lookup.get(name.lower())
        return group.surname if group is not None else name

    def group_for(self, name: str) -> Optional[SurnameGroup]:
        return self._lookup.get(name.lower())

    def to_dict(self) -> Dict[str, Any]:
        return {'surname_groups': {s: list(self.groups[s].variants) for s in sorted(self.groups)}}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'SurnameGroups':
        if not isinstance(d, dict) or not isinstance(d.get('surname_groups', {}), dict):
            raise ValueError("surname groups document must map 'surname_groups' to an object")
        sg = cls()
        for surname, variants in d.get('surname_groups', {}).items():
            if not isinstance(variants, list):
                raise ValueError(f"variants of {surname!r} must be a list")
            sg.add_group(surname, variants)
        return sg


def load_surname_groups(path: Optional[Union[str, Path]]) -> SurnameGroups:
    """
    Read surname groups from a JSON file.

    A missing file (or no path) yields no groups.

    Raises:
        StoreError: If the file exists but cannot be read or parsed.
    """
    if not path or not os.path.exists(path):
        return SurnameGroups()
    logger.info(f'Reading surname groups: {path}')
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return SurnameGroups.from_dict(json.load(f))
    except (OSError, ValueError) as e:
        raise StoreError(STORE_NAME, f"read failed: {e}", path) from e
