"""
identity_map.py - Canonical identifier resolution for people and sources.

Maps a (scope, local id) pair, where the scope is usually a source file, to a
stable canonical identifier. Canonical identifiers may be merged by recording
an alias; aliases are followed at lookup time so earlier mappings never need
rewriting.

Module: family_graph.identity_map
"""
from __future__ import annotations

__all__ = ['IdentityMap', 'load_identity_map', 'save_identity_map']

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import IdentityError, StoreError
from .identifier import new_id

logger = logging.getLogger(__name__)

STORE_NAME = "identity map"


class IdentityMap:
    """
    Scope-keyed table of local id to canonical id mappings plus an alias table.

    Attributes:
        scopes (Dict[str, Dict[str, str]]): scope -> {local id: generated canonical id}.
        replacements (Dict[str, str]): alias -> canonical id it has been merged into.
    """
    __slots__ = ['scopes', 'replacements']

    def __init__(self) -> None:
        self.scopes: Dict[str, Dict[str, str]] = {}
        self.replacements: Dict[str, str] = {}

    def resolve(self, scope: str, local_id: str) -> str:
        """
        Return the canonical id for a scoped identifier, creating it on first use.

        Args:
            scope (str): Source scope, e.g. a file identifier.
            local_id (str): Identifier local to that scope.

        Returns:
            str: Canonical identifier with any aliases applied.
        """
        mappings = self.scopes.setdefault(scope, {})
        canonical = mappings.get(local_id)
        if canonical is None:
            canonical = new_id(scope, local_id)
            mappings[local_id] = canonical
        return self.canonical(canonical)

    def canonical(self, identifier: str) -> str:
        """Follow the alias chain for an identifier."""
        seen = {identifier}
        while identifier in self.replacements:
            identifier = self.replacements[identifier]
            if identifier in seen:
                raise IdentityError(f"alias cycle involving {identifier}")
            seen.add(identifier)
        return identifier

    def add_alias(self, alias: str, canonical: str) -> None:
        """
        Merge one canonical id into another.

        Args:
            alias (str): Identifier that should no longer be used.
            canonical (str): Identifier that lookups of alias should return.

        Raises:
            IdentityError: If the merge would introduce a cycle.
        """
        if alias == canonical:
            return
        if self.canonical(canonical) == alias:
            raise IdentityError(f"cannot alias {alias} to {canonical}: would create a cycle")
        self.replacements[alias] = canonical
        logger.debug("aliased %s to %s", alias, canonical)

    def __len__(self) -> int:
        return sum(len(m) for m in self.scopes.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'scopes': {
                scope: [
                    {'scopeid': scope_id, 'id': mappings[scope_id]}
                    for scope_id in sorted(mappings)
                ]
                for scope, mappings in sorted(self.scopes.items())
            },
            'replace': dict(sorted(self.replacements.items())),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'IdentityMap':
        """
        Build an identity map from its persisted form.

        Raises:
            ValueError: If the document does not have the expected shape.
        """
        if not isinstance(d, dict):
            raise ValueError("identity map document must be an object")
        scopes = d.get('scopes') or {}
        if not isinstance(scopes, dict):
            raise ValueError("'scopes' must be an object")
        m = cls()
        for scope, mappings in scopes.items():
            sm: Dict[str, str] = {}
            for mapping in mappings or []:
                try:
                    sm[mapping['scopeid']] = mapping['id']
                except (KeyError, TypeError) as e:
                    raise ValueError(f"malformed mapping in scope {scope!r}: {mapping!r}") from e
            m.scopes[scope] = sm
        replace = d.get('replace') or {}
        if not isinstance(replace, dict):
            raise ValueError("'replace' must be an object")
        m.replacements = dict(replace)
        for alias in m.replacements:
            try:
                m.canonical(alias)
            except IdentityError as e:
                raise ValueError(str(e)) from e
        return m


def load_identity_map(path: Optional[Union[str, Path]]) -> IdentityMap:
    """
    Read an identity map from a JSON file.

    A missing file (or no path) yields an empty map.

    Raises:
        StoreError: If the file exists but cannot be read or decoded.
    """
    if not path or not os.path.exists(path):
        logger.info(f'No identity map file found: {path}')
        return IdentityMap()
    logger.info(f'Reading identity map: {path}')
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return IdentityMap.from_dict(json.load(f))
    except (OSError, ValueError) as e:
        raise StoreError(STORE_NAME, f"read failed: {e}", path) from e


def save_identity_map(path: Optional[Union[str, Path]], identity_map: IdentityMap) -> None:
    """
    Write an identity map as JSON, keyed and sorted for stable diffs.

    Raises:
        StoreError: If the file cannot be written.
    """
    if not path:
        return
    logger.info(f'Writing identity map: {path}')
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(identity_map.to_dict(), f, indent=2, sort_keys=True)
    except OSError as e:
        raise StoreError(STORE_NAME, f"write failed: {e}", path) from e
