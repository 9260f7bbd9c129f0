"""
gazetteer.py - Place name canonicalization cache.

The gazetteer maps raw and normalized place names to stable place identifiers
and records each place's parent so that "Hove, Sussex, England" and
"hove ,sussex,,England" resolve to the same place with the same hierarchy.
The table is persisted between runs because place ids are embedded in
external references.

Module: family_graph.gazetteer
"""
from __future__ import annotations

__all__ = ['Gazetteer', 'GazetteerPlace', 'load_gazetteer', 'save_gazetteer']

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from rapidfuzz import fuzz, process

from .errors import InvalidPlaceNameError, StoreError
from .identifier import new_id
from .place import PlaceKind
from .place_name import CountryNames, normalize_place_name, parse_hierarchy, split_place_name

logger = logging.getLogger(__name__)

STORE_NAME = "gazetteer"


@dataclass
class GazetteerPlace:
    """
    The gazetteer's record of a place.

    Attributes:
        id (str): Canonical place id.
        idsrc (str): Normalized hierarchical name (plus kind) the id was generated from.
        name (str): Display name of the place without its hierarchy.
        kind (PlaceKind): Kind of place, unknown if not recognised.
        parent_id (str): Id of the enclosing place, empty for the broadest level.
    """
    id: str
    idsrc: str
    name: str
    kind: PlaceKind = PlaceKind.UNKNOWN
    parent_id: str = ""

    @classmethod
    def from_dict(cls, id: str, d: Dict[str, Any]) -> 'GazetteerPlace':
        if not isinstance(d, dict) or 'idsrc' not in d:
            raise ValueError(f"malformed gazetteer place {id!r}")
        return cls(
            id=id,
            idsrc=d['idsrc'],
            name=d.get('name', ''),
            kind=PlaceKind.from_value(d.get('kind')),
            parent_id=d.get('parentid', '') or '',
        )

    def as_dict(self, matches: List[str]) -> Dict[str, Any]:
        d: Dict[str, Any] = {'name': self.name, 'idsrc': self.idsrc}
        if self.kind is not PlaceKind.UNKNOWN:
            d['kind'] = self.kind.value
        if self.parent_id:
            d['parentid'] = self.parent_id
        if matches:
            d['matches'] = matches
        return d


class Gazetteer:
    """
    Name to place identity and hierarchy cache.

    Attributes:
        places (Dict[str, GazetteerPlace]): Canonical id -> place record.
        lookup (Dict[str, str]): Raw or normalized name -> canonical id.
    """

    def __init__(self, country_names: Optional[CountryNames] = None):
        self.places: Dict[str, GazetteerPlace] = {}
        self.lookup: Dict[str, str] = {}
        self.country_names = country_names or CountryNames()

    def __len__(self) -> int:
        return len(self.places)

    def match_place(self, original: str) -> GazetteerPlace:
        """
        Return the place for a free-text name, creating it and its parents if needed.

        Args:
            original (str): Place name ordered from most to least specific.

        Returns:
            GazetteerPlace: The matching place.

        Raises:
            InvalidPlaceNameError: If the name normalizes to the empty string.
        """
        cached = self.lookup.get(original)
        if cached is not None:
            return self.places[cached]

        norm = normalize_place_name(original)
        if not norm:
            raise InvalidPlaceNameError(original)

        cached = self.lookup.get(norm)
        if cached is None:
            gp = self._add_hierarchy(original)
            cached = gp.id
            self.lookup[norm] = cached
        self.lookup[original] = cached
        return self.places[cached]

    def _add_hierarchy(self, original: str) -> GazetteerPlace:
        segments = split_place_name(original)
        hierarchy = parse_hierarchy(original)
        norm = hierarchy[0]

        parent: Optional[GazetteerPlace] = None
        kind = PlaceKind.UNKNOWN
        if len(segments) > 1:
            # resolve the parent one level up through the same cache
            parent = self.match_place(', '.join(segments[1:]))
        else:
            kind = self._classify(segments[0])

        idsrc = norm if kind is PlaceKind.UNKNOWN else f"{norm}|{kind.value}"
        id = new_id("gazeteer", idsrc)
        gp = self.places.get(id)
        if gp is not None:
            return gp

        gp = GazetteerPlace(
            id=id,
            idsrc=idsrc,
            name=segments[0],
            kind=kind,
            parent_id=parent.id if parent else "",
        )
        self.places[id] = gp
        self.lookup[idsrc] = id
        logger.debug(f"New gazetteer place {id}: {idsrc}")
        return gp

    def _classify(self, name: str) -> PlaceKind:
        if self.country_names.uk_nation_name(name):
            return PlaceKind.UK_NATION
        if self.country_names.country_name(name):
            return PlaceKind.COUNTRY
        return PlaceKind.UNKNOWN

    def lookup_place(self, id: str) -> GazetteerPlace:
        """
        Return the place record for an id.

        Raises:
            KeyError: If the id is not in the gazetteer.
        """
        return self.places[id]

    def parent_chain(self, id: str) -> List[GazetteerPlace]:
        """Return the place followed by each of its ancestors."""
        chain: List[GazetteerPlace] = []
        seen = set()
        while id and id not in seen:
            seen.add(id)
            gp = self.places[id]
            chain.append(gp)
            id = gp.parent_id
        return chain

    def similar_names(self, original: str, threshold: int = 92, limit: int = 5) -> List[Tuple[str, float]]:
        """
        Find known place names that nearly match original but are not identical.

        Args:
            original (str): Place name to compare.
            threshold (int): Minimum similarity score (0-100).
            limit (int): Maximum number of matches to return.

        Returns:
            List[Tuple[str, float]]: (normalized name, score) pairs, best first.
        """
        norm = normalize_place_name(original)
        if not norm:
            return []
        choices = sorted({gp.idsrc.split('|', 1)[0] for gp in self.places.values()} - {norm})
        if not choices:
            return []
        matches = process.extract(norm, choices, scorer=fuzz.token_sort_ratio, limit=limit, score_cutoff=threshold)
        return [(match, score) for match, score, _ in matches]

    def to_dict(self) -> Dict[str, Any]:
        matches: Dict[str, List[str]] = {}
        for name, id in self.lookup.items():
            if name != self.places[id].idsrc:
                matches.setdefault(id, []).append(name)
        return {
            'places': {
                id: self.places[id].as_dict(sorted(matches.get(id, [])))
                for id in sorted(self.places)
            }
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any], country_names: Optional[CountryNames] = None) -> 'Gazetteer':
        """
        Rebuild a gazetteer, including its lookup cache, from the persisted form.

        Raises:
            ValueError: If the document is malformed or refers to unknown parents.
        """
        if not isinstance(d, dict):
            raise ValueError("gazetteer document must be an object")
        places = d.get('places') or {}
        if not isinstance(places, dict):
            raise ValueError("'places' must be an object")
        g = cls(country_names=country_names)
        for id, info in places.items():
            gp = GazetteerPlace.from_dict(id, info)
            g.places[id] = gp
            g.lookup[gp.idsrc] = id
            matches = info.get('matches') or []
            if not isinstance(matches, list):
                raise ValueError(f"place {id} has malformed matches")
            for match in matches:
                g.lookup[match] = id
        for gp in g.places.values():
            if gp.parent_id and gp.parent_id not in g.places:
                raise ValueError(f"place {gp.id} refers to unknown parent {gp.parent_id}")
        return g


def load_gazetteer(path: Optional[Union[str, Path]]) -> Gazetteer:
    """
    Read a gazetteer from a JSON file.

    A missing file (or no path) yields an empty gazetteer.

    Raises:
        StoreError: If the file exists but cannot be read or is inconsistent.
    """
    if not path or not os.path.exists(path):
        logger.info(f'No gazetteer file found: {path}')
        return Gazetteer()
    logger.info(f'Reading gazetteer: {path}')
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return Gazetteer.from_dict(json.load(f))
    except (OSError, ValueError) as e:
        raise StoreError(STORE_NAME, f"read failed: {e}", path) from e


def save_gazetteer(path: Optional[Union[str, Path]], gazetteer: Gazetteer) -> None:
    """
    Write a gazetteer as JSON sorted by id.

    Raises:
        StoreError: If the file cannot be written.
    """
    if not path:
        return
    logger.info(f'Writing gazetteer: {path}')
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(gazetteer.to_dict(), f, indent=2, sort_keys=True)
    except OSError as e:
        raise StoreError(STORE_NAME, f"write failed: {e}", path) from e
