"""
place_name.py - Free-text place name splitting and normalization.

Place names arrive as comma or semicolon separated strings ordered from most to
least specific ("Town, County, Country"). This module splits them into
hierarchy segments, produces the normalized form used as the gazetteer key,
and recognises country and UK nation names.

Module: family_graph.place_name
"""
from __future__ import annotations

__all__ = [
    'split_place_name',
    'normalize_place_name',
    'parse_hierarchy',
    'CountryNames',
]

import logging
import re
import unicodedata
from typing import Dict, List, Optional

import pycountry
from unidecode import unidecode

logger = logging.getLogger(__name__)

SEPARATORS = ',;'
SPACE_RE = re.compile(r"\s+")


def _keep_char(ch: str) -> bool:
    if not ch.isprintable():
        return False
    category = unicodedata.category(ch)
    # punctuation and symbols are dropped, hyphenated names are not
    if category[0] in ('P', 'S') and ch != '-':
        return False
    return True


def split_place_name(name: str) -> List[str]:
    """
    Split a raw place name into cleaned segments, most specific first.

    Whitespace runs collapse to a single space, leading/repeated/empty segments
    are ignored and punctuation other than '-' is dropped. Case is preserved.

    Args:
        name (str): Raw place name.

    Returns:
        List[str]: Non-empty segments.
    """
    parts: List[str] = []
    current: List[str] = []
    pending_space = False

    def flush() -> None:
        segment = ''.join(current).strip()
        if segment:
            parts.append(segment)
        current.clear()

    for ch in name or '':
        if ch in SEPARATORS:
            flush()
            pending_space = False
        elif ch.isspace():
            pending_space = bool(current)
        elif _keep_char(ch):
            if pending_space:
                current.append(' ')
                pending_space = False
            current.append(ch)
    flush()
    return parts


def normalize_place_name(name: str) -> str:
    """
    Return the normalized (lowercase, ", " joined) form of a place name.

    Normalizing an already normalized name returns it unchanged.
    """
    return ', '.join(split_place_name(name)).lower()


def parse_hierarchy(name: str) -> List[str]:
    """
    Return the normalized names of a place and each of its ancestors.

    "Hove, Sussex, England" gives ["hove, sussex, england", "sussex, england", "england"].
    """
    parts = [p.lower() for p in split_place_name(name)]
    return [', '.join(parts[i:]) for i in range(len(parts))]


class CountryNames:
    """
    Recognises country and UK nation names.

    Country names come from pycountry (name, official and common names) plus a
    small set of substitutions for names found in old records. Matching is
    case and accent insensitive.
    """

    UK_NATIONS = ('England', 'Scotland', 'Wales', 'Northern Ireland')

    COUNTRY_SUBSTITUTIONS = {
        'usa': 'United States',
        'u s a': 'United States',
        'united states of america': 'United States',
        'america': 'United States',
        'uk': 'United Kingdom',
        'great britain': 'United Kingdom',
        'britain': 'United Kingdom',
        'eire': 'Ireland',
        'holland': 'Netherlands',
    }

    def __init__(self, substitutions: Optional[Dict[str, str]] = None):
        self.substitutions = {self._key(k): v for k, v in self.COUNTRY_SUBSTITUTIONS.items()}
        if substitutions:
            self.substitutions.update({self._key(k): v for k, v in substitutions.items()})
        self.country_names: Dict[str, str] = {}
        for country in pycountry.countries:
            for attr in ('name', 'official_name', 'common_name'):
                value = getattr(country, attr, None)
                if value:
                    self.country_names[self._key(value)] = country.name
        self.uk_nations = {self._key(n): n for n in self.UK_NATIONS}

    @staticmethod
    def _key(name: str) -> str:
        return SPACE_RE.sub(' ', unidecode(name)).strip().lower()

    def country_name(self, name: str) -> Optional[str]:
        """Canonical country name for name, or None if it is not a country."""
        key = self._key(name)
        if key in self.substitutions:
            return self.substitutions[key]
        return self.country_names.get(key)

    def uk_nation_name(self, name: str) -> Optional[str]:
        """Canonical UK nation name for name, or None."""
        return self.uk_nations.get(self._key(name))
