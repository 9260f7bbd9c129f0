"""
place.py - Place model for the family graph.

Module: family_graph.place
"""
from __future__ import annotations

__all__ = ['Place', 'PlaceKind', 'unknown_place', 'UNKNOWN_PLACE_ID']

import enum
import logging
from typing import TYPE_CHECKING, List, Optional

from .enrichment.model import Anomaly

if TYPE_CHECKING:
    from .life_event import TimelineEvent

logger = logging.getLogger(__name__)

UNKNOWN_PLACE_ID = "unknown"


class PlaceKind(str, enum.Enum):
    UNKNOWN = ""
    COUNTRY = "country"
    UK_NATION = "uknation"
    ADDRESS = "address"

    @classmethod
    def from_value(cls, value: Optional[str]) -> 'PlaceKind':
        try:
            return cls(value or "")
        except ValueError:
            logger.warning(f"Unrecognised place kind {value!r}, treating as unknown")
            return cls.UNKNOWN


class Place:
    """
    A place in the family graph, keyed by the gazetteer id.

    Attributes:
        id (str): Gazetteer identifier.
        original_text (str): The raw text first used to find the place.
        preferred_name (str): Name of the place without its hierarchy.
        preferred_unique_name (str): Name qualified enough to be unique.
        preferred_full_name (str): Name followed by each parent's name.
        preferred_sort_name (str): Name used for ordering.
        country_name (str): Name of the enclosing country, if known.
        kind (PlaceKind): Kind of place.
        parent (Optional[Place]): Enclosing place.
        latitude (Optional[float]): Latitude, if known.
        longitude (Optional[float]): Longitude, if known.
        timeline (List[TimelineEvent]): Events that occurred here.
        tags (List[str]): Free-form tags.
        anomalies (List[Anomaly]): Data-quality notes.
    """
    __slots__ = [
        'id', 'original_text', 'preferred_name', 'preferred_unique_name',
        'preferred_full_name', 'preferred_sort_name', 'country_name', 'kind',
        'parent', 'latitude', 'longitude', 'timeline', 'tags', 'anomalies',
    ]

    def __init__(self, id: str, name: str = "unknown", kind: PlaceKind = PlaceKind.UNKNOWN):
        self.id = id
        self.original_text = name
        self.preferred_name = name
        self.preferred_unique_name = name
        self.preferred_full_name = name
        self.preferred_sort_name = name
        self.country_name = ""
        self.kind = kind
        self.parent: Optional[Place] = None
        self.latitude: Optional[float] = None
        self.longitude: Optional[float] = None
        self.timeline: List['TimelineEvent'] = []
        self.tags: List[str] = []
        self.anomalies: List[Anomaly] = []

    def is_unknown(self) -> bool:
        return self.id == UNKNOWN_PLACE_ID

    def same_as(self, other: Optional['Place']) -> bool:
        return other is not None and self.id == other.id

    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def add_anomaly(self, category: str, text: str, context: str = "") -> None:
        anomaly = Anomaly(category=category, text=text, context=context)
        self.anomalies.append(anomaly)
        logger.debug(f"Place {self.id}: {category} anomaly: {text}")

    def __repr__(self) -> str:
        return f"Place(id={self.id!r}, name={self.preferred_full_name!r})"


_UNKNOWN_PLACE = Place(UNKNOWN_PLACE_ID)


def unknown_place() -> Place:
    """Shared sentinel returned when a place cannot be identified."""
    return _UNKNOWN_PLACE
