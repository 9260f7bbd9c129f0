"""
life_event.py - Timeline events for the family graph.

Every event has a date, a place and citations. Individual events have a single
principal (birth, death, census, ...); party events have two (marriage,
divorce, ...). Each concrete class declares its EventKind, and logic that
needs to distinguish events switches on ``event.kind``.

Module: family_graph.life_event
"""
from __future__ import annotations

__all__ = [
    'EventKind',
    'TimelineEvent',
    'IndividualEvent',
    'PartyEvent',
    'BirthEvent',
    'BaptismEvent',
    'DeathEvent',
    'BurialEvent',
    'CremationEvent',
    'ProbateEvent',
    'CensusEvent',
    'ResidenceEvent',
    'NarrativeEvent',
    'ArrivalEvent',
    'DepartureEvent',
    'PlaceholderIndividualEvent',
    'MarriageEvent',
    'MarriageBannsEvent',
    'MarriageLicenseEvent',
    'DivorceEvent',
    'AnnulmentEvent',
    'PlaceholderPartyEvent',
    'sorted_timeline',
]

import enum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .dates import UNKNOWN_DATE, Date, SortKey
from .place import Place, unknown_place

if TYPE_CHECKING:
    from .person import Person
    from .source import GeneralCitation


class EventKind(enum.Enum):
    BIRTH = "birth"
    BAPTISM = "baptism"
    DEATH = "death"
    BURIAL = "burial"
    CREMATION = "cremation"
    PROBATE = "probate"
    CENSUS = "census"
    RESIDENCE = "residence"
    NARRATIVE = "narrative"
    ARRIVAL = "arrival"
    DEPARTURE = "departure"
    PLACEHOLDER = "placeholder"
    MARRIAGE = "marriage"
    MARRIAGE_BANNS = "marriage banns"
    MARRIAGE_LICENSE = "marriage license"
    DIVORCE = "divorce"
    ANNULMENT = "annulment"
    PARTY_PLACEHOLDER = "party placeholder"

    def is_birthlike(self) -> bool:
        return self in (EventKind.BIRTH, EventKind.BAPTISM)

    def is_deathlike(self) -> bool:
        return self in (EventKind.DEATH, EventKind.BURIAL, EventKind.CREMATION, EventKind.PROBATE)

    def is_marriagelike(self) -> bool:
        return self in (EventKind.MARRIAGE, EventKind.MARRIAGE_BANNS, EventKind.MARRIAGE_LICENSE)

    def is_party(self) -> bool:
        return self in (
            EventKind.MARRIAGE, EventKind.MARRIAGE_BANNS, EventKind.MARRIAGE_LICENSE,
            EventKind.DIVORCE, EventKind.ANNULMENT, EventKind.PARTY_PLACEHOLDER,
        )


# order of events that share a date
_KIND_RANK: Dict[EventKind, int] = {
    EventKind.BIRTH: 0,
    EventKind.BAPTISM: 1,
    EventKind.DEATH: 3,
    EventKind.BURIAL: 4,
    EventKind.CREMATION: 4,
    EventKind.PROBATE: 4,
}
_DEFAULT_RANK = 2


class TimelineEvent:
    """
    Base class for all events.

    Attributes:
        date (Date): When the event happened.
        place (Place): Where it happened, the unknown place if not known.
        detail (str): Free-text detail from the source.
        citations (List[GeneralCitation]): Supporting citations.
        inferred (bool): True if the event was synthesized or its date inferred.
        attributes (Dict[str, str]): Extra source attributes.
    """
    __slots__ = ['date', 'place', 'detail', 'citations', 'inferred', 'attributes']

    kind: EventKind = EventKind.PLACEHOLDER
    title: str = "event"

    def __init__(self, date: Optional[Date] = None, place: Optional[Place] = None, detail: str = "",
                 citations: Optional[List['GeneralCitation']] = None, inferred: bool = False):
        self.date: Date = date if date is not None else UNKNOWN_DATE
        self.place: Place = place if place is not None else unknown_place()
        self.detail: str = detail
        self.citations: List['GeneralCitation'] = list(citations) if citations else []
        self.inferred: bool = inferred
        self.attributes: Dict[str, str] = {}

    def participants(self) -> List['Person']:
        raise NotImplementedError

    def directly_involves(self, person: 'Person') -> bool:
        return any(p.same_as(person) for p in self.participants())

    def sort_key(self) -> Tuple[SortKey, int]:
        return (self.date.sort_key(), _KIND_RANK.get(self.kind, _DEFAULT_RANK))

    def sorts_before(self, other: 'TimelineEvent') -> bool:
        if self.date.sorts_before(other.date):
            return True
        if other.date.sorts_before(self.date):
            return False
        return _KIND_RANK.get(self.kind, _DEFAULT_RANK) < _KIND_RANK.get(other.kind, _DEFAULT_RANK)

    def __repr__(self) -> str:
        return f"[ {self.date.when()} : {self.place.preferred_name} is {self.title} ]"


class IndividualEvent(TimelineEvent):
    __slots__ = ['principal']

    def __init__(self, principal: 'Person', date: Optional[Date] = None, place: Optional[Place] = None,
                 detail: str = "", citations: Optional[List['GeneralCitation']] = None, inferred: bool = False):
        super().__init__(date=date, place=place, detail=detail, citations=citations, inferred=inferred)
        self.principal = principal

    def participants(self) -> List['Person']:
        return [self.principal]


class PartyEvent(TimelineEvent):
    __slots__ = ['husband', 'wife']

    def __init__(self, husband: 'Person', wife: 'Person', date: Optional[Date] = None,
                 place: Optional[Place] = None, detail: str = "",
                 citations: Optional[List['GeneralCitation']] = None, inferred: bool = False):
        super().__init__(date=date, place=place, detail=detail, citations=citations, inferred=inferred)
        self.husband = husband
        self.wife = wife

    def participants(self) -> List['Person']:
        return [self.husband, self.wife]

    def get_other(self, person: 'Person') -> 'Person':
        """Return the other party to the event."""
        if self.husband.same_as(person):
            return self.wife
        return self.husband


class BirthEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.BIRTH
    title = "birth"


class BaptismEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.BAPTISM
    title = "baptism"


class DeathEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.DEATH
    title = "death"


class BurialEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.BURIAL
    title = "burial"


class CremationEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.CREMATION
    title = "cremation"


class ProbateEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.PROBATE
    title = "probate"


class CensusEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.CENSUS
    title = "census"


class ResidenceEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.RESIDENCE
    title = "residence"


class NarrativeEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.NARRATIVE
    title = "narrative"


class ArrivalEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.ARRIVAL
    title = "arrival"


class DepartureEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.DEPARTURE
    title = "departure"


class PlaceholderIndividualEvent(IndividualEvent):
    __slots__ = []
    kind = EventKind.PLACEHOLDER
    title = "event"


class MarriageEvent(PartyEvent):
    __slots__ = []
    kind = EventKind.MARRIAGE
    title = "marriage"


class MarriageBannsEvent(PartyEvent):
    __slots__ = []
    kind = EventKind.MARRIAGE_BANNS
    title = "marriage banns"


class MarriageLicenseEvent(PartyEvent):
    __slots__ = []
    kind = EventKind.MARRIAGE_LICENSE
    title = "marriage license"


class DivorceEvent(PartyEvent):
    __slots__ = []
    kind = EventKind.DIVORCE
    title = "divorce"


class AnnulmentEvent(PartyEvent):
    __slots__ = []
    kind = EventKind.ANNULMENT
    title = "annulment"


class PlaceholderPartyEvent(PartyEvent):
    __slots__ = []
    kind = EventKind.PARTY_PLACEHOLDER
    title = "event"


def sorted_timeline(events: List[TimelineEvent]) -> List[TimelineEvent]:
    """Return events in chronological order; unknown dates last, ties kept in input order."""
    return sorted(events, key=lambda ev: ev.sort_key())
