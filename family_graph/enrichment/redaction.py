"""
Redaction of living and recently deceased people.

Redacting a person removes their personal details and then redacts every
descendant, whatever their own status, so a living person cannot be
identified through a visible descendant.
"""
from __future__ import annotations

import logging
from typing import List, Set

from family_graph.dates import UNKNOWN_DATE
from family_graph.gender import Gender
from family_graph.life_event import BirthEvent
from family_graph.person import Person

logger = logging.getLogger(__name__)

REDACTED_NAME = "(living or recently deceased person)"
REDACTED_VITAL_YEARS = "(?-?)"


def should_redact(person: Person, now_year: int, recent_death_years: int = 21) -> bool:
    """
    Report whether a person must be redacted.

    A person is redacted if already marked redacted, possibly alive, or known to
    have died fewer than recent_death_years years before now_year.
    """
    if person.is_unknown():
        return False
    if person.redacted or person.possibly_alive:
        return True
    dev = person.best_deathlike_event
    if dev is not None:
        years = dev.date.years_since(now_year)
        if years is not None and years < recent_death_years:
            return True
    return False


def redact_personal_details(person: Person) -> None:
    """Clear a single person's personal details in place."""
    if not person.redaction_keeps_name:
        person.full_name = REDACTED_NAME
        person.given_name = REDACTED_NAME
        person.family_name = REDACTED_NAME
        person.familiar_name = REDACTED_NAME
        person.familiar_full_name = REDACTED_NAME
        person.sort_name = REDACTED_NAME
        person.unique_name = REDACTED_NAME
        person.nickname = ""

    person.redacted = True
    person.olb = ""
    person.gender = Gender.UNKNOWN
    person.tags = []
    person.timeline = []
    person.occupations = []
    person.primary_occupation = ""
    person.links = []
    person.vital_years = REDACTED_VITAL_YEARS
    person.best_birthlike_event = BirthEvent(principal=person, date=UNKNOWN_DATE)
    person.best_deathlike_event = None
    person.families = []


def redact_with_descendants(person: Person) -> List[Person]:
    """
    Redact a person and all of their descendants.

    Returns:
        List[Person]: Everyone redacted by this call, starting with person.
    """
    redacted: List[Person] = []
    seen: Set[str] = set()
    stack: List[Person] = [person]
    while stack:
        p = stack.pop()
        if p.is_unknown() or p.id in seen:
            continue
        seen.add(p.id)
        redact_personal_details(p)
        redacted.append(p)
        stack.extend(reversed(p.children))
    logger.debug(f"Redacted {person.id} and {len(redacted) - 1} descendants")
    return redacted
