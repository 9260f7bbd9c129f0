from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from family_graph.dates import BeforeYearDate
from family_graph.enrichment.model import INFERENCE_YEAR_OF_BIRTH, Inference
from family_graph.life_event import EventKind, sorted_timeline
from .base import BaseRule, register_rule

if TYPE_CHECKING:
    from family_graph.life_event import TimelineEvent
    from family_graph.person import Person


@register_rule
@dataclass
class BirthYearRule(BaseRule):
    """
    Bound an unknown year of birth from the births of children or the person's own marriage.

    Only the first qualifying event in chronological order is used.
    """
    rule_id: str = "birth_year"
    child_birth_offset: int = 13
    marriage_offset: int = 16

    def _candidate(self, person: 'Person', ev: 'TimelineEvent', year: int) -> Optional[Tuple[int, str]]:
        pronoun = person.gender.subject_pronoun()
        if ev.kind in (EventKind.BIRTH, EventKind.BAPTISM) and not ev.directly_involves(person):
            return (
                year - self.child_birth_offset,
                f"{pronoun} had a child, {ev.principal.unique_name}, in {year}",
            )
        if ev.kind.is_marriagelike() and ev.directly_involves(person):
            other = ev.get_other(person)
            return (
                year - self.marriage_offset,
                f"{pronoun} married {other.unique_name} in {year}",
            )
        return None

    def apply(self, person: 'Person') -> bool:
        bev = person.best_birthlike_event
        if bev is None or bev.kind is not EventKind.BIRTH or not bev.date.is_unknown():
            return False

        for ev in sorted_timeline(person.timeline):
            year = self.settled_year(ev)
            if year is None:
                continue
            candidate = self._candidate(person, ev, year)
            if candidate is None:
                continue
            latest_year, reason = candidate
            bev.date = BeforeYearDate(latest_year)
            self.record(person, Inference(INFERENCE_YEAR_OF_BIRTH, bev.date.when(), reason), bev)
            return True
        return False
