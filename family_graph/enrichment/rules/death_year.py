from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from family_graph.dates import AfterYearDate, Date, YearDate
from family_graph.enrichment.model import INFERENCE_YEAR_OF_DEATH, Inference
from family_graph.life_event import EventKind, sorted_timeline
from .base import BaseRule, register_rule

if TYPE_CHECKING:
    from family_graph.person import Person


@register_rule
@dataclass
class DeathYearRule(BaseRule):
    """
    Fill in the year of a death event whose date is unknown.

    The person's own burial gives the year exactly. Otherwise the first later
    child birth or marriage of the person gives an "after" bound.
    """
    rule_id: str = "death_year"

    def apply(self, person: 'Person') -> bool:
        dev = person.best_deathlike_event
        if dev is None or dev.kind is not EventKind.DEATH or not dev.date.is_unknown():
            return False

        pronoun = person.gender.subject_pronoun()
        timeline = sorted_timeline(person.timeline)
        date: Optional[Date] = None
        reason = ""

        for ev in timeline:
            year = self.settled_year(ev)
            if ev.kind is EventKind.BURIAL and year is not None and ev.directly_involves(person):
                date = YearDate(year)
                reason = f"{pronoun} was buried that year"
                break

        if date is None:
            for ev in timeline:
                year = self.settled_year(ev)
                if year is None:
                    continue
                if ev.kind in (EventKind.BIRTH, EventKind.BAPTISM) and not ev.directly_involves(person):
                    reason = f"{pronoun} had a child, {ev.principal.unique_name}, in {year}"
                elif ev.kind.is_marriagelike() and ev.directly_involves(person):
                    reason = f"{pronoun} married {ev.get_other(person).unique_name} in {year}"
                else:
                    continue
                date = AfterYearDate(year)
                break

        if date is None:
            return False
        dev.date = date
        person.possibly_alive = False
        value = str(date.year()) if isinstance(date, YearDate) else date.when()
        self.record(person, Inference(INFERENCE_YEAR_OF_DEATH, value, reason), dev)
        return True
