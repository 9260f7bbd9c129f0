from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from family_graph.dates import BeforeYearDate
from family_graph.enrichment.model import INFERENCE_YEAR_OF_DEATH, Inference
from family_graph.life_event import DeathEvent, EventKind
from .base import BaseRule, register_rule

if TYPE_CHECKING:
    from family_graph.person import Person


@register_rule
@dataclass
class AliveOrDeadRule(BaseRule):
    """
    Decide whether a person may still be alive.

    A known death-like date means not alive. Otherwise a person born less than
    max_lifespan years ago may be alive; anyone older is given an inferred
    death "before" their birth year plus max_lifespan.
    """
    rule_id: str = "alive_or_dead"
    max_lifespan: int = 120
    current_year: Optional[int] = None

    def apply(self, person: 'Person') -> bool:
        now = self.current_year or datetime.date.today().year
        dev = person.best_deathlike_event
        if dev is not None and not dev.date.is_unknown():
            person.possibly_alive = False
            return False

        birth_year = person.birth_year()
        if birth_year is None:
            return False

        last_possible_year = birth_year + self.max_lifespan
        if last_possible_year > now:
            person.possibly_alive = True
            return False

        person.possibly_alive = False
        date = BeforeYearDate(last_possible_year)
        if dev is None:
            dev = DeathEvent(principal=person, date=date, inferred=True)
            person.best_deathlike_event = dev
        elif dev.kind is EventKind.DEATH:
            dev.date = date
        else:
            return True

        inference = Inference(
            INFERENCE_YEAR_OF_DEATH,
            date.when(),
            f"it is {self.max_lifespan} years after birth year of {birth_year}",
        )
        self.record(person, inference, dev)
        return True
