from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from family_graph.enrichment.model import INFERENCE_MODE_OF_DEATH, Inference
from .base import BaseRule, register_rule

if TYPE_CHECKING:
    from family_graph.person import Person

CAUSE_PATTERNS = (
    ("suicide", re.compile(r"\bsuicide\b", re.I), "the words suicide"),
    ("lost at sea", re.compile(r"\blost at sea\b", re.I), "the words lost at sea"),
    ("drowned", re.compile(r"\bdrown(ed|ing)\b", re.I), "a word about drowning"),
)


@register_rule
@dataclass
class CauseOfDeathRule(BaseRule):
    """Recognise a few modes of death from the death event's detail text."""
    rule_id: str = "cause_of_death"

    def apply(self, person: 'Person') -> bool:
        dev = person.best_deathlike_event
        if dev is None or not dev.detail or person.cause_of_death:
            return False
        for cause, pattern, words in CAUSE_PATTERNS:
            if pattern.search(dev.detail):
                person.cause_of_death = cause
                self.record(person, Inference(
                    INFERENCE_MODE_OF_DEATH, cause, f"detail of death event contains {words}"
                ))
                return True
        return False
