from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from family_graph.enrichment.model import INFERENCE_GENERAL_FACT, Fact, Inference
from .base import BaseRule, register_rule

if TYPE_CHECKING:
    from family_graph.person import Person

WORKHOUSE_RE = re.compile(r"\bwork.?house\b", re.I)
PAUPER_RE = re.compile(r"\bpauper\b", re.I)


@register_rule
@dataclass
class GeneralFactsRule(BaseRule):
    """Record facts suggested by place names and event details (workhouse, pauper)."""
    rule_id: str = "general_facts"

    def _add(self, person: 'Person', value: str, reason: str) -> None:
        if any(f.detail == value for f in person.facts):
            return
        person.facts.append(Fact(category=INFERENCE_GENERAL_FACT, detail=value))
        self.record(person, Inference(INFERENCE_GENERAL_FACT, value, reason))

    def apply(self, person: 'Person') -> bool:
        count = len(person.facts)
        bev = person.best_birthlike_event
        if bev is not None and WORKHOUSE_RE.search(bev.place.preferred_full_name):
            self._add(person, "born in workhouse", "place of birth appears to contain the word workhouse")

        dev = person.best_deathlike_event
        if dev is not None:
            if WORKHOUSE_RE.search(dev.place.preferred_full_name):
                self._add(person, "died in workhouse", "place of death appears to contain the word workhouse")
            if dev.detail and PAUPER_RE.search(dev.detail):
                self._add(person, "pauper", "detail of death appears to contain the word pauper")
        return len(person.facts) != count
