"""
Base classes for inference rules.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Protocol, Type

from family_graph.enrichment.model import Inference, Provenance
from family_graph.source import GeneralCitation

if TYPE_CHECKING:
    from family_graph.life_event import TimelineEvent
    from family_graph.person import Person

logger = logging.getLogger(__name__)

# Rule Registry
_RULE_REGISTRY: Dict[str, Type['BaseRule']] = {}


def register_rule(cls: Type['BaseRule']) -> Type['BaseRule']:
    """
    Decorator to register a rule class in the global registry.

    Usage:
        @register_rule
        @dataclass
        class MyRule(BaseRule):
            rule_id: str = "my_rule"
            ...
    """
    rule_id = getattr(cls, 'rule_id', '')
    if rule_id:
        _RULE_REGISTRY[rule_id] = cls
        logger.debug(f"Registered inference rule: {rule_id}")
    else:
        logger.warning(f"Rule {cls.__name__} missing 'rule_id' attribute, not registered")
    return cls


def get_rule_registry() -> Dict[str, Type['BaseRule']]:
    """Get the global rule registry, in registration order."""
    return _RULE_REGISTRY.copy()


class InferenceRule(Protocol):
    rule_id: str

    def apply(self, person: 'Person') -> bool:
        ...


@dataclass
class BaseRule(ABC):
    """
    Base class for per-person inference rules.

    A rule inspects one person (and what upstream passes have already placed on
    their timeline) and records any derived values as inferences.

    Rules run for every person in turn and may change dates on events that are
    shared with relatives (a child's birth sits on the parents' timelines too).
    Events belonging to other people are therefore read through settled_year(),
    which returns the year as it stood before any rule ran.

    Attributes:
        rule_id: Unique identifier for this rule
        app_hooks: Optional application hooks for progress reporting
        settled_years: id(event) -> year, captured by settle()
    """
    rule_id: str = ""
    app_hooks: Any = None
    settled_years: Optional[Dict[int, Optional[int]]] = field(default=None, repr=False)

    @abstractmethod
    def apply(self, person: 'Person') -> bool:
        """
        Apply the rule to a person.

        Returns:
            bool: True if the person was changed.
        """

    def settle(self, events: Iterable['TimelineEvent']) -> None:
        """Capture the year of every event before the rule runs for anyone."""
        self.settled_years = {id(ev): ev.date.year() for ev in events}

    def settled_year(self, ev: 'TimelineEvent') -> Optional[int]:
        """
        Year of an event as earlier passes left it.

        Events unseen by settle() (created while rules run) count as undated.
        Without a settle() call the event's current year is returned.
        """
        if self.settled_years is None:
            return ev.date.year()
        return self.settled_years.get(id(ev))

    def record(self, person: 'Person', inference: Inference, event: Optional['TimelineEvent'] = None) -> None:
        """Attach an inference to a person and, as a citation, to the event it explains."""
        inference.provenance = Provenance(rule_id=self.rule_id, inputs=(person.id,))
        person.add_inference(inference)
        if event is not None:
            event.inferred = True
            event.citations.append(GeneralCitation(detail=inference.as_citation()))
