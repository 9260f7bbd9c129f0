"""Inference rules: per-person derivations run by the generation pipeline.

Built-in rules, in the order they run:
    - BirthYearRule: Bounds an unknown birth year from children's births or marriage
    - AliveOrDeadRule: Decides possibly-alive status, inferring a death bound if needed
    - DeathYearRule: Fills in an unknown death year from burial, children or marriage
    - CauseOfDeathRule: Recognises suicide, lost at sea and drowning
    - GeneralFactsRule: Notes workhouse births/deaths and paupers

Extensibility:
    Create custom rules by:
        1. Subclass BaseRule
        2. Implement apply(person) -> bool
        3. Use @register_rule decorator for automatic registration

Example:
    >>> from family_graph.enrichment.rules import BaseRule, register_rule
    >>> @register_rule
    ... @dataclass
    ... class MyCustomRule(BaseRule):
    ...     rule_id: str = "my_rule"
    ...     def apply(self, person):
    ...         return False
"""

from .base import InferenceRule
from .base import BaseRule
from .base import register_rule
from .base import get_rule_registry
from .birth_year import BirthYearRule
from .alive_or_dead import AliveOrDeadRule
from .death_year import DeathYearRule
from .cause_of_death import CauseOfDeathRule
from .general_facts import GeneralFactsRule

__all__ = [
    'InferenceRule',
    'BaseRule',
    'register_rule',
    'get_rule_registry',
    'BirthYearRule',
    'AliveOrDeadRule',
    'DeathYearRule',
    'CauseOfDeathRule',
    'GeneralFactsRule',
]
