"""
Default inference rules for the generation pipeline.
"""
from __future__ import annotations

from typing import Any, Dict, List

from .config import GenerationConfig
from .rules import BaseRule, get_rule_registry


# Rule constructor parameter -> config field name, or callable taking the config
RULE_PARAM_MAP = {
    'birth_year': {
        'child_birth_offset': 'child_birth_offset',
        'marriage_offset': 'marriage_offset',
    },
    'alive_or_dead': {
        'max_lifespan': 'max_lifespan',
        'current_year': lambda cfg: cfg.now_year(),
    },
}


def _rule_kwargs(rule_id: str, config: GenerationConfig) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {}
    for param_name, source in RULE_PARAM_MAP.get(rule_id, {}).items():
        kwargs[param_name] = source(config) if callable(source) else getattr(config, source)
    return kwargs


def get_default_rules(config: GenerationConfig) -> List[BaseRule]:
    """
    Instantiate every enabled registered rule, in registration order.

    Args:
        config: GenerationConfig instance with rule parameters.

    Returns:
        List[BaseRule]: Configured rules, ready to run.
    """
    return [
        rule_class(**_rule_kwargs(rule_id, config))
        for rule_id, rule_class in get_rule_registry().items()
        if config.rule_enabled(rule_id)
    ]
