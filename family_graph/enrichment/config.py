from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from family_graph.errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def _read_yaml(yaml_path: Path) -> Dict[str, Any]:
    if not yaml_path or not yaml_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")
    try:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            config_dict = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing {yaml_path}: {e}") from e
    if not isinstance(config_dict, dict):
        raise ConfigurationError(f"Configuration in {yaml_path} must be a mapping")
    return config_dict


@dataclass
class GenerationConfig:
    """
    Configuration for the generation pipeline.

    Loads all configuration values from config.yaml in the enrichment directory.
    """
    # Lifespan and redaction
    max_lifespan: int = field(init=False)
    recent_death_years: int = field(init=False)

    # Inference offsets
    child_birth_offset: int = field(init=False)
    marriage_offset: int = field(init=False)

    # Reference year, None for today
    current_year: Optional[int] = field(init=False)

    # Place duplicate detection
    place_similarity_threshold: int = field(init=False)

    # Rule toggles (nested dict)
    rules_enabled: Dict[str, bool] = field(init=False)

    def __post_init__(self):
        """Load configuration from the packaged YAML file."""
        self._apply(_read_yaml(DEFAULT_CONFIG_PATH), fallback=None)

    def _apply(self, config_dict: Dict[str, Any], fallback: Optional[Dict[str, Any]]) -> None:
        for key in self.__dataclass_fields__.keys():
            if key in config_dict:
                object.__setattr__(self, key, config_dict[key])
            elif fallback is not None and key in fallback:
                object.__setattr__(self, key, fallback[key])
            else:
                raise ConfigurationError(f"Required configuration field '{key}' not found")
        if not isinstance(self.rules_enabled, dict):
            raise ConfigurationError("'rules_enabled' must be a mapping of rule id to bool")

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> GenerationConfig:
        """
        Load configuration from a specific YAML file.

        Keys missing from the file fall back to the packaged defaults.

        Args:
            yaml_path: Path to YAML config file.

        Returns:
            GenerationConfig: Configuration instance loaded from YAML.
        """
        return cls.from_dict(_read_yaml(Path(yaml_path)))

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> GenerationConfig:
        """
        Create configuration from a dictionary.

        Args:
            config_dict (Dict[str, Any]): Dictionary with configuration values.
        Returns:
            GenerationConfig: Configuration instance.
        """
        instance = object.__new__(cls)
        instance._apply(config_dict, fallback=_read_yaml(DEFAULT_CONFIG_PATH))
        return instance

    def rule_enabled(self, rule_id: str) -> bool:
        # default: enabled unless explicitly false
        return self.rules_enabled.get(rule_id, True)

    def now_year(self) -> int:
        if self.current_year:
            return int(self.current_year)
        return datetime.date.today().year
