"""
Tests for GenerationConfig.
"""
from __future__ import annotations

import datetime

import pytest

from family_graph.enrichment.config import GenerationConfig
from family_graph.errors import ConfigurationError


class TestGenerationConfig:
    """Tests for loading configuration."""

    def test_packaged_defaults(self):
        config = GenerationConfig()
        assert config.max_lifespan == 120
        assert config.recent_death_years == 21
        assert config.child_birth_offset == 13
        assert config.marriage_offset == 16
        assert config.current_year is None
        assert config.place_similarity_threshold == 92
        assert config.rule_enabled("birth_year")

    def test_from_dict_falls_back_to_defaults(self):
        config = GenerationConfig.from_dict({"max_lifespan": 110})
        assert config.max_lifespan == 110
        assert config.recent_death_years == 21

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("recent_death_years: 30\nrules_enabled:\n  cause_of_death: false\n")

        config = GenerationConfig.from_yaml(path)
        assert config.recent_death_years == 30
        assert not config.rule_enabled("cause_of_death")
        assert config.rule_enabled("death_year")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            GenerationConfig.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_lifespan: [120\n")
        with pytest.raises(ConfigurationError):
            GenerationConfig.from_yaml(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- 120\n- 21\n")
        with pytest.raises(ConfigurationError):
            GenerationConfig.from_yaml(path)

    def test_rules_enabled_must_be_mapping(self):
        with pytest.raises(ConfigurationError):
            GenerationConfig.from_dict({"rules_enabled": ["birth_year"]})

    def test_now_year(self):
        assert GenerationConfig.from_dict({"current_year": 1999}).now_year() == 1999
        assert GenerationConfig().now_year() == datetime.date.today().year
