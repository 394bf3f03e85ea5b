"""Tests for settings loading and the id layout constants."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from ifcai import config
from ifcai.config import Settings, load_settings
from ifcai.log import setup_logging


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings({})
        assert settings.env == "development"
        assert settings.log_level == "DEBUG"
        assert settings.model == "mistral"
        assert settings.query_timeout == config.DEFAULT_QUERY_TIMEOUT
        assert settings.cache_size == 10
        assert settings.prefer_native is False

    def test_production_profile(self) -> None:
        assert load_settings({"IFCAI_ENV": "production"}).log_level == "WARNING"

    def test_testing_profile(self) -> None:
        settings = load_settings({"IFCAI_ENV": "testing"})
        assert settings.query_timeout == 1.0

    def test_unknown_profile(self) -> None:
        settings = load_settings({"IFCAI_ENV": "staging"})
        assert settings.env == "staging"
        assert settings.log_level == "INFO"

    def test_env_overrides_profile(self) -> None:
        settings = load_settings({"IFCAI_ENV": "production", "IFCAI_LOG_LEVEL": "ERROR"})
        assert settings.log_level == "ERROR"

    def test_coercion(self) -> None:
        settings = load_settings({
            "IFCAI_QUERY_TIMEOUT": "2.5",
            "IFCAI_CACHE_SIZE": "25",
            "IFCAI_PREFER_NATIVE": "true",
            "IFCAI_OUTPUT_DIR": "/tmp/ifc",
            "IFCAI_OLLAMA_HOST": "http://gpu-box:11434",
        })
        assert settings.query_timeout == 2.5
        assert settings.cache_size == 25
        assert settings.prefer_native is True
        assert settings.output_dir == Path("/tmp/ifc")
        assert settings.ollama_host == "http://gpu-box:11434"

    def test_empty_values_ignored(self) -> None:
        assert load_settings({"IFCAI_MODEL": ""}).model == "mistral"

    def test_invalid_values_rejected(self) -> None:
        with pytest.raises(ValidationError):
            load_settings({"IFCAI_CACHE_SIZE": "0"})
        with pytest.raises(ValidationError):
            Settings(query_timeout=0)


class TestLayoutConstants:
    def test_regions_do_not_overlap(self) -> None:
        assert config.FIXED_ID_LIMIT < config.STOREY_BASE
        assert config.STOREY_BASE + config.MAX_STOREYS * config.STOREY_STRIDE <= config.WALL_BASE
        assert config.WALL_BASE + config.MAX_WALLS * config.WALL_STRIDE <= config.RELATIONSHIP_BASE

    def test_four_walls(self) -> None:
        assert [name for name, *_ in config.WALL_LAYOUT] == ["North", "South", "East", "West"]
        assert len(config.WALL_LAYOUT) <= config.MAX_WALLS


def test_setup_logging_level() -> None:
    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING
    setup_logging("nonsense")
    assert logging.getLogger().level == logging.INFO
