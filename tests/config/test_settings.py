"""Tests for backgammon/config — settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from backgammon.config.log import configure_logging
from backgammon.config.settings import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("HISTORY_CAPACITY", "TURN_TRANSITION_DELAY", "AUTO_END_TURN", "DICE_SEED"):
            monkeypatch.delenv(f"BACKGAMMON_{name}", raising=False)
        settings = Settings(_env_file=None)
        assert settings.history_capacity == 50
        assert settings.turn_transition_delay == 1.0
        assert settings.auto_end_turn is False
        assert settings.dice_seed is None

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("BACKGAMMON_HISTORY_CAPACITY", "10")
        monkeypatch.setenv("BACKGAMMON_AUTO_END_TURN", "true")
        monkeypatch.setenv("BACKGAMMON_DICE_SEED", "42")
        settings = Settings(_env_file=None)
        assert settings.history_capacity == 10
        assert settings.auto_end_turn is True
        assert settings.dice_seed == 42

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, history_capacity=0)

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, turn_transition_delay=-1)

    def test_get_settings_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestConfigureLogging:
    def test_applies_level(self):
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging(Settings(_env_file=None, log_level="warning"))
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)

    def test_debug_forces_debug(self):
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging(Settings(_env_file=None, debug=True, log_level="ERROR"))
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            configure_logging(Settings(_env_file=None, log_level="LOUD"))
