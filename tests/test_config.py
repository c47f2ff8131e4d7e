# =============================================================================
# tests/test_config.py - Engine Settings Tests
# =============================================================================
# Tests for core/config.py: defaults, environment overrides and validation.
#
# Run with: pytest tests/test_config.py -v
# =============================================================================

import logging

import pytest
from pydantic import ValidationError

from core.config import EngineSettings, get_settings


class TestEngineSettings:
    """Tests for EngineSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FORMGEN_DETECTION_WORKERS", raising=False)
        engine_settings = EngineSettings(_env_file=None)

        assert engine_settings.MAX_ROWS == 1000
        assert engine_settings.PREVIEW_MAX_ROWS == 10
        assert engine_settings.SAMPLE_SIZE == 10
        assert engine_settings.MAX_OPTIONS == 20
        assert engine_settings.REQUIRED_NULL_RATIO == 0.2
        assert engine_settings.REQUIRED_CONFIDENCE == 0.7
        assert engine_settings.DETECTION_WORKERS == 1
        assert engine_settings.DEFAULT_DELIMITER == ","
        assert engine_settings.CONSERVATIVE_THRESHOLD == 0.8
        assert engine_settings.AGGRESSIVE_THRESHOLD == 0.5

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FORMGEN_MAX_ROWS", "250")
        monkeypatch.setenv("FORMGEN_SAMPLE_SIZE", "5")

        engine_settings = EngineSettings(_env_file=None)

        assert engine_settings.MAX_ROWS == 250
        assert engine_settings.SAMPLE_SIZE == 5

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("FORMGEN_MAX_ROWS", "0")

        with pytest.raises(ValidationError):
            EngineSettings(_env_file=None)

    def test_delimiter_must_be_one_character(self):
        with pytest.raises(ValidationError):
            EngineSettings(_env_file=None, DEFAULT_DELIMITER="::")

    def test_debug_forces_debug_level(self):
        engine_settings = EngineSettings(_env_file=None, DEBUG=True, LOG_LEVEL="ERROR")

        assert engine_settings.log_level == logging.DEBUG

    def test_log_level(self):
        engine_settings = EngineSettings(_env_file=None, DEBUG=False, LOG_LEVEL="WARNING")

        assert engine_settings.log_level == logging.WARNING

    def test_frozen(self, engine_settings):
        with pytest.raises(ValidationError):
            engine_settings.MAX_ROWS = 5

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
