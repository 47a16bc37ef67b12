"""Tests for settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from companion.config import Settings, get_settings
from companion.logging_setup import configure_logging


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        """Test default tunables."""
        settings = Settings(_env_file=None)

        assert settings.volatility_history_size == 8
        assert settings.volatility_trend_window == 3
        assert settings.question_cooldown_turns == 5
        assert settings.max_questions_per_turn == 2
        assert settings.max_questions_impaired == 1
        assert settings.default_region == "US"
        assert settings.is_production is False

    def test_env_override(self, monkeypatch):
        """Test COMPANION_ environment variables override defaults."""
        monkeypatch.setenv("COMPANION_QUESTION_COOLDOWN_TURNS", "3")
        monkeypatch.setenv("COMPANION_DEFAULT_REGION", "UK")

        settings = Settings(_env_file=None)

        assert settings.question_cooldown_turns == 3
        assert settings.default_region == "UK"

    def test_trend_window_minimum(self):
        """Test a trend window below three is rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, volatility_trend_window=2)

    def test_unknown_region_rejected(self):
        """Test only supported regions are accepted."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_region="FR")

    def test_frozen(self):
        """Test settings cannot be changed after load."""
        settings = Settings(_env_file=None)
        with pytest.raises(ValidationError):
            settings.app_env = "production"

    def test_get_settings_cached(self):
        """Test get_settings returns one instance."""
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestConfigureLogging:
    """Test logging setup."""

    def test_sets_package_level(self):
        """Test the companion logger follows the configured level."""
        configure_logging(Settings(_env_file=None, log_level="DEBUG"))
        assert logging.getLogger("companion").level == logging.DEBUG

        configure_logging(Settings(_env_file=None, log_level="WARNING"))
        assert logging.getLogger("companion").level == logging.WARNING
