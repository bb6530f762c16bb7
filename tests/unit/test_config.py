"""
Unit tests for configuration management.
"""

import os
from decimal import Decimal
from unittest.mock import patch

import pytest
from pydantic import ValidationError

import studio_metrics.config.settings
from studio_metrics.config.settings import (
    MetricsSettings,
    get_config,
    load_config,
    reload_config,
)


class TestMetricsSettings:
    """Test cases for MetricsSettings."""

    def test_config_with_valid_env_vars(self, test_config):
        """Test configuration loads correctly from environment variables."""
        assert test_config.environment == "testing"
        assert test_config.debug is True
        assert test_config.log_level == "DEBUG"
        assert test_config.advance_percentage == Decimal("40")
        assert test_config.month_window == 6
        assert test_config.currency_symbol == "$"
        assert test_config.snapshot_path is None

    def test_env_overrides(self, mock_env):
        """Test business rules can be overridden through the environment."""
        with patch.dict(
            os.environ,
            {
                "SNAPSHOT_PATH": "exports/studio.json",
                "ADVANCE_PERCENTAGE": "50",
                "MONTH_WINDOW": "12",
                "CURRENCY_SYMBOL": "€",
            },
        ):
            config = MetricsSettings()

        assert config.snapshot_path == "exports/studio.json"
        assert config.advance_percentage == Decimal("50")
        assert config.month_window == 12
        assert config.currency_symbol == "€"

    def test_init_by_field_name(self, mock_env):
        """Test settings can be constructed with field names."""
        config = MetricsSettings(month_window=3, advance_percentage=30)

        assert config.month_window == 3
        assert config.advance_percentage == Decimal("30")

    @pytest.mark.parametrize("invalid_log_level", ["TRACE", "VERBOSE", "123"])
    def test_invalid_log_level_validation(self, mock_env, invalid_log_level):
        """Test log level validation with invalid values."""
        with patch.dict(os.environ, {"LOG_LEVEL": invalid_log_level}):
            with pytest.raises(ValidationError) as exc_info:
                MetricsSettings()

        assert "Log level must be one of" in str(exc_info.value)

    @pytest.mark.parametrize(
        "valid_log_level,expected",
        [("debug", "DEBUG"), ("Error", "ERROR"), ("CRITICAL", "CRITICAL")],
    )
    def test_valid_log_level_normalization(self, mock_env, valid_log_level, expected):
        """Test log levels are upper-cased."""
        with patch.dict(os.environ, {"LOG_LEVEL": valid_log_level}):
            config = MetricsSettings()

        assert config.log_level == expected

    @pytest.mark.parametrize("invalid_environment", ["staging", "prod", "dev"])
    def test_invalid_environment_validation(self, mock_env, invalid_environment):
        """Test environment validation with invalid values."""
        with patch.dict(os.environ, {"ENVIRONMENT": invalid_environment}):
            with pytest.raises(ValidationError) as exc_info:
                MetricsSettings()

        assert "Environment must be one of" in str(exc_info.value)

    def test_environment_normalization(self, mock_env):
        """Test environment names are lower-cased."""
        with patch.dict(os.environ, {"ENVIRONMENT": "PRODUCTION"}):
            config = MetricsSettings()

        assert config.environment == "production"

    @pytest.mark.parametrize("value", ["-1", "100.5", "abc"])
    def test_invalid_advance_percentage(self, mock_env, value):
        """Test the advance share must be a percentage."""
        with patch.dict(os.environ, {"ADVANCE_PERCENTAGE": value}):
            with pytest.raises(ValidationError):
                MetricsSettings()

    @pytest.mark.parametrize("value", ["0", "-3"])
    def test_invalid_month_window(self, mock_env, value):
        """Test at least one monthly bucket is required."""
        with patch.dict(os.environ, {"MONTH_WINDOW": value}):
            with pytest.raises(ValidationError) as exc_info:
                MetricsSettings()

        assert "Month window must be at least 1" in str(exc_info.value)


class TestConfigurationFunctions:
    """Test configuration loading functions."""

    def test_load_config_with_env_file(self, tmp_path):
        """Test loading configuration from a specific env file."""
        env_file = tmp_path / ".env.test"
        env_file.write_text("ENVIRONMENT=production\nMONTH_WINDOW=9\n")

        # load_dotenv exports into os.environ; patch.dict restores it on exit
        with patch.dict(os.environ, {}):
            os.environ.pop("ENVIRONMENT", None)
            os.environ.pop("MONTH_WINDOW", None)
            config = load_config(str(env_file))

        assert config.environment == "production"
        assert config.month_window == 9

    def test_get_config_singleton(self, mock_env):
        """Test that get_config returns a singleton instance."""
        studio_metrics.config.settings._config = None

        config1 = get_config()
        config2 = get_config()

        assert config1 is config2

    def test_reload_config(self, mock_env, monkeypatch):
        """Test configuration reload picks up environment changes."""
        config1 = get_config()
        assert config1.month_window == 6

        monkeypatch.setenv("MONTH_WINDOW", "4")
        config2 = reload_config()

        assert config2.month_window == 4
        assert config1 is not config2
        assert get_config() is config2
