"""
Configuration management for the metrics engine.
"""

from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MetricsSettings(BaseSettings):
    """Configuration settings for the metrics engine."""

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Data source
    snapshot_path: Optional[str] = Field(default=None, alias="SNAPSHOT_PATH")

    # Business rules
    advance_percentage: Decimal = Field(
        default=Decimal("40"), alias="ADVANCE_PERCENTAGE"
    )
    month_window: int = Field(default=6, alias="MONTH_WINDOW")
    currency_symbol: str = Field(default="$", alias="CURRENCY_SYMBOL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("advance_percentage")
    @classmethod
    def validate_advance_percentage(cls, v):
        """Advance share must be a percentage of the price."""
        if not Decimal("0") <= v <= Decimal("100"):
            raise ValueError("Advance percentage must be between 0 and 100")
        return v

    @field_validator("month_window")
    @classmethod
    def validate_month_window(cls, v):
        """At least one monthly bucket must be kept."""
        if v < 1:
            raise ValueError("Month window must be at least 1")
        return v


def load_config(env_file: Optional[str] = None) -> MetricsSettings:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return MetricsSettings()


# Global configuration instance
_config: Optional[MetricsSettings] = None


def get_config() -> MetricsSettings:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> MetricsSettings:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
