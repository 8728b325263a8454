"""
Configuration management for exprcalc.

Handles loading configuration from environment variables, YAML files,
and provides sensible defaults for all settings.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from exprcalc.parser import MAX_NESTING_LIMIT

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="EXPRCALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    log_level: LogLevel = "WARNING"

    # Evaluator settings
    max_nesting_depth: int = Field(default=100, ge=1, le=MAX_NESTING_LIMIT)

    # Calculus settings
    derivative_step: float = Field(default=1e-5, gt=0)
    integration_intervals: int = Field(default=1000, ge=2)
    root_tolerance: float = Field(default=1e-10, gt=0)
    root_max_iterations: int = Field(default=100, ge=1)
    limit_step: float = Field(default=1e-3, gt=0)
    limit_tolerance: float = Field(default=1e-6, gt=0)
    extremum_tolerance: float = Field(default=1e-8, gt=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value


# Global settings instance
settings = Settings()


def load_yaml_config(path: Path) -> dict:
    """Load configuration from a YAML file."""
    import yaml

    if not path.exists():
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


def settings_from_yaml(path: Path) -> Settings:
    """Build settings with values from a YAML file taking precedence."""
    overrides = load_yaml_config(path)
    if not isinstance(overrides, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return Settings(**overrides)
