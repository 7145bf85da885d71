"""Configuration management.

Uses pydantic-settings for type-safe configuration from environment variables.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from global_filters.core.logging import LogConfig


class Settings(BaseSettings):
    """Application settings.

    All settings can be overridden via environment variables.
    Prefix: GLOBAL_FILTERS_
    """

    model_config = SettingsConfigDict(
        env_prefix="GLOBAL_FILTERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Formulas
    formula_function: str = Field(
        default="FILTER.VALUE",
        description="Function whose sole string argument references a filter by label",
    )

    # Localization
    translations_path: Path | None = Field(
        default=None,
        description="YAML file mapping source strings to display strings",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")  # 'json' or 'console'

    def log_config(self) -> LogConfig:
        """Build the logging configuration for these settings."""
        return LogConfig(level=self.log_level, format=self.log_format)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
