"""
Configuration management using pydantic-settings.

Loads configuration from environment variables and .env files.
Validates fields and provides typed access to settings.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Cache settings loaded from environment variables.

    Optional:
        STREAM_METADATA_CACHE_TTL_MS: Maximum age of a cache entry in milliseconds
        LOG_LEVEL: Logging level
        LOG_FILE: Path of a JSON-lines log file
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    STREAM_METADATA_CACHE_TTL_MS: int = Field(
        default=5000,
        ge=0,
        description="Maximum age (in milliseconds) of a cache entry",
    )

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    LOG_FILE: Path | None = Field(default=None, description="JSON-lines log file")

    @property
    def ttl_ms(self) -> int:
        """Get cache TTL (lowercase alias)."""
        return self.STREAM_METADATA_CACHE_TTL_MS

    def display(self) -> dict[str, str | int | None]:
        """Return settings as plain values for display."""
        return {
            "STREAM_METADATA_CACHE_TTL_MS": self.STREAM_METADATA_CACHE_TTL_MS,
            "LOG_LEVEL": self.LOG_LEVEL,
            "LOG_FILE": str(self.LOG_FILE) if self.LOG_FILE else None,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings instance loaded from environment.

    Raises:
        ValidationError: If settings are invalid.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
