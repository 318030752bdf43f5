"""Configuration management using Pydantic settings."""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Logging level for CLI scripts")
    snapshot_max_age_hours: float = Field(
        default=24.0,
        description="Warn when the training snapshot is older than this",
    )

    @property
    def log_level_number(self) -> int:
        """Numeric logging level, falling back to INFO for unknown names."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
