"""
Application settings using pydantic-settings.

Values come from BTO_* environment variables or a local .env file and are
loaded once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the BTO console."""

    model_config = SettingsConfigDict(
        env_prefix="BTO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(
        default=Path("files/resources"),
        description="Directory holding the CSV data files",
    )
    log_level: str = Field(default="WARNING", description="Logging level name")
    log_file: Path | None = Field(
        default=None,
        description="Write logs here instead of stderr",
    )
    seed_data: bool = Field(
        default=True,
        description="Create sample CSV files when they are missing",
    )
    max_officer_slots: int = Field(default=10, ge=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
