"""Lightweight runtime configuration for the hexhop tools."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Minimal application settings, read from ``HEXHOP_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="HEXHOP_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    level_id: int = Field(default=1, ge=1, description="Level started when none is requested")
    seed: str | None = Field(
        default=None, description="Session seed; a random one is generated when unset"
    )
    history_limit: int = Field(
        default=100, gt=0, description="Maximum number of undo snapshots kept per session"
    )
    log_level: str = Field(default="WARNING", description="Root logging level for the CLI")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
