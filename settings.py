"""Process-level settings for the exercise engine.

Loaded from environment variables prefixed with ``EXERCISE_ENGINE_`` or
from a ``.env`` file in the working directory.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from storage.connection import DEFAULT_DB_PATH


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EXERCISE_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    db_path: Path = Field(
        default=DEFAULT_DB_PATH,
        description="SQLite database holding questions and attempt results",
    )
    log_level: str = Field(
        default="WARNING",
        description="Minimum level written to stderr",
    )
    seed: int | None = Field(
        default=None,
        description="Random seed for item shuffling (None for nondeterministic)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
