"""Centralized configuration for card-query using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class Settings(BaseSettings):
    """Typed configuration loaded from ``CARD_QUERY_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CARD_QUERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    # Matching
    wildcard_regex: bool = Field(
        default=False,
        description=(
            "Pass regex metacharacters other than '*' in wildcard terms through to the regex engine. "
            "When false they match literally."
        ),
    )

    # Card store
    cards_path: Path | None = Field(default=None, description="JSON file holding the card snapshot")

    # Service
    latest_only: bool = Field(
        default=True,
        description="Discard results of searches superseded by a newer call before their snapshot arrived",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level


def get_settings(**overrides: object) -> Settings:
    """Load settings from the environment, applying keyword overrides."""
    return Settings(**overrides)
