"""
Configuration settings for quizpush.

Uses Pydantic Settings for environment variable management with .env file support.
Values here are the fallback layer; a YAML config file passed on the command line
overrides them (see quizpush.canvas.config).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Canvas API
    # ========================================
    canvas_api_base: str | None = Field(
        default=None,
        description="Base URL for the Canvas LMS API, e.g. https://canvas.example.edu/api/v1",
    )
    canvas_auth_token: str | None = Field(
        default=None,
        description="Bearer token for the Canvas API",
    )
    canvas_course_id: str | None = Field(
        default=None,
        description="Course that owns the quiz",
    )
    canvas_quiz_id: str | None = Field(
        default=None,
        description="Existing quiz to replace (None creates a new quiz)",
    )
    canvas_request_timeout: float = Field(
        default=30.0,
        description="Per-request timeout in seconds",
    )

    # ========================================
    # Time Limit
    # ========================================
    canvas_minutes_per_point: int = Field(
        default=1,
        description="Minutes of quiz time per point",
    )
    canvas_extra_minutes: int = Field(
        default=5,
        description="Fixed extra minutes added before rounding up to a multiple of 5",
    )

    # ========================================
    # Sync Behavior
    # ========================================
    quizpush_dry_run: bool = Field(
        default=False,
        description="Perform read calls only and log the writes that would happen",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
