"""
Canvas configuration constants and options loading.

Centralizes the Canvas-related defaults and turns the YAML config file plus
environment settings into a validated CanvasOptions object.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from config import Settings, get_settings
from quizpush.errors import ConfigError

# =============================================================================
# Default Quiz Options - merged under the user's "quiz:" overlay
# =============================================================================
DEFAULT_QUIZ_OPTIONS: dict[str, Any] = {
    "quiz_type": "assignment",
    "shuffle_answers": True,
    "show_correct_answers": False,
    "one_question_at_a_time": False,
    "cant_go_back": False,
    "allowed_attempts": 1,
    "published": False,
}

# =============================================================================
# Time Limit
# =============================================================================
DEFAULT_MINUTES_PER_POINT = 1
DEFAULT_EXTRA_MINUTES = 5
TIME_LIMIT_GRANULARITY = 5  # minutes

# =============================================================================
# Question Payload
# =============================================================================
# Canvas treats this position as "append after existing questions"
APPEND_POSITION = 10000
CORRECT_WEIGHT = 100
INCORRECT_WEIGHT = 0
SELECT_ALL_PREFIX = "(Select all that apply.) "

# =============================================================================
# Dry Run
# =============================================================================
# Simulated ids are drawn from here upward; they never reach the remote side
SIMULATED_ID_START = 1000


class CanvasOptions(BaseModel):
    """Validated options for one synchronization run."""

    api_base: str = Field(min_length=1)
    auth_token: str = Field(min_length=1)
    course_id: str = Field(min_length=1)
    quiz_id: str | None = None
    dry_run: bool = False
    minutes_per_point: int = Field(default=DEFAULT_MINUTES_PER_POINT, ge=1)
    extra_minutes: int = Field(default=DEFAULT_EXTRA_MINUTES, ge=0)
    timeout: float = Field(default=30.0, gt=0)
    quiz_options: dict[str, Any] = Field(default_factory=lambda: dict(DEFAULT_QUIZ_OPTIONS))

    @field_validator("course_id", "quiz_id", mode="before")
    @classmethod
    def _ids_as_strings(cls, value: Any) -> Any:
        # YAML reads bare numeric ids as ints
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def replacing(self) -> bool:
        return self.quiz_id is not None


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read Canvas config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse Canvas config file {path}: {e}") from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigError(f"Canvas config file {path} must contain a mapping")
    return document


def _section(document: dict[str, Any], name: str) -> dict[str, Any]:
    section = document.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' section of the Canvas config must be a mapping")
    return section


def _resolve_quiz_id(canvas: dict[str, Any], quiz_overlay: dict[str, Any]) -> Any:
    canvas_quiz_id = canvas.get("quiz_id")
    overlay_quiz_id = quiz_overlay.pop("quiz_id", None)
    if canvas_quiz_id is not None and overlay_quiz_id is not None and str(canvas_quiz_id) != str(overlay_quiz_id):
        raise ConfigError(
            f"Contradictory quiz_id: canvas section has {canvas_quiz_id}, quiz section has {overlay_quiz_id}"
        )
    return canvas_quiz_id if canvas_quiz_id is not None else overlay_quiz_id


def load_canvas_options(
    path: Path | str | None = None,
    dry_run: bool = False,
    settings: Settings | None = None,
) -> CanvasOptions:
    """
    Build CanvasOptions from an optional YAML config file and the environment.

    Args:
        path: YAML file with optional "dry_run", "canvas" and "quiz" sections
        dry_run: Force a dry run regardless of configuration
        settings: Environment settings (default: get_settings())

    Returns:
        Validated options

    Raises:
        ConfigError: If required values are missing or contradictory
    """
    settings = settings or get_settings()
    document = _read_config_file(Path(path)) if path else {}
    canvas = _section(document, "canvas")
    quiz_overlay = dict(_section(document, "quiz"))

    quiz_id = _resolve_quiz_id(canvas, quiz_overlay)
    if quiz_id is None:
        quiz_id = settings.canvas_quiz_id

    raw = {
        "api_base": canvas.get("api_base") or settings.canvas_api_base,
        "auth_token": canvas.get("auth_token") or settings.canvas_auth_token,
        "course_id": canvas.get("course_id") or settings.canvas_course_id,
        "quiz_id": quiz_id,
        "dry_run": bool(dry_run or document.get("dry_run") or settings.quizpush_dry_run),
        "minutes_per_point": canvas.get("minutes_per_point", settings.canvas_minutes_per_point),
        "extra_minutes": canvas.get("extra_minutes", settings.canvas_extra_minutes),
        "timeout": canvas.get("timeout", settings.canvas_request_timeout),
        "quiz_options": {**DEFAULT_QUIZ_OPTIONS, **quiz_overlay},
    }

    for required in ("course_id", "auth_token", "api_base"):
        if not raw[required]:
            raise ConfigError(f"{required} missing from Canvas config")

    try:
        options = CanvasOptions.model_validate(raw)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Invalid Canvas config: {problems}") from e

    if options.dry_run:
        logger.warning("Doing dry run without making any changes")
    logger.info("Using {}", options.api_base)
    logger.info("Using quiz options: {}", options.quiz_options)
    return options
