"""
Error types raised by quizpush.

Every error is fatal to the current run: nothing in the engine retries or
suppresses them, they propagate to the CLI which reports and exits.
"""

from __future__ import annotations

from typing import Any


class QuizPushError(Exception):
    """Base class for all quizpush errors."""


class ConfigError(QuizPushError):
    """Raised when required configuration is missing or contradictory."""


class ContentError(QuizPushError):
    """Raised when a quiz contains content the remote service cannot accept."""


class RemoteApiError(QuizPushError):
    """Raised when a remote call fails or returns a non-success status."""

    def __init__(self, description: str, status: int | None, body: Any = None) -> None:
        self.description = description
        self.status = status
        self.body = body
        super().__init__(f"{description}: {status} {body}")
