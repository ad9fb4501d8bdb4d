"""
Remote call executor.

The single place where dry-run gating and error translation happen. Every
Canvas call made during a synchronization goes through execute(), which
returns a CallResult instead of raising so the caller decides explicitly
to unwrap() and propagate.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx
from loguru import logger

from quizpush.canvas.client import CanvasClient
from quizpush.canvas.config import SIMULATED_ID_START
from quizpush.errors import RemoteApiError

GET = "GET"
POST = "POST"
PUT = "PUT"
DELETE = "DELETE"

MUTATING_VERBS = frozenset({POST, PUT, DELETE})
# Verbs whose response body is handed back to the caller
BODY_VERBS = frozenset({GET, POST})


@dataclass
class CallResult:
    """Outcome of one remote call: a body, or the error that stopped it."""

    description: str
    body: Any = None
    error: RemoteApiError | None = None
    simulated: bool = False
    status: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the body, raising the stored RemoteApiError on failure."""
        if self.error is not None:
            raise self.error
        return self.body


class RemoteCallExecutor:
    """Executes remote calls with dry-run gating and uniform error translation."""

    def __init__(self, client: CanvasClient, dry_run: bool = False) -> None:
        self.client = client
        self.dry_run = dry_run
        self._simulated_ids = itertools.count(SIMULATED_ID_START)
        self.calls_sent = 0
        self.calls_skipped = 0

    def execute(
        self,
        description: str,
        verb: str,
        path: str,
        body: Any = None,
        simulate: Callable[[int], Any] | None = None,
    ) -> CallResult:
        """
        Execute one logical remote operation.

        Args:
            description: Human-readable description used in logs and errors
            verb: HTTP method (GET, POST, PUT, DELETE)
            path: Path relative to the API base
            body: Optional JSON body
            simulate: Builds the stand-in response for a skipped mutating call,
                given a fresh simulated id. Only called in dry-run.

        Returns:
            CallResult with the parsed body (GET/POST), None (PUT/DELETE),
            or the RemoteApiError describing the failure
        """
        verb = verb.upper()
        logger.info("{} {} {}", verb, path, body if body is not None else "")

        if self.dry_run and verb in MUTATING_VERBS:
            self.calls_skipped += 1
            logger.info("Would execute: {}", description)
            simulated_body = simulate(next(self._simulated_ids)) if simulate else None
            return CallResult(description, body=simulated_body, simulated=True)

        try:
            response = self.client.request(verb, path, body)
        except httpx.TransportError as e:
            logger.error("{} failed: {}", description, e)
            return CallResult(description, error=RemoteApiError(description, None, str(e)))
        self.calls_sent += 1

        if not response.is_success:
            logger.error("{} failed with status {}", description, response.status_code)
            return CallResult(description, error=RemoteApiError(description, response.status_code, response.text))

        if verb not in BODY_VERBS:
            return CallResult(description, status=response.status_code)

        try:
            return CallResult(description, body=response.json(), status=response.status_code)
        except ValueError:
            return CallResult(
                description,
                error=RemoteApiError(f"{description} (unparseable response)", response.status_code, response.text),
            )
