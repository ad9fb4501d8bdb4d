"""
Canvas LMS HTTP client for quizpush.

Thin wrapper around httpx.Client that carries the base URL, bearer token and
timeout. It performs no retries and no status checking: interpreting the
response is the RemoteCallExecutor's job.

Docs: canvas.instructure.com/doc/api/{quizzes,quiz_question_groups,quiz_questions}.html
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from quizpush.canvas.config import CanvasOptions


class CanvasClient:
    """HTTP client for the Canvas REST API."""

    def __init__(
        self,
        api_base: str,
        auth_token: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize Canvas client.

        Args:
            api_base: Base URL for the Canvas API (e.g. https://canvas.example.edu/api/v1)
            auth_token: Bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.api_base = api_base.rstrip("/") + "/"
        self.timeout = timeout
        self.client = httpx.Client(
            base_url=self.api_base,
            headers={
                "Authorization": f"Bearer {auth_token}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )
        logger.debug("Initialized Canvas client: url={}, timeout={}s", self.api_base, timeout)

    @classmethod
    def from_options(cls, options: CanvasOptions, transport: httpx.BaseTransport | None = None) -> CanvasClient:
        return cls(options.api_base, options.auth_token, timeout=options.timeout, transport=transport)

    def request(self, verb: str, path: str, body: Any = None) -> httpx.Response:
        """
        Send one request.

        Args:
            verb: HTTP method
            path: Path relative to the API base (no leading slash)
            body: JSON-serializable request body

        Raises:
            httpx.TransportError: On connection failure or timeout
        """
        if body is None:
            return self.client.request(verb, path)
        return self.client.request(verb, path, json=body)

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> CanvasClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
