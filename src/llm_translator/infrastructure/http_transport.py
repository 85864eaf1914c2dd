"""HTTP transport adapter — implements the TranslationTransport port."""

from __future__ import annotations

import base64
import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

import httpx

from llm_translator.domain.entities import ConversationTurn
from llm_translator.domain.exceptions import TransportError
from llm_translator.domain.value_objects import ClientConfig
from llm_translator.services.retry_policy import attempt

logger = logging.getLogger(__name__)

TEMPERATURE = 0.1
MAX_TOKENS = 5000


def is_timeout(exc: BaseException) -> bool:
    """Retry predicate: only httpx timeouts (connect, read, write, pool) qualify."""
    return isinstance(exc, httpx.TimeoutException)


class HttpTransportClient:
    """Concrete ``TranslationTransport`` backed by a blocking ``httpx.Client``.

    Every attempt opens and closes its own client, so no connection outlives
    a call and one instance can be shared freely between threads.

    Parameters
    ----------
    config:
        Endpoint, API key and model identifier.
    connect_timeout / request_timeout:
        Seconds allowed for connection setup and for the whole request.
    max_attempts / backoff_seconds:
        Timeout retry policy; other failures are never retried.
    transport / sleep / clock:
        Injection points for tests (``httpx.MockTransport``, a no-op sleep,
        a fake monotonic clock).
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        connect_timeout: float = 10.0,
        request_timeout: float = 60.0,
        max_attempts: int = 2,
        backoff_seconds: float = 0.5,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._timeout = httpx.Timeout(request_timeout, connect=connect_timeout)
        self._request_timeout = request_timeout
        self._max_attempts = max_attempts
        self._backoff = backoff_seconds
        self._transport = transport
        self._sleep = sleep
        self._clock = clock
        credential = base64.b64encode(config.api_key.encode("utf-8")).decode("ascii")
        self._headers: dict[str, str] = {
            "Content-Type": "application/json",
            "Authorization": f"Basic {credential}",
        }

    def build_payload(self, turns: Sequence[ConversationTurn]) -> dict[str, Any]:
        """Chat-completions request body for *turns*."""
        return {
            "model": self._config.model,
            "messages": [turn.to_message() for turn in turns],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    def send(self, turns: Sequence[ConversationTurn]) -> str:
        """POST the conversation and return the raw body of a 200 response."""
        payload = self.build_payload(turns)
        try:
            return attempt(
                lambda: self._post(payload),
                max_attempts=self._max_attempts,
                is_retryable=is_timeout,
                backoff_seconds=self._backoff,
                sleep=self._sleep,
            )
        except httpx.HTTPError as exc:
            logger.error("Translation request to %s failed: %s", self._config.api_endpoint, exc)
            raise TransportError(
                f"Failed to communicate with translation service: {exc}"
            ) from exc

    def _post(self, payload: dict[str, Any]) -> str:
        """Single attempt; the client is closed before returning or raising.

        httpx timeouts apply per socket operation, so the body is streamed
        and the whole exchange is held to ``request_timeout`` here.  Crossing
        the deadline raises ``httpx.ReadTimeout`` to stay retryable.
        """
        deadline = self._clock() + self._request_timeout
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            with client.stream(
                "POST", self._config.api_endpoint, json=payload, headers=self._headers
            ) as resp:
                if resp.status_code != 200:
                    raise TransportError(
                        f"Translation service returned an error. HTTP Code: {resp.status_code}",
                        status_code=resp.status_code,
                    )
                self._check_deadline(deadline, resp.request)
                chunks: list[bytes] = []
                for chunk in resp.iter_bytes():
                    chunks.append(chunk)
                    self._check_deadline(deadline, resp.request)
                encoding = resp.encoding or "utf-8"

        return b"".join(chunks).decode(encoding, errors="replace")

    def _check_deadline(self, deadline: float, request: httpx.Request) -> None:
        if self._clock() > deadline:
            raise httpx.ReadTimeout(
                f"Request exceeded total timeout of {self._request_timeout:g}s",
                request=request,
            )
