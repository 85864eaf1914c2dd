"""Bounded retry combinator.

The policy is data: how many attempts, which failures qualify, and how long
to pause between attempts.  Anything the predicate rejects propagates
immediately; the last qualifying failure is re-raised once attempts run out.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning(
        "Attempt %d failed (%s); retrying",
        state.attempt_number,
        exc,
    )


def attempt(
    operation: Callable[[], T],
    *,
    max_attempts: int,
    is_retryable: Callable[[BaseException], bool],
    backoff_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call *operation* up to *max_attempts* times.

    Only exceptions for which *is_retryable* returns ``True`` trigger another
    attempt, after a fixed *backoff_seconds* pause.
    """
    retrying = Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_fixed(backoff_seconds),
        retry=retry_if_exception(is_retryable),
        before_sleep=_log_retry,
        sleep=sleep,
        reraise=True,
    )
    return retrying(operation)
