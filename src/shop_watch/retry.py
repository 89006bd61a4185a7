"""Bounded retry for network-facing calls.

Every call site gets its own budget: a fixed number of attempts with a fixed
delay in between, no jitter and no backoff growth. The last error is
re-raised unchanged once the budget is exhausted.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar

from tenacity import AsyncRetrying, RetryCallState, stop_after_attempt, wait_fixed


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ATTEMPTS = 3
DEFAULT_DELAY = 1.0


def _log_failed_attempt(retry_state: RetryCallState) -> None:
    # Called only when another attempt follows, so the final failure is silent
    delay_ms = int(retry_state.next_action.sleep * 1000) if retry_state.next_action else 0
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Attempt %d failed (%s). Retrying in %dms...",
        retry_state.attempt_number,
        exc,
        delay_ms,
    )


async def retry(
    fn: Callable[[], Awaitable[T]],
    attempts: int = DEFAULT_ATTEMPTS,
    delay: float = DEFAULT_DELAY,
) -> T:
    """Await ``fn()`` up to ``attempts`` times, sleeping ``delay`` seconds between tries."""
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    retrying = AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(delay),
        before_sleep=_log_failed_attempt,
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            return await fn()
    raise RuntimeError("retry loop exited without a result")  # pragma: no cover
