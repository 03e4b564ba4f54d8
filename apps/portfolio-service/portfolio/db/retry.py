"""
Retry wrapper for store operations.

Built on tenacity. Only transient failures are retried; permanent errors
(constraint, validation, referential, conflict) fail on the first attempt.
Each attempt is bounded by the policy timeout.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
    wait_random,
)

from portfolio.db.errors import ErrorKind, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

BACKOFF_FIXED = "fixed"
BACKOFF_EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class RetryPolicy:
    """How many times and how often a store call is attempted.

    `attempts` is the retry budget and includes the first attempt.
    """

    attempts: int = 3
    delay: float = 1.0
    backoff: str = BACKOFF_FIXED
    max_delay: float = 30.0
    jitter: float = 0.0
    timeout: Optional[float] = 10.0

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("attempts must be at least 1")
        if self.backoff not in (BACKOFF_FIXED, BACKOFF_EXPONENTIAL):
            raise ValueError(f"Unknown backoff strategy: {self.backoff!r}")
        if self.delay < 0 or self.jitter < 0:
            raise ValueError("delay and jitter must be non-negative")

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        return cls(
            attempts=settings.retry_attempts,
            delay=settings.retry_delay_seconds,
            backoff=settings.retry_backoff,
            max_delay=settings.retry_max_delay_seconds,
            jitter=settings.retry_jitter_seconds,
            timeout=settings.store_timeout_seconds,
        )

    def wait_strategy(self):
        if self.backoff == BACKOFF_EXPONENTIAL:
            wait = wait_exponential(multiplier=self.delay, max=self.max_delay)
        else:
            wait = wait_fixed(self.delay)
        if self.jitter > 0:
            wait = wait + wait_random(0, self.jitter)
        return wait


DEFAULT_RETRY_POLICY = RetryPolicy()


def is_retryable(exc: BaseException) -> bool:
    """Return True for failures worth another attempt."""
    if isinstance(exc, StoreError):
        return exc.transient
    return isinstance(exc, (ConnectionError, OSError))


async def _attempt(operation: Callable[[], Awaitable[T]], timeout: Optional[float]) -> T:
    if timeout is None:
        return await operation()
    try:
        return await asyncio.wait_for(operation(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise StoreError(ErrorKind.TIMEOUT, f"store call exceeded {timeout:g}s", cause=exc) from exc


async def with_retry(operation: Callable[[], Awaitable[T]], policy: Optional[RetryPolicy] = None) -> T:
    """Run `operation` under `policy`, re-raising the last error once the budget is spent."""
    policy = policy or DEFAULT_RETRY_POLICY
    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.attempts),
        wait=policy.wait_strategy(),
        retry=retry_if_exception(is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    return await retrying(_attempt, operation, policy.timeout)


__all__ = [
    "BACKOFF_EXPONENTIAL",
    "BACKOFF_FIXED",
    "DEFAULT_RETRY_POLICY",
    "RetryPolicy",
    "is_retryable",
    "with_retry",
]
