# infrastructure/backoff.py
"""Retry/backoff controllers wrapping one logical request/response cycle.

`ExponentialBackoff` retries transient failures (connection errors, timeouts,
HTTP 429, HTTP 5xx) with exponential jitter backoff, bounded by an attempt
count and an elapsed-time budget. `NoBackoff` calls the operation once; it is
the drop-in for runtimes without timers and changes nothing but retries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Protocol, TypeVar

import httpx
import tenacity
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential_jitter,
)

from common.config import Settings, get_settings
from domain.errors import ApiError, RetryExhaustedError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]

_RETRYABLE_TRANSPORT = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


@dataclass(frozen=True)
class BackoffPolicy:
    max_attempts: int = 5
    max_elapsed: float = 60.0
    initial_interval: float = 0.5
    max_interval: float = 8.0
    jitter: float = 0.5
    retry_after_cap: float = 30.0

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> BackoffPolicy:
        settings = settings or get_settings()
        return cls(
            max_attempts=settings.retry_max_attempts,
            max_elapsed=settings.retry_max_elapsed,
            initial_interval=settings.retry_initial_interval,
            max_interval=settings.retry_max_interval,
            jitter=settings.retry_jitter,
            retry_after_cap=settings.retry_after_cap,
        )


def is_retryable(exc: BaseException) -> bool:
    """Classify a failure as transient (retry) or terminal (surface now)."""
    if isinstance(exc, ApiError):
        if exc.status_code == 429:
            # Out of quota will not clear up by waiting
            return exc.type != "insufficient_quota"
        return exc.status_code is not None and exc.status_code >= 500
    if isinstance(exc, TransportError):
        return isinstance(exc.__cause__, _RETRYABLE_TRANSPORT)
    return False


class _WaitRetryAfter(tenacity.wait.wait_base):
    """Prefer the server's Retry-After delay, else fall back to exponential jitter."""

    def __init__(self, fallback: tenacity.wait.wait_base, cap: float) -> None:
        self.fallback = fallback
        self.cap = cap

    def __call__(self, retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        if outcome is not None and outcome.failed:
            exc = outcome.exception()
            if isinstance(exc, ApiError) and exc.retry_after:
                return min(exc.retry_after, self.cap)
        return self.fallback(retry_state)


class BackoffController(Protocol):
    async def execute(self, operation: Operation[T]) -> T: ...


class NoBackoff:
    async def execute(self, operation: Operation[T]) -> T:
        return await operation()


class ExponentialBackoff:
    def __init__(
        self,
        policy: Optional[BackoffPolicy] = None,
        *,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> None:
        self.policy = policy or BackoffPolicy.from_settings()
        self._sleep = sleep

    def _retrying(self) -> AsyncRetrying:
        p = self.policy
        kwargs = {}
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return AsyncRetrying(
            stop=stop_after_attempt(p.max_attempts) | stop_after_delay(p.max_elapsed),
            wait=_WaitRetryAfter(
                wait_exponential_jitter(
                    initial=p.initial_interval,
                    max=p.max_interval,
                    jitter=p.jitter,
                ),
                p.retry_after_cap,
            ),
            retry=retry_if_exception(is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=False,
            **kwargs,
        )

    async def execute(self, operation: Operation[T]) -> T:
        """
        Run `operation` until it succeeds, fails terminally, or the budget is spent.

        Terminal errors propagate unchanged on the first occurrence. When the
        budget runs out the last error is wrapped in RetryExhaustedError.
        `operation` may be any zero-argument callable returning an awaitable.
        """

        # tenacity only awaits coroutine functions; a lambda returning a
        # coroutine would otherwise count as a successful attempt
        async def attempt() -> T:
            return await operation()

        try:
            return await self._retrying()(attempt)
        except tenacity.RetryError as exc:
            last = exc.last_attempt
            error = last.exception()
            logger.error(
                "retry budget exhausted after %d attempt(s): %s", last.attempt_number, error
            )
            raise RetryExhaustedError(error, attempts=last.attempt_number) from error
