"""
Application service: bounded retry around a single outbound call.

Failure classes come from src.domain.errors:
  - RateLimitedError       -> wait a fixed backoff, then retry (consumes an attempt).
  - NotFoundError,
    MalformedPayloadError  -> fatal, re-raised after the first attempt.
  - anything else          -> retried immediately until attempts run out.

Each call walks the states ATTEMPTING(n) -> BACKOFF(n) -> ... ending in
SUCCEEDED or FAILED. Cancellation of the awaiting task moves the call
straight to FAILED. The call either returns the operation's full result
or raises; it never returns partial data.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    stop_after_delay,
)

from src.domain.errors import RateLimitedError, RetriesExhaustedError, is_fatal

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleeper = Callable[[float], Awaitable[None]]


class FetchState(str, Enum):
    ATTEMPTING = "attempting"
    BACKOFF = "backoff"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class FetchAttempt:
    """Ephemeral bookkeeping for one fetch() call."""

    label: str
    attempt_number: int = 0
    last_error: Optional[BaseException] = None
    state: FetchState = FetchState.ATTEMPTING

    def transition(self, state: FetchState) -> None:
        logger.debug(
            "%s: %s -> %s (attempt %d)",
            self.label, self.state.value, state.value, self.attempt_number,
        )
        self.state = state


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, Exception) and not is_fatal(exc)


class ResilientFetcher:
    DEFAULT_MAX_RETRIES: int = 3
    DEFAULT_RATE_LIMIT_BACKOFF: float = 2.0

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        rate_limit_backoff: float = DEFAULT_RATE_LIMIT_BACKOFF,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        """
        Args:
            max_retries:        Total attempts allowed per call.
            rate_limit_backoff: Seconds to wait after a rate-limit signal.
            sleep:              Coroutine used to wait; replaced in tests.
        """
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self._max_retries = max_retries
        self._rate_limit_backoff = rate_limit_backoff
        self._sleep = sleep

    async def fetch(
        self,
        operation: Callable[[], Awaitable[T]],
        max_retries: Optional[int] = None,
        *,
        label: str = "fetch",
        deadline: Optional[float] = None,
    ) -> T:
        """Run *operation* until it succeeds, fails fatally, or runs out of attempts.

        Args:
            operation:   Zero-argument coroutine function performing one attempt.
            max_retries: Per-call override of the attempt bound.
            label:       Name used in logs and in RetriesExhaustedError.
            deadline:    Optional overall time budget in seconds.

        Raises:
            NotFoundError, MalformedPayloadError: on the first fatal failure.
            RetriesExhaustedError: when every attempt failed or the deadline passed;
                                   chains the last error.
            ValueError: if the attempt bound is below 1.
        """
        attempts = self._max_retries if max_retries is None else max_retries
        if attempts < 1:
            raise ValueError("max_retries must be at least 1")
        attempt = FetchAttempt(label=label)

        stop = stop_after_attempt(attempts)
        if deadline is not None:
            stop = stop | stop_after_delay(deadline)

        retrying = AsyncRetrying(
            stop=stop,
            wait=self._backoff,
            retry=retry_if_exception(_is_retryable),
            before=lambda state: self._on_attempt(attempt, state),
            before_sleep=lambda state: self._on_backoff(attempt, state),
            sleep=self._wait,
        )

        try:
            result = await retrying(self._run, operation, attempt)
        except RetryError as exc:
            attempt.transition(FetchState.FAILED)
            last_error = exc.last_attempt.exception()
            logger.warning("%s gave up after %d attempt(s): %s", label, attempt.attempt_number, last_error)
            raise RetriesExhaustedError(label, attempt.attempt_number, last_error) from last_error
        except BaseException as exc:
            attempt.transition(FetchState.FAILED)
            if isinstance(exc, asyncio.CancelledError):
                logger.info("%s cancelled during attempt %d", label, attempt.attempt_number)
            else:
                logger.warning("%s failed fatally: %s", label, exc)
            raise

        attempt.transition(FetchState.SUCCEEDED)
        return result

    # ------------------------------------------------------------------
    # tenacity hooks
    # ------------------------------------------------------------------

    @staticmethod
    async def _run(operation: Callable[[], Awaitable[T]], attempt: FetchAttempt) -> T:
        try:
            return await operation()
        except BaseException as exc:
            attempt.last_error = exc
            raise

    def _backoff(self, state: RetryCallState) -> float:
        error = state.outcome.exception() if state.outcome else None
        return self._rate_limit_backoff if isinstance(error, RateLimitedError) else 0.0

    async def _wait(self, seconds: float) -> None:
        if seconds > 0:
            await self._sleep(seconds)

    @staticmethod
    def _on_attempt(attempt: FetchAttempt, state: RetryCallState) -> None:
        attempt.attempt_number = state.attempt_number
        attempt.transition(FetchState.ATTEMPTING)

    @staticmethod
    def _on_backoff(attempt: FetchAttempt, state: RetryCallState) -> None:
        attempt.transition(FetchState.BACKOFF)
        delay = state.next_action.sleep if state.next_action else 0.0
        logger.warning(
            "%s attempt %d failed (%s); retrying in %.1fs",
            attempt.label, attempt.attempt_number, attempt.last_error, delay,
        )
