"""
Retry policy for upstream vision calls.

Backoff grows linearly with the attempt number and depends on the kind of
failure. The sleep function is injectable so tests run without delays.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

from ingredient_api.core.config import Settings

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Classification of a failed upstream attempt."""

    NETWORK = "network"
    OVERLOADED = "overloaded"
    RATE_LIMITED = "rate_limited"
    MODEL_NOT_FOUND = "model_not_found"
    FATAL = "fatal"


def classify_status(status_code: int) -> ErrorKind:
    """Map a non-2xx HTTP status to an ErrorKind."""
    if status_code == 503:
        return ErrorKind.OVERLOADED
    if status_code == 429:
        return ErrorKind.RATE_LIMITED
    if status_code == 404:
        return ErrorKind.MODEL_NOT_FOUND
    return ErrorKind.FATAL


Sleep = Callable[[float], Awaitable[None]]


class RetryPolicy:
    """
    Attempt budget plus per-kind linear backoff.

    Only kinds present in ``delays`` are retried. MODEL_NOT_FOUND and FATAL
    are never retried: the caller either falls back or gives up.
    """

    DEFAULT_DELAYS = {
        ErrorKind.NETWORK: 2.0,
        ErrorKind.OVERLOADED: 3.0,
        ErrorKind.RATE_LIMITED: 6.0,
    }

    def __init__(
        self,
        max_attempts: int = 3,
        delays: dict[ErrorKind, float] | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.delays = dict(self.DEFAULT_DELAYS if delays is None else delays)
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, sleep: Sleep = asyncio.sleep) -> "RetryPolicy":
        return cls(
            max_attempts=settings.retry_max_attempts,
            delays={
                ErrorKind.NETWORK: settings.retry_network_delay,
                ErrorKind.OVERLOADED: settings.retry_overloaded_delay,
                ErrorKind.RATE_LIMITED: settings.retry_rate_limited_delay,
            },
            sleep=sleep,
        )

    def backoff(self, attempt: int, kind: ErrorKind) -> float | None:
        """
        Delay before the next attempt, or None when no retry should happen.

        Args:
            attempt: 1-based number of the attempt that just failed
            kind: Why it failed
        """
        if kind not in self.delays or attempt >= self.max_attempts:
            return None
        return attempt * self.delays[kind]

    def should_retry(self, attempt: int, kind: ErrorKind) -> bool:
        return self.backoff(attempt, kind) is not None

    async def wait(self, attempt: int, kind: ErrorKind) -> bool:
        """Sleep for the backoff delay. Returns False if the caller should stop."""
        delay = self.backoff(attempt, kind)
        if delay is None:
            return False
        logger.warning(
            f"Attempt {attempt}/{self.max_attempts} failed ({kind.value}), "
            f"retrying in {delay:.1f}s"
        )
        await self._sleep(delay)
        return True
