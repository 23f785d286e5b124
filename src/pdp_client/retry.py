"""Bounded retry with capped exponential backoff."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterator, Tuple, Type, TypeVar

from .config import ClientConfig
from .errors import RetryExhausted, TransportFailure

logger = logging.getLogger("pdp_client.retry")

T = TypeVar("T")

# 2 ** 1024 overflows a float
_MAX_DOUBLINGS = 62


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try, how long to wait in between, and what to retry on.

    The wait before attempt ``n`` (``n >= 2``) is ``backoff * 2 ** (n - 2)``,
    never more than ``max_backoff``.
    """

    max_attempts: int = 2
    backoff: float = 0.25
    max_backoff: float = 0.501
    retry_on: Tuple[Type[BaseException], ...] = (TransportFailure,)
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff < 0 or self.max_backoff < 0:
            raise ValueError("backoff values must not be negative")

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "RetryPolicy":
        ceiling_ms = config.retry_backoff_ms * config.retry_max_attempts + 1
        return cls(
            max_attempts=config.retry_max_attempts,
            backoff=config.retry_backoff,
            max_backoff=ceiling_ms / 1000.0,
            sleep=sleep,
        )

    def delays(self) -> Iterator[float]:
        """Yield the wait before each attempt after the first."""
        for retry in range(self.max_attempts - 1):
            yield min(self.backoff * (2 ** min(retry, _MAX_DOUBLINGS)), self.max_backoff)

    def is_retryable(self, exc: BaseException) -> bool:
        return isinstance(exc, self.retry_on)

    def call(self, fn: Callable[[], T]) -> T:
        delays = self.delays()
        attempt = 0
        while True:
            attempt += 1
            try:
                return fn()
            except Exception as exc:
                if not self.is_retryable(exc):
                    raise
                if attempt >= self.max_attempts:
                    logger.error("Giving up after %s attempt(s): %s", attempt, exc)
                    raise RetryExhausted(exc, attempt) from exc
                sleep_for = next(delays)
                logger.warning(
                    "Attempt %s/%s failed (%s); retrying in %.3fs",
                    attempt,
                    self.max_attempts,
                    exc,
                    sleep_for,
                )
                self.sleep(sleep_for)


__all__ = ["RetryPolicy"]
