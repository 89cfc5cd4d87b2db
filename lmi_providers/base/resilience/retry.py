"""Retry policy for provider invocations.

Only :class:`ProviderError` failures whose code is listed in
``RetryConfig.retryable_codes`` are retried; everything else propagates on the
first attempt. Delays grow as ``delay_base ** attempt`` seconds.
"""
from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, TypeVar

from ..errors import ErrorCode, ProviderError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 2
    delay_base: float = 2.0
    retryable_codes: tuple[ErrorCode, ...] = (
        ErrorCode.TRANSIENT,
        ErrorCode.RATE_LIMIT,
        ErrorCode.TIMEOUT,
        ErrorCode.UNAVAILABLE,
    )
    attempt_logger: AttemptLogger | None = None
    sleep: Callable[[float], None] = time.sleep

    def delays(self) -> Iterable[float]:
        for attempt in range(max(self.max_attempts, 1) - 1):
            yield self.delay_base**attempt


DEFAULT_RETRY_CONFIG = RetryConfig()


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Return a decorator applying the retry policy to ``func``."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            schedule = list(config.delays()) + [None]
            for attempt, delay in enumerate(schedule):
                try:
                    result = func(*args, **kwargs)
                except ProviderError as e:
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=config.max_attempts,
                            delay=delay,
                            error=e,
                        )
                    if e.code in config.retryable_codes and delay is not None:
                        config.sleep(delay)
                        continue
                    raise
                if config.attempt_logger:
                    config.attempt_logger(
                        attempt=attempt,
                        max_attempts=config.max_attempts,
                        delay=None,
                        error=None,
                    )
                return result
            raise RuntimeError("retry: schedule exhausted without a result")  # pragma: no cover

        return wrapper

    return decorator


__all__ = [
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry",
]
