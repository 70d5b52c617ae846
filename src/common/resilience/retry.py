"""
Retry with Exponential Backoff

Re-runs an async operation when it fails with one of a configured set of
exception types. Any other exception propagates on the first occurrence.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter: bool = True
    retryable_exceptions: tuple[type[Exception], ...] = (
        ConnectionError,
        TimeoutError,
    )

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")


def compute_delay(attempt: int, config: RetryConfig) -> float:
    """
    Delay before the attempt following ``attempt`` (1-indexed).

    Exponential in the attempt number, capped at ``config.max_delay``.
    With jitter enabled the delay is scaled by a random factor in [0.5, 1.5).
    """
    delay = min(
        config.base_delay * (config.exponential_base ** (attempt - 1)),
        config.max_delay,
    )
    if config.jitter:
        delay = delay * (0.5 + random.random())
    return max(0.0, delay)


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    *args,
    config: RetryConfig | None = None,
    on_retry: Callable[[int, Exception, float], None] | None = None,
    **kwargs,
) -> T:
    """
    Retry an async function with exponential backoff.

    Args:
        func: Async function to retry
        *args: Positional arguments for func
        config: Retry configuration
        on_retry: Optional callback(attempt, error, delay) before each retry
        **kwargs: Keyword arguments for func

    Returns:
        Result from the first successful call

    Raises:
        Exception: The last retryable exception once attempts are exhausted,
            or the first non-retryable exception immediately

    Example:
        config = RetryConfig(max_attempts=3, retryable_exceptions=(TransientProviderError,))
        text = await retry_with_backoff(run_attempt, query, config=config)
    """
    config = config or RetryConfig()

    for attempt in range(1, config.max_attempts + 1):
        try:
            return await func(*args, **kwargs)
        except config.retryable_exceptions as e:
            if attempt == config.max_attempts:
                logger.warning(f"Retry exhausted after {attempt} attempts: {e}")
                raise

            delay = compute_delay(attempt, config)
            logger.warning(
                f"Attempt {attempt}/{config.max_attempts} failed: {e}. "
                f"Retrying in {delay:.2f}s"
            )

            if on_retry:
                on_retry(attempt, e, delay)

            await asyncio.sleep(delay)

    # max_attempts >= 1 guarantees the loop returns or raises
    raise RuntimeError("Retry logic error")
