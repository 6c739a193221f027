"""Retry helper for establishing the hub connection."""

import asyncio
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class RetryExhausted(Exception):
    """Raised when all retry attempts have been exhausted."""

    def __init__(self, attempts: int, last_exception: Exception):
        self.attempts = attempts
        self.last_exception = last_exception
        super().__init__(f"Failed after {attempts} attempts: {last_exception}")


async def retry_async(
    func: Callable[..., Awaitable[Any]],
    *args: Any,
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
    description: str = "operation",
    **kwargs: Any,
) -> Any:
    """Retry an async function with exponential backoff.

    Only exceptions listed in ``retryable_exceptions`` are retried; any other
    exception propagates immediately.

    Raises:
        RetryExhausted: If all attempts fail
    """
    delay = initial_delay
    last_exception: Exception | None = None

    for attempt in range(1, max_attempts + 1):
        try:
            return await func(*args, **kwargs)
        except retryable_exceptions as e:
            last_exception = e
            if attempt == max_attempts:
                break

            logger.warning(
                f"{description} attempt {attempt}/{max_attempts} failed: {e}. "
                f"Retrying in {delay:.1f}s..."
            )
            await asyncio.sleep(delay)
            delay = min(delay * exponential_base, max_delay)

    raise RetryExhausted(max_attempts, last_exception or Exception("Unknown error"))
