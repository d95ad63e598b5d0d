"""
Bounded exponential-backoff retry for async operations.
"""
import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from ingestion.errors import FetchError, TerminalFetchFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


def backoff_delay(error: FetchError, retry_attempt: int, initial_delay_ms: float) -> float:
    """
    Seconds to wait before retry number ``retry_attempt`` (1-based).

    A server-provided Retry-After wins over initial_delay * 2^(attempt-1).
    """
    if error.retry_after is not None:
        return error.retry_after
    return initial_delay_ms * (2 ** (retry_attempt - 1)) / 1000


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    *,
    max_retries: int,
    initial_delay_ms: float,
    sleep: Sleep = asyncio.sleep,
    description: str = "request",
) -> T:
    """
    Run ``operation`` until it succeeds or ``max_retries`` retries have failed.

    Only FetchError is retried. Anything else, including cancellation of the
    calling task while it waits, propagates untouched.

    Raises:
        TerminalFetchFailure: after the last allowed attempt fails.
    """
    retry_attempt = 0

    while True:
        try:
            return await operation()
        except FetchError as error:
            retry_attempt += 1

            if retry_attempt > max_retries:
                failure = TerminalFetchFailure.from_error(error, attempts=retry_attempt)
                logger.error(
                    f"{description} failed after {retry_attempt} attempts: {failure.message}"
                )
                raise failure from error

            delay = backoff_delay(error, retry_attempt, initial_delay_ms)
            logger.warning(
                f"Attempt {retry_attempt}/{max_retries + 1} of {description} failed "
                f"({error.kind}: {error}), retrying in {delay:.2f}s"
            )
            await sleep(delay)
