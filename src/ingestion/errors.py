"""
Failure taxonomy for collection retrieval.

Per-attempt failures (FetchError subclasses) stay inside the client and
drive the retry loop. Callers only ever see TerminalFetchFailure.
"""
import math
from typing import Optional

NETWORK = "network"
SERVER = "server"
RATE_LIMITED = "rate_limited"

RATE_LIMIT_STATUS = 429

NETWORK_MESSAGE = "Network error. Please check your connection."
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."


class FetchError(Exception):
    """A single failed attempt."""

    kind = SERVER
    status: Optional[int] = None
    retry_after: Optional[float] = None

    @property
    def message(self) -> str:
        return f"Server Error: {self.status}"


class TransientNetworkError(FetchError):
    """No response reached us (connect, read or timeout failure)."""

    kind = NETWORK

    @property
    def message(self) -> str:
        return NETWORK_MESSAGE


class ServerError(FetchError):
    """The server answered with an error status or an unusable body."""

    def __init__(self, status: int, reason: str = "", retry_after: Optional[float] = None):
        super().__init__(f"{status} {reason}".strip())
        self.status = status
        self.reason = reason
        self.retry_after = retry_after

    @property
    def message(self) -> str:
        return f"Server Error: {self.status} - {self.reason}"


class RateLimited(ServerError):
    """Throttled by the server; may carry a Retry-After hint."""

    kind = RATE_LIMITED

    def __init__(self, reason: str = "Too Many Requests", retry_after: Optional[float] = None):
        super().__init__(RATE_LIMIT_STATUS, reason, retry_after)

    @property
    def message(self) -> str:
        return RATE_LIMIT_MESSAGE


class TerminalFetchFailure(Exception):
    """
    Raised to callers after every attempt has failed.
    """

    def __init__(self, message: str, *, kind: str, status: Optional[int], attempts: int):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status = status
        self.attempts = attempts

    @classmethod
    def from_error(cls, error: FetchError, attempts: int) -> "TerminalFetchFailure":
        return cls(
            error.message,
            kind=error.kind,
            status=error.status,
            attempts=attempts,
        )


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """
    Parse a Retry-After header given in seconds.

    HTTP-date values and garbage return None so the caller falls back to
    exponential backoff.
    """
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds
