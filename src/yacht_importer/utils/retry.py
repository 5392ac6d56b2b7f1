# ABOUTME: Retry logic for page fetches using tenacity library
# ABOUTME: Converts transport failures into fetch errors and retries the transient ones with backoff

from collections.abc import Callable
from typing import TypeVar

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from yacht_importer.utils.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class FetchError(Exception):
    """Base exception for page fetch failures."""

    pass


class FetchTimeoutError(FetchError):
    """Raised when a page fetch times out."""

    pass


class FetchConnectionError(FetchError):
    """Raised when the remote host cannot be reached."""

    pass


class FetchBlockedError(FetchError):
    """Raised when the site refuses automated access (403, 429, 451)."""

    pass


BLOCKED_STATUS_CODES = {401, 403, 429, 451}


def _convert_exception(e: Exception) -> FetchError:
    """Convert transport exceptions to fetch-specific ones for better handling."""
    if isinstance(e, httpx.TimeoutException):
        return FetchTimeoutError(f"Request timeout: {e}")
    if isinstance(e, httpx.HTTPStatusError):
        if e.response.status_code in BLOCKED_STATUS_CODES:
            return FetchBlockedError(f"Access refused with HTTP {e.response.status_code}")
        if e.response.status_code >= 500:
            return FetchConnectionError(f"Server error HTTP {e.response.status_code}")
        return FetchError(f"HTTP {e.response.status_code} for {e.request.url}")
    if isinstance(e, httpx.TransportError):
        return FetchConnectionError(f"Connection failed: {e}")
    return FetchError(f"Fetch failed: {e}")


def fetch_retry(
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 8.0,
    multiplier: float = 2.0,
):
    """Retry decorator for async fetch calls.

    Timeouts and connection failures are retried with exponential backoff.
    Blocked responses and other HTTP errors fail immediately.
    """

    def decorator(func: Callable):
        async def wrapper(*args, **kwargs):
            retrying = AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
                retry=retry_if_exception_type((FetchTimeoutError, FetchConnectionError)),
                reraise=True,
            )

            async for attempt in retrying:
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.debug("Retrying fetch", attempt=attempt.retry_state.attempt_number)
                    try:
                        return await func(*args, **kwargs)
                    except FetchError:
                        raise
                    except Exception as e:
                        raise _convert_exception(e) from e

        return wrapper

    return decorator
