# ABOUTME: Shared utilities: logging, fetch retries and rich table output
# ABOUTME: Nothing in here knows about listing extraction rules

from .logging import get_logger
from .retry import FetchBlockedError, FetchConnectionError, FetchError, FetchTimeoutError, fetch_retry

__all__ = [
    "get_logger",
    "FetchBlockedError",
    "FetchConnectionError",
    "FetchError",
    "FetchTimeoutError",
    "fetch_retry",
]
