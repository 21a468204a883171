"""
Retry logic with exponential backoff for job posting imports.

Posting pages sit behind ordinary web servers that time out, drop
connections and rate limit. Those failures are retried; anything else
(404, bad URL) fails immediately.
"""

import time
import functools
from typing import Callable, Iterator, Optional, Tuple, Type

from .errors import RetryError

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

TRANSIENT_MARKERS = (
    "timeout",
    "timed out",
    "connection",
    "temporary failure",
    "service unavailable",
    "503",
    "502",
    "500",
    "429",
)


class TransientHTTPError(Exception):
    """A response whose status code is worth retrying."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code
        self.url = url


def backoff_delays(
    retries: int,
    base_delay: float,
    max_delay: float,
    exponential_base: float,
) -> Iterator[float]:
    """Yield the sleep before each retry: base, base*k, base*k^2, ... capped."""
    delay = base_delay
    for _ in range(retries):
        yield min(delay, max_delay)
        delay *= exponential_base


def exponential_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    on_retry: Optional[Callable[[int, Exception, float], None]] = None,
):
    """
    Decorator for retrying functions with exponential backoff.

    Args:
        max_retries: Maximum number of retry attempts (0 = no retries)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries in seconds
        exponential_base: Multiplier applied to the delay after each retry
        exceptions: Exception types that trigger a retry; others propagate
        on_retry: Optional callback(attempt, exception, delay)

    Raises:
        RetryError: When the last attempt also fails, chained to its exception
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            delays = backoff_delays(max_retries, base_delay, max_delay, exponential_base)
            attempt = 0
            while True:
                attempt += 1
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    delay = next(delays, None)
                    if delay is None:
                        raise RetryError(f"Failed after {attempt} attempts: {e}") from e
                    if on_retry:
                        on_retry(attempt, e, delay)
                    time.sleep(delay)

        return wrapper
    return decorator


def is_transient_error(exception: Exception) -> bool:
    """Heuristic check for errors that usually go away on retry."""
    if isinstance(exception, TransientHTTPError):
        return True
    error_str = str(exception).lower()
    return any(marker in error_str for marker in TRANSIENT_MARKERS)


def should_retry_http_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS_CODES
