"""
Retry utilities for throttled control-plane reads.

Describe/list calls against a managed logging service are rate limited
per account. The :func:`retry` decorator re-issues a throttled read with
exponential backoff; it is never applied to create/delete calls, which
must be issued exactly once.
"""

from __future__ import annotations

import time
from functools import wraps
from typing import Callable, Any

from logplane.base.exceptions import ThrottlingError
from logplane.base.logger import lp_logger

_DEFAULT_RETRYABLE: tuple[type[BaseException], ...] = (ThrottlingError,)


def retry(
    max_attempts: int = 5,
    base_delay: float = 0.1,
    max_delay: float = 1.6,
    backoff_factor: float = 2.0,
    retryable_exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable:
    """Decorator: retry a read on throttling with exponential backoff.

    The delay starts at *base_delay* for every call, so a successful
    request resets the backoff for the next one.

    Args:
        max_attempts: Maximum number of total attempts (including the first).
        base_delay: Initial delay in seconds before the first retry.
        max_delay: Cap on the delay between retries.
        backoff_factor: Multiplier applied to the delay after each retry.
        retryable_exceptions: Exception types that trigger a retry.
            Defaults to :class:`ThrottlingError`.

    Returns:
        Decorated function that re-raises the last exception once
        *max_attempts* is exhausted.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    if retryable_exceptions is None:
        retryable_exceptions = _DEFAULT_RETRYABLE

    def decorator(fn: Callable) -> Callable:
        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = base_delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return fn(*args, **kwargs)
                except retryable_exceptions as exc:
                    if attempt == max_attempts:
                        lp_logger.warning(
                            f"{fn.__qualname__} still throttled after {max_attempts} attempts: {exc}",
                            operation=fn.__name__,
                        )
                        raise
                    lp_logger.debug(
                        f"{fn.__qualname__} throttled (attempt {attempt}/{max_attempts}); "
                        f"retrying in {delay:.2f}s",
                        operation=fn.__name__,
                    )
                    time.sleep(delay)
                    delay = min(delay * backoff_factor, max_delay)
            raise AssertionError("unreachable")

        return wrapper

    return decorator
