"""Retries for calls to the remote question generator."""

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class APIError(Exception):
    """HTTP-level failure from the generator endpoint."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_retryable(self) -> bool:
        # No status means the request never got an answer
        if self.status_code is None:
            return True
        return self.status_code in {408, 429} or 500 <= self.status_code < 600


TRANSIENT_ERRORS = (APIError, ConnectionError, TimeoutError)


@dataclass
class RetryConfig:
    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 30.0

    def delay_after(self, failures: int) -> float:
        """Full-jitter backoff: uniform in ``[0, initial * 2**(failures-1)]``, capped."""
        ceiling = min(self.initial_delay * 2 ** (failures - 1), self.max_delay)
        return random.uniform(0, ceiling)


def with_retry(config: RetryConfig | None = None) -> Callable:
    """Retry transient generator failures with jittered exponential backoff.

    Rate limits, timeouts, 5xx responses and dropped connections are retried
    up to ``config.max_attempts`` times in total. Other 4xx responses and
    any non-transient exception are raised on the spot.
    """
    config = config or RetryConfig()

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            failures = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except TRANSIENT_ERRORS as e:
                    if isinstance(e, APIError) and not e.is_retryable:
                        logger.error("Generator rejected the request: %s", e)
                        raise
                    failures += 1
                    if failures >= config.max_attempts:
                        logger.error("Generator failed after %d attempt(s): %s", failures, e)
                        raise
                    delay = config.delay_after(failures)
                    logger.warning(
                        "Generator attempt %d/%d failed: %s; retrying in %.2fs",
                        failures, config.max_attempts, e, delay,
                    )
                    time.sleep(delay)

        return wrapper
    return decorator
