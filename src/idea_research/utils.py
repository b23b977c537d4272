import time
import logging
from functools import wraps
from typing import Callable, Optional, TypeVar, ParamSpec

from .exceptions import RetriesExhaustedError

logger = logging.getLogger(__name__)

P = ParamSpec('P')
T = TypeVar('T')


def linear_backoff(attempt: int, base_delay: float = 1.0) -> float:
    """
    Delay before the next attempt: attempt i waits i * base_delay seconds.

    Args:
        attempt: Number of the attempt that just failed, counted from 1
        base_delay: Seconds per attempt

    Returns:
        Delay in seconds
    """
    if attempt < 1:
        raise ValueError("attempt is counted from 1")
    return base_delay * attempt


def retry_with_policy(func: Callable[[], T],
                      max_attempts: int = 3,
                      should_retry: Callable[[Exception], bool] = lambda e: True,
                      delay_for: Callable[[int], float] = linear_backoff,
                      sleep: Optional[Callable[[float], None]] = None) -> T:
    """
    Call ``func`` until it succeeds or the attempt budget is spent.

    Errors rejected by ``should_retry`` propagate immediately. When every
    attempt fails with a retryable error, RetriesExhaustedError is raised.

    Args:
        func: Zero-argument callable to invoke
        max_attempts: Total number of attempts
        should_retry: Predicate deciding whether an error is transient
        delay_for: Maps the failed attempt number to a delay in seconds
        sleep: Sleep function, defaults to time.sleep

    Returns:
        Whatever ``func`` returns
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    sleep = sleep or time.sleep

    last_error = None
    for attempt in range(1, max_attempts + 1):
        try:
            return func()
        except Exception as e:
            if not should_retry(e):
                raise
            last_error = e
            delay = delay_for(attempt)
            logger.warning(f"Retry {attempt} after rate/quota error: {str(e)}. Waiting {delay:.1f}s")
            sleep(delay)

    logger.error(f"Failed after {max_attempts} attempts: {last_error}")
    raise RetriesExhaustedError(max_attempts, last_error)


def retry(max_attempts: int = 3,
          delay: float = 1.0,
          should_retry: Callable[[Exception], bool] = lambda e: True) -> Callable:
    """
    Retry decorator for handling transient API errors

    Args:
        max_attempts: Maximum number of retry attempts
        delay: Base delay between retries in seconds (linear backoff)
        should_retry: Predicate deciding whether an error is transient

    Returns:
        Decorated function
    """
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return retry_with_policy(
                lambda: func(*args, **kwargs),
                max_attempts=max_attempts,
                should_retry=should_retry,
                delay_for=lambda attempt: linear_backoff(attempt, delay),
            )
        return wrapper
    return decorator
