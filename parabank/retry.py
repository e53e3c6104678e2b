"""Bounded retry for flaky calls against the public demo bank.

Fixed delay, fixed number of attempts, last error re-raised unchanged.
"""
import logging
from typing import Any, Callable, Tuple, Type, TypeVar

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from parabank.errors import NetworkError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def log_retry(retry_state: Any) -> None:
    """Tenacity ``before_sleep`` callback."""
    error = None
    if retry_state.outcome and retry_state.outcome.failed:
        error = retry_state.outcome.exception()
    fn_name = getattr(retry_state.fn, "__name__", "call")
    logger.warning("Retrying %s after attempt %s failed: %s", fn_name, retry_state.attempt_number, error)


def with_retry(fn: Callable[..., T], *args: Any, attempts: int = 3, delay: float = 1.0,
               retry_on: Tuple[Type[BaseException], ...] = (NetworkError,), **kwargs: Any) -> T:
    """Call ``fn(*args, **kwargs)`` up to ``attempts`` times while it raises ``retry_on``."""
    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(delay),
        retry=retry_if_exception_type(retry_on),
        before_sleep=log_retry,
        reraise=True,
    )
    return retrying(fn, *args, **kwargs)
