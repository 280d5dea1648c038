"""Retry helper with linear backoff."""

import logging
import time
from typing import Callable, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


def retry_with_backoff(
    operation: Callable[[], T],
    max_attempts: int = 3,
    base_delay: float = 1.0,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
) -> T:
    """Call operation until it succeeds or max_attempts is used up.

    After failed attempt n the helper sleeps n * base_delay seconds. Only
    exceptions listed in retry_on are retried; anything else propagates
    immediately, as does the last error once the budget is spent.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(1, max_attempts + 1):
        try:
            return operation()
        except retry_on as e:
            if attempt >= max_attempts:
                raise
            delay = attempt * base_delay
            logger.warning("Attempt %d/%d failed (%s), retrying in %.1fs", attempt, max_attempts, e, delay)
            time.sleep(delay)

    raise AssertionError("unreachable")
