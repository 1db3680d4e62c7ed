"""Bounded retry with a fixed delay between attempts."""

import logging
import time
from typing import Callable, TypeVar

T = TypeVar("T")

LOG = logging.getLogger("clabot.retry")


def retry_until(
    fn: Callable[[], T],
    done: Callable[[T], bool],
    attempts: int,
    delay: float,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``fn`` until ``done(result)`` or ``attempts`` calls were made.

    Sleeps ``delay`` seconds between attempts (not after the last one) and
    returns the last result. Exceptions from ``fn`` propagate immediately.
    ``sleep`` only blocks the calling thread; tests pass a no-op.
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1")
    result = fn()
    for attempt in range(2, attempts + 1):
        if done(result):
            return result
        LOG.debug("Attempt %d/%d not done, sleeping %ss", attempt - 1, attempts, delay)
        sleep(delay)
        result = fn()
    return result
