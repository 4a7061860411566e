"""
Retry with capped exponential backoff.

Node bootstrap depends on collaborators that may not be ready yet: the
validator may still be starting, or the settings it serves may not have
been committed. Rather than fail, the node keeps asking.

How It Works
------------
1. Call the operation.
2. On success, return its result.
3. On failure, sleep for the next delay and try again.

Delays start at the base and double after each failure until they reach
the cap. With a 100 ms base and a 60 s cap the schedule is::

    0.1, 0.2, 0.4, 0.8, ... 51.2, 60, 60, 60, ...

There is no attempt limit. An optional timeout bounds the total wait.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from datetime import timedelta
from typing import TypeVar

from pbft.types import RetryDeadlineExceeded

T = TypeVar("T")

logger = logging.getLogger(__name__)


def backoff_delays(base: timedelta, maximum: timedelta) -> Iterator[timedelta]:
    """
    Yield the infinite sequence of delays between attempts.

    Each delay doubles the previous one. Every element is capped at `maximum`.

    Args:
        base: First delay.
        maximum: Upper bound for any single delay.
    """
    delay = min(base, maximum)
    while True:
        yield delay
        # Stop doubling once capped; keeps the arithmetic bounded.
        if delay < maximum:
            delay = min(delay * 2, maximum)


def retry_until_ok(
    base: timedelta,
    maximum: timedelta,
    operation: Callable[[], T],
    *,
    timeout: timedelta | None = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    """
    Call `operation` until it returns without raising.

    Any `Exception` counts as a transient failure. Other `BaseException`s,
    such as `KeyboardInterrupt`, propagate immediately.

    Args:
        base: Delay after the first failure.
        maximum: Cap on the delay after any failure.
        operation: Zero-argument callable to retry.
        timeout: Optional bound on the total time spent. None retries forever.
        sleep: Blocking sleep taking seconds (injectable for testing).
        clock: Monotonic time source in seconds (injectable for testing).

    Returns:
        The first successful result.

    Raises:
        ValueError: If `base` or `maximum` is negative.
        RetryDeadlineExceeded: If `timeout` is set and the next sleep would pass it.
    """
    if base < timedelta(0) or maximum < timedelta(0):
        raise ValueError(f"Backoff delays must be non-negative, got base={base}, max={maximum}")

    started = clock()
    delays = backoff_delays(base, maximum)
    attempts = 0

    while True:
        attempts += 1
        try:
            return operation()
        except Exception as e:
            delay = next(delays)

            if timeout is not None:
                elapsed = clock() - started
                if elapsed + delay.total_seconds() > timeout.total_seconds():
                    raise RetryDeadlineExceeded(attempts, e) from e

            logger.warning(
                "Attempt %d failed, retrying in %.3fs: %s",
                attempts,
                delay.total_seconds(),
                e,
            )
            sleep(delay.total_seconds())
