"""
Bounded polling with terminal-state detection.

Exports:
    PollOutcome: Result of wait_until
    wait_until: Poll a check until a predicate holds or a timeout elapses
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass
class PollOutcome:
    """Result of a bounded poll."""
    reached: bool
    last_value: Optional[Any]
    polls: int
    elapsed_seconds: float


def wait_until(
    check: Callable[[], Any],
    is_done: Callable[[Any], bool],
    timeout_seconds: float,
    interval_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
    on_wait: Optional[Callable[[Any, float], None]] = None
) -> PollOutcome:
    """
    Poll until is_done(check()) or the timeout elapses.

    Each tick checks first; if the value is terminal the loop stops without
    sleeping. Otherwise it calls on_wait(value, elapsed), sleeps the interval
    and re-measures elapsed time. The loop never starts a check once
    elapsed >= timeout_seconds.

    Exceptions raised by check or is_done propagate to the caller.
    """
    start = clock()
    elapsed = 0.0
    polls = 0
    last_value = None

    while elapsed < timeout_seconds:
        last_value = check()
        polls += 1
        if is_done(last_value):
            return PollOutcome(
                reached=True,
                last_value=last_value,
                polls=polls,
                elapsed_seconds=clock() - start
            )
        if on_wait is not None:
            on_wait(last_value, elapsed)
        sleep(interval_seconds)
        elapsed = clock() - start

    return PollOutcome(
        reached=False,
        last_value=last_value,
        polls=polls,
        elapsed_seconds=elapsed
    )
