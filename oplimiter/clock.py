"""Time sources the engine can be built with."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Anything that reports the current time in whole seconds.

    Implementations must never go backwards between calls made on the same
    engine; after a regression the engine inserts the earlier timestamp at
    its sorted position so that windows stay ordered.
    """

    def now(self) -> int:
        ...


class MonotonicClock:
    """Seconds from ``time.monotonic``; immune to wall-clock adjustments."""

    def now(self) -> int:
        return int(time.monotonic())


class SystemClock:
    """Seconds since the Unix epoch."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """A clock that only moves when told to."""

    def __init__(self, start: int = 0) -> None:
        self._now = start

    def now(self) -> int:
        return self._now

    def set(self, value: int) -> None:
        self._now = value

    def advance(self, seconds: int) -> int:
        """Move the clock forward and return the new time."""
        if seconds < 0:
            raise ValueError("ManualClock cannot move backwards via advance()")
        self._now += seconds
        return self._now


__all__ = ["Clock", "ManualClock", "MonotonicClock", "SystemClock"]
