from __future__ import annotations

import time


class ManualClock:
    """A clock that only moves when told to. Used for simulation and tests."""

    def __init__(self, start: int = 0):
        self._now = int(start)

    def now(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("ManualClock cannot move backwards")
        self._now += int(ms)
        return self._now

    def set(self, now: int) -> None:
        if now < self._now:
            raise ValueError("ManualClock cannot move backwards")
        self._now = int(now)


class SystemClock:
    """Monotonic wall time in milliseconds since the clock was created."""

    def __init__(self) -> None:
        self._origin = time.monotonic()

    def now(self) -> int:
        return int((time.monotonic() - self._origin) * 1000)
