from __future__ import annotations
from typing import Any

from .clock import ManualClock, SystemClock
from .rng import SeededRandom


def make_clock(name: str, *, start: int = 0) -> Any:
    name = (name or "").lower().strip()
    if name in {"manual", "sim", "simulated"}:
        return ManualClock(start=start)
    if name in {"system", "wall", "real"}:
        return SystemClock()
    raise ValueError(f"Unknown clock name: {name}")

__all__ = ["make_clock", "ManualClock", "SystemClock", "SeededRandom"]
