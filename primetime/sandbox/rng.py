from __future__ import annotations

import random


class SeededRandom:
    """Uniform integers in [min, max], reproducible from the seed."""

    def __init__(self, seed: int = 0):
        self.seed = int(seed)
        self._rng = random.Random(self.seed)

    def next_int(self, min_value: int, max_value: int) -> int:
        if min_value > max_value:
            raise ValueError(f"empty range [{min_value}, {max_value}]")
        return self._rng.randint(int(min_value), int(max_value))
