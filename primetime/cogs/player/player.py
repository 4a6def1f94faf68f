from __future__ import annotations

from typing import Tuple
import random

from primetime.core.config import DEFAULT_CONFIG, GameConfig
from primetime.core.controller import is_prime
from primetime.core.state import GameState


class SimulatedPlayer:
    """Autoplay policy for simulated sessions.

    - Knows the right answer and gives it with probability `accuracy`.
    - Takes a uniform reaction time in [reaction_min, reaction_max] ms.
    - Now and then fumbles a key that is neither answer key (`stray_rate`).
    """

    STRAY_KEY = "x"

    def __init__(
        self,
        *,
        seed: int = 0,
        accuracy: float = 0.97,
        reaction_min: int = 350,
        reaction_max: int = 1400,
        stray_rate: float = 0.0,
        config: GameConfig = DEFAULT_CONFIG,
    ) -> None:
        if not 0.0 <= accuracy <= 1.0:
            raise ValueError("accuracy must be within [0, 1]")
        if reaction_min < 0 or reaction_min > reaction_max:
            raise ValueError("need 0 <= reaction_min <= reaction_max")
        self.accuracy = float(accuracy)
        self.reaction_min = int(reaction_min)
        self.reaction_max = int(reaction_max)
        self.stray_rate = float(stray_rate)
        self.config = config
        self._rng = random.Random(int(seed))

    def react(self, state: GameState) -> Tuple[int, str]:
        """Return (latency_ms, key) for the integer currently shown."""
        latency = self._rng.randint(self.reaction_min, self.reaction_max)
        if self._rng.random() < self.stray_rate:
            return latency, self.STRAY_KEY
        guess = is_prime(state.current_integer)
        if self._rng.random() >= self.accuracy:
            guess = not guess
        return latency, self.config.prime_key if guess else self.config.composite_key
