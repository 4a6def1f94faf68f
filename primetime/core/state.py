from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Screen(str, Enum):
    HOME = "home"
    ABOUT = "about"
    GAME = "game"
    GAME_OVER = "game_over"


class GameState(BaseModel):
    """The whole game model. Replaced on every fold, never mutated.

    Timestamps are milliseconds from the injected clock; 0 until first set.
    Only `screen` decides which of the other fields mean anything.
    """

    model_config = ConfigDict(frozen=True)

    screen: Screen = Screen.HOME
    rounds: int = Field(default=0, ge=0)
    game_start: int = 0
    game_end: int = 0
    timer_start: int = 0
    timer_latest: int = 0
    current_integer: int = Field(default=1, ge=1)
    keyboard_hint: bool = False

    def replace(self, **changes: Any) -> "GameState":
        """Return a validated copy with `changes` applied."""
        return GameState(**{**self.model_dump(), **changes})

    @property
    def in_game(self) -> bool:
        return self.screen is Screen.GAME

    @property
    def elapsed(self) -> int:
        return self.timer_latest - self.timer_start
