"""Game tuning knobs.

All durations are milliseconds. A config file is optional; when given it is a
UTF-8 JSON object with any subset of the fields below, e.g.

    {"min_time_limit": 750, "prime_key": "j", "composite_key": "k"}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class GameConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_time_limit: int = Field(default=2500, gt=0, description="Round budget before any rounds are completed.")
    min_time_limit: int = Field(default=500, gt=0, description="Floor for the shrinking round budget.")
    fuzz: int = Field(default=500, ge=0, description="Slack added before a round counts as expired.")
    tick_interval: int = Field(default=50, gt=0, description="Spacing of timer ticks while in a game.")
    prime_key: str = Field(default="s", description="Key that answers 'prime'.")
    composite_key: str = Field(default="d", description="Key that answers 'not prime'.")

    @field_validator("prime_key", "composite_key")
    @classmethod
    def _non_empty_key(cls, value: str) -> str:
        if not value:
            raise ValueError("answer keys must not be empty")
        return value

    @model_validator(mode="after")
    def _check_consistency(self) -> "GameConfig":
        if self.min_time_limit > self.base_time_limit:
            raise ValueError("min_time_limit must not exceed base_time_limit")
        if self.prime_key == self.composite_key:
            raise ValueError("prime_key and composite_key must differ")
        return self


DEFAULT_CONFIG = GameConfig()


def load_config(path: Optional[Path] = None) -> GameConfig:
    """Read a JSON config file; no path means defaults."""
    if path is None:
        return DEFAULT_CONFIG
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Config root must be a JSON object: {path}")
    return GameConfig.model_validate(raw)
