from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Any, Deque, Dict, Optional
import json

from primetime.core.config import DEFAULT_CONFIG, GameConfig
from primetime.core.controller import percent_elapsed, time_limit
from primetime.core.state import GameState


class StateTracker:
    """What a presentation layer would read: the latest GameState plus countdown.

    Files (only when `run_dir` is given):
      - state.json  : latest snapshot
      - state.jsonl : append-only history, one line per state change
    """

    def __init__(self, run_dir: Optional[Path] = None, keep: int = 128, config: GameConfig = DEFAULT_CONFIG) -> None:
        self.run_dir = Path(run_dir) if run_dir is not None else None
        self.config = config
        self.history: Deque[Dict[str, Any]] = deque(maxlen=keep)

    def snapshot(self, state: GameState) -> Dict[str, Any]:
        snap: Dict[str, Any] = state.model_dump(mode="json")
        if state.in_game:
            snap["time_limit"] = time_limit(state.rounds, self.config)
            snap["percent_elapsed"] = round(percent_elapsed(state, self.config), 2)
        return snap

    def update(self, state: GameState) -> Dict[str, Any]:
        snap = self.snapshot(state)
        self.history.append(snap)
        if self.run_dir is not None:
            (self.run_dir / "state.json").write_text(json.dumps(snap, indent=2), encoding="utf-8")
            with (self.run_dir / "state.jsonl").open("a", encoding="utf-8") as f:
                f.write(json.dumps(snap) + "\n")
        return snap

    @property
    def latest(self) -> Optional[Dict[str, Any]]:
        return self.history[-1] if self.history else None
