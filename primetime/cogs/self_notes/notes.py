from __future__ import annotations

from typing import Any, Dict, Optional

from primetime.core.events import JsonlEventLog


class SelfNotes:
    """Structured notes about the driver itself (startup, ticks, game over)."""

    def __init__(self, event_log: JsonlEventLog):
        self.event_log = event_log

    def note(self, kind: str, payload: Dict[str, Any], at: Optional[int] = None) -> None:
        record: Dict[str, Any] = {"type": "note", "kind": kind, "payload": payload}
        if at is not None:
            record["at"] = at
        self.event_log.write(record)
