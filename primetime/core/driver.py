from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, List, Optional

from primetime.cogs.self_notes.notes import SelfNotes
from primetime.cogs.state_tracker.tracker import StateTracker
from .config import DEFAULT_CONFIG, GameConfig
from .controller import transition
from .events import JsonlEventLog
from .messages import KeyPressed, RequestCurrentTime, RequestRandomInt, TimerTick, respond
from .state import GameState, Screen


class GameDriver:
    """Sequential driver around `transition`.

    Events go through one FIFO queue. Requests emitted by a fold are resolved
    right away against the clock / random collaborators and their responses
    queued behind, so they are folded before any later tick or answer.

    Timer ticks are subscribed while the screen is GAME and dropped otherwise.
    `advance` delivers ticks on a ManualClock; `pump` does it for a real clock.
    """

    def __init__(
        self,
        *,
        clock: Any,
        rng: Any,
        config: GameConfig = DEFAULT_CONFIG,
        event_log: Optional[JsonlEventLog] = None,
        notes: Optional[SelfNotes] = None,
        tracker: Optional[StateTracker] = None,
        state: Optional[GameState] = None,
    ) -> None:
        self.clock = clock
        self.rng = rng
        self.config = config
        self.event_log = event_log
        self.notes = notes
        self.tracker = tracker
        self.state = state if state is not None else GameState()
        self.games_ended = 0
        self.last_ending: Optional[Dict[str, Any]] = None
        self._queue: Deque[Any] = deque()
        self._next_tick: Optional[int] = None
        self._draining = False
        self._sync_ticks()

    @property
    def subscribed(self) -> bool:
        return self._next_tick is not None

    @property
    def next_tick(self) -> Optional[int]:
        return self._next_tick

    # ------------------------------ API ------------------------------
    def dispatch(self, event: Any) -> GameState:
        # the input collaborator only forwards keys during a game
        if isinstance(event, KeyPressed) and not self.state.in_game:
            return self.state
        self._queue.append(event)
        self._drain()
        return self.state

    def advance(self, ms: int) -> GameState:
        """Move a ManualClock forward by `ms`, delivering every tick that falls due."""
        target = self.clock.now() + int(ms)
        while self._next_tick is not None and self._next_tick <= target:
            due = self._next_tick
            self.clock.set(due)
            self._next_tick = due + self.config.tick_interval
            self.dispatch(TimerTick(now=due))
        self.clock.set(target)
        return self.state

    def pump(self) -> GameState:
        """Deliver one tick if due. Missed ticks collapse into one."""
        now = self.clock.now()
        if self._next_tick is not None and now >= self._next_tick:
            self._next_tick = now + self.config.tick_interval
            self.dispatch(TimerTick(now=now))
        return self.state

    # ---------------------------- helpers ----------------------------
    def _drain(self) -> None:
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue:
                self._fold(self._queue.popleft())
        finally:
            self._draining = False

    def _fold(self, event: Any) -> None:
        before = self.state
        self.state, requests = transition(before, event, self.config)
        now = self.clock.now()

        if self.event_log is not None:
            self.event_log.write(
                {
                    "type": "event",
                    "at": now,
                    "event": event.model_dump(mode="json"),
                    "screen": self.state.screen.value,
                    "rounds": self.state.rounds,
                    "requests": [r.model_dump(mode="json") for r in requests],
                }
            )

        for request in requests:
            self._queue.append(self._resolve(request))

        if self.state == before:
            return
        if before.in_game and self.state.screen is Screen.GAME_OVER:
            self._on_game_over(event, now)
        if self.tracker is not None:
            self.tracker.update(self.state)
        self._sync_ticks()

    def _resolve(self, request: Any) -> Any:
        if isinstance(request, RequestCurrentTime):
            return respond(request.tag, self.clock.now())
        if isinstance(request, RequestRandomInt):
            return respond(request.tag, self.rng.next_int(request.min, request.max))
        raise TypeError(f"Unknown request: {request!r}")

    def _on_game_over(self, event: Any, now: int) -> None:
        self.games_ended += 1
        self.last_ending = {
            "game": self.games_ended,
            "rounds": self.state.rounds,
            "reason": "timeout" if isinstance(event, TimerTick) else "wrong_answer",
            "integer": self.state.current_integer,
            "at": now,
        }
        if self.notes is not None:
            self.notes.note(kind="game_over", payload=dict(self.last_ending), at=now)

    def _sync_ticks(self) -> None:
        if self.state.in_game and self._next_tick is None:
            self._next_tick = self.clock.now() + self.config.tick_interval
            if self.notes is not None:
                self.notes.note(kind="ticks", payload={"subscribed": True, "next": self._next_tick}, at=self.clock.now())
        elif not self.state.in_game and self._next_tick is not None:
            self._next_tick = None
            if self.notes is not None:
                self.notes.note(kind="ticks", payload={"subscribed": False}, at=self.clock.now())
