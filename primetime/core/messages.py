from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class Tag(str, Enum):
    """Correlation tags: which follow-up event a resolved request becomes."""

    GAME_STARTED = "game_started"
    ROUND_STARTED = "round_started"
    TIMER_STARTED = "timer_started"
    GAME_ENDED = "game_ended"


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True)


# ------------------------------ events ------------------------------

class NavigateHome(_Message):
    kind: Literal["navigate_home"] = "navigate_home"


class NavigateAbout(_Message):
    kind: Literal["navigate_about"] = "navigate_about"


class EnterGame(_Message):
    kind: Literal["enter_game"] = "enter_game"


class GameStarted(_Message):
    kind: Literal["game_started"] = "game_started"
    now: int


class Answer(_Message):
    kind: Literal["answer"] = "answer"
    is_prime_guess: bool


class TimerTick(_Message):
    kind: Literal["timer_tick"] = "timer_tick"
    now: int


class RoundStarted(_Message):
    kind: Literal["round_started"] = "round_started"
    n: int = Field(ge=1)


class TimerStarted(_Message):
    kind: Literal["timer_started"] = "timer_started"
    now: int


class GameEnded(_Message):
    kind: Literal["game_ended"] = "game_ended"
    now: int


class KeyPressed(_Message):
    kind: Literal["key_pressed"] = "key_pressed"
    key: str


Event = Annotated[
    Union[
        NavigateHome,
        NavigateAbout,
        EnterGame,
        GameStarted,
        Answer,
        TimerTick,
        RoundStarted,
        TimerStarted,
        GameEnded,
        KeyPressed,
    ],
    Field(discriminator="kind"),
]

EVENT_TYPES = (
    NavigateHome,
    NavigateAbout,
    EnterGame,
    GameStarted,
    Answer,
    TimerTick,
    RoundStarted,
    TimerStarted,
    GameEnded,
    KeyPressed,
)


# ----------------------------- requests -----------------------------

class RequestCurrentTime(_Message):
    kind: Literal["current_time"] = "current_time"
    tag: Tag


class RequestRandomInt(_Message):
    kind: Literal["random_int"] = "random_int"
    min: int
    max: int
    tag: Tag

    @model_validator(mode="after")
    def _check_bounds(self) -> "RequestRandomInt":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


Request = Union[RequestCurrentTime, RequestRandomInt]


_EVENT_ADAPTER: TypeAdapter[Any] = TypeAdapter(Event)

_RESPONSES = {
    Tag.GAME_STARTED: lambda v: GameStarted(now=v),
    Tag.ROUND_STARTED: lambda v: RoundStarted(n=v),
    Tag.TIMER_STARTED: lambda v: TimerStarted(now=v),
    Tag.GAME_ENDED: lambda v: GameEnded(now=v),
}


def respond(tag: Tag, value: int) -> Any:
    """Build the follow-up event for a request resolved to `value`."""
    return _RESPONSES[Tag(tag)](int(value))


def parse_event(data: Dict[str, Any]) -> Any:
    """Validate a serialized event (as written to events.jsonl)."""
    return _EVENT_ADAPTER.validate_python(data)
