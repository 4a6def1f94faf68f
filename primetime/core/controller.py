from __future__ import annotations

from typing import Any, List, Tuple

from .config import DEFAULT_CONFIG, GameConfig
from .messages import (
    Answer,
    EnterGame,
    GameEnded,
    GameStarted,
    KeyPressed,
    NavigateAbout,
    NavigateHome,
    Request,
    RequestCurrentTime,
    RequestRandomInt,
    RoundStarted,
    Tag,
    TimerStarted,
    TimerTick,
)
from .state import GameState, Screen

Transition = Tuple[GameState, List[Request]]


def is_prime(n: int) -> bool:
    """Trial division by every i in [2, n-1]. Slow on purpose; n stays small."""
    if n < 1:
        raise ValueError(f"is_prime is defined for n >= 1, got {n}")
    if n == 1:
        return False
    if n < 4:
        return True
    for i in range(2, n):
        if n % i == 0:
            return False
    return True


def time_limit(rounds: int, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Round budget in ms: one ms less per completed round, never below the floor."""
    return max(config.min_time_limit, config.base_time_limit - rounds)


def percent_elapsed(state: GameState, config: GameConfig = DEFAULT_CONFIG) -> float:
    return 100.0 * state.elapsed / time_limit(state.rounds, config)


def time_remaining(state: GameState, config: GameConfig = DEFAULT_CONFIG) -> int:
    return time_limit(state.rounds, config) - state.elapsed


def _new_round(rounds: int) -> List[Request]:
    return [
        RequestRandomInt(min=1, max=rounds + 1, tag=Tag.ROUND_STARTED),
        RequestCurrentTime(tag=Tag.TIMER_STARTED),
    ]


def _game_over(state: GameState) -> Transition:
    return state.replace(screen=Screen.GAME_OVER), [RequestCurrentTime(tag=Tag.GAME_ENDED)]


def _answer(state: GameState, guess: bool) -> Transition:
    if not state.in_game:
        return state, []
    if guess == is_prime(state.current_integer):
        rounds = state.rounds + 1
        return state.replace(rounds=rounds), _new_round(rounds)
    return _game_over(state)


def _tick(state: GameState, now: int, config: GameConfig) -> Transition:
    state = state.replace(timer_latest=now)
    if state.in_game and now - state.timer_start > time_limit(state.rounds, config) + config.fuzz:
        return _game_over(state)
    return state, []


def _key(state: GameState, key: str, config: GameConfig) -> Transition:
    if key == config.prime_key:
        return _answer(state, True)
    if key == config.composite_key:
        return _answer(state, False)
    return state.replace(keyboard_hint=True), []


def transition(state: GameState, event: Any, config: GameConfig = DEFAULT_CONFIG) -> Transition:
    """Fold one event into `state`.

    Returns the next state and the requests the driver must resolve. Each
    request comes back later as the event its tag names (see `respond`).
    Answers, answer keys and timer expiry only act on the GAME screen.
    """
    if isinstance(event, NavigateHome):
        return state.replace(screen=Screen.HOME), []
    if isinstance(event, NavigateAbout):
        return state.replace(screen=Screen.ABOUT), []
    if isinstance(event, EnterGame):
        return state.replace(screen=Screen.GAME, rounds=0), [RequestCurrentTime(tag=Tag.GAME_STARTED)]
    if isinstance(event, GameStarted):
        return state.replace(game_start=event.now), _new_round(state.rounds)
    if isinstance(event, Answer):
        return _answer(state, event.is_prime_guess)
    if isinstance(event, TimerTick):
        return _tick(state, event.now, config)
    if isinstance(event, RoundStarted):
        return state.replace(current_integer=event.n), []
    if isinstance(event, TimerStarted):
        # both timestamps restart with the round
        return state.replace(timer_start=event.now, timer_latest=event.now), []
    if isinstance(event, GameEnded):
        return state.replace(game_end=event.now), []
    if isinstance(event, KeyPressed):
        return _key(state, event.key, config)
    raise TypeError(f"Not a game event: {event!r}")
