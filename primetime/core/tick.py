from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional
import json

from rich.console import Console
from rich.table import Table

from primetime.cogs.player.player import SimulatedPlayer
from primetime.cogs.self_notes.notes import SelfNotes
from primetime.cogs.state_tracker.tracker import StateTracker
from primetime.sandbox import ManualClock, SeededRandom
from .config import DEFAULT_CONFIG, GameConfig
from .driver import GameDriver
from .events import JsonlEventLog
from .messages import EnterGame, KeyPressed, NavigateHome


console = Console()

# simulated pause on the GAME_OVER screen before the next game
GAP_BETWEEN_GAMES = 1500


def run_session(
    games: int,
    seed: int,
    run_dir: Path,
    run_id: str,
    config: GameConfig = DEFAULT_CONFIG,
    accuracy: float = 0.97,
    reaction_min: int = 350,
    reaction_max: int = 1400,
    stray_rate: float = 0.02,
    max_rounds: Optional[int] = 200,
    quiet: bool = False,
) -> List[Dict[str, Any]]:
    """Play `games` simulated games on a manual clock and record the run.

    Writes meta.json, events.jsonl, state.json and state.jsonl into `run_dir`.
    A game reaching `max_rounds` is abandoned by navigating home.
    """
    meta = {
        "created_at": datetime.now(timezone.utc).isoformat(),
        "run_id": run_id,
        "games": games,
        "seed": seed,
        "config": config.model_dump(),
        "player": {
            "accuracy": accuracy,
            "reaction_min": reaction_min,
            "reaction_max": reaction_max,
            "stray_rate": stray_rate,
        },
        "max_rounds": max_rounds,
    }
    (run_dir / "meta.json").write_text(json.dumps(meta, indent=2), encoding="utf-8")

    event_log = JsonlEventLog(run_dir / "events.jsonl")
    notes = SelfNotes(event_log=event_log)
    tracker = StateTracker(run_dir=run_dir, config=config)
    clock = ManualClock()
    player = SimulatedPlayer(
        seed=seed + 1,
        accuracy=accuracy,
        reaction_min=reaction_min,
        reaction_max=reaction_max,
        stray_rate=stray_rate,
        config=config,
    )
    driver = GameDriver(
        clock=clock,
        rng=SeededRandom(seed),
        config=config,
        event_log=event_log,
        notes=notes,
        tracker=tracker,
    )
    notes.note(kind="startup", payload={"run_id": run_id, "games": games}, at=clock.now())

    table = Table(title=f"Prime Time — {run_id}")
    table.add_column("Game", justify="right")
    table.add_column("Rounds", justify="right")
    table.add_column("Duration (ms)", justify="right")
    table.add_column("Ending")
    table.add_column("Last n", justify="right")

    results: List[Dict[str, Any]] = []
    try:
        for game in range(1, games + 1):
            ended_before = driver.games_ended
            driver.dispatch(EnterGame())
            while driver.state.in_game:
                if max_rounds is not None and driver.state.rounds >= max_rounds:
                    driver.dispatch(NavigateHome())
                    break
                latency, key = player.react(driver.state)
                driver.advance(latency)
                if driver.state.in_game:
                    driver.dispatch(KeyPressed(key=key))

            state = driver.state
            if driver.games_ended > ended_before and driver.last_ending is not None:
                ending = driver.last_ending["reason"]
                duration = state.game_end - state.game_start
            else:
                ending = "abandoned"
                duration = clock.now() - state.game_start
            result = {
                "game": game,
                "rounds": state.rounds,
                "duration": duration,
                "ending": ending,
                "last_integer": state.current_integer,
            }
            results.append(result)
            table.add_row(str(game), str(state.rounds), str(duration), ending, str(state.current_integer))
            driver.advance(GAP_BETWEEN_GAMES)

        driver.dispatch(NavigateHome())
        notes.note(kind="shutdown", payload={"games": len(results)}, at=clock.now())
    finally:
        event_log.close()

    if not quiet:
        console.print(table)
    return results
