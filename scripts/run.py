from __future__ import annotations

from pathlib import Path
from datetime import datetime, timezone
from typing import Optional
import typer
from pydantic import ValidationError

from primetime.core.config import load_config
from primetime.core.tick import run_session

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.command()
def run(
    games: int = typer.Option(5, help="Number of simulated games to play"),
    seed: int = typer.Option(42, help="Deterministic seed for integers and player"),
    runs_dir: Path = typer.Option(Path("runs"), help="Directory to store run artifacts"),
    config: Optional[Path] = typer.Option(None, help="JSON file overriding game tuning"),
    accuracy: float = typer.Option(0.97, help="Probability the simulated player answers correctly"),
    reaction_min: int = typer.Option(350, help="Fastest simulated reaction (ms)"),
    reaction_max: int = typer.Option(1400, help="Slowest simulated reaction (ms)"),
    stray_rate: float = typer.Option(0.02, help="Probability of pressing a non-answer key"),
    max_rounds: int = typer.Option(200, help="Abandon a game after this many rounds (0 = never)"),
):
    """Play simulated Prime Time games and record the run."""
    if config is not None and not config.exists():
        raise typer.BadParameter(f"No config file at {config}")
    try:
        game_config = load_config(config)
    except (ValidationError, ValueError) as exc:
        raise typer.BadParameter(f"Invalid config {config}: {exc}")

    run_id = "pt_" + datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    out_dir = runs_dir / run_id
    out_dir.mkdir(parents=True, exist_ok=False)
    try:
        run_session(
            games=games,
            seed=seed,
            run_dir=out_dir,
            run_id=run_id,
            config=game_config,
            accuracy=accuracy,
            reaction_min=reaction_min,
            reaction_max=reaction_max,
            stray_rate=stray_rate,
            max_rounds=max_rounds or None,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc))
    typer.echo(f"Done. See {out_dir}")


if __name__ == "__main__":
    app()
