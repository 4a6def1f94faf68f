from __future__ import annotations

from pathlib import Path
from typing import List, Optional
import json
import typer
from rich.console import Console
from rich.table import Table

from primetime.eval.metrics import load_records

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


def _latest_run_dir(runs_dir: Path) -> Path:
    if not runs_dir.exists():
        raise typer.BadParameter(f"No runs directory at {runs_dir}")
    candidates = [p for p in runs_dir.iterdir() if p.is_dir()]
    if not candidates:
        raise typer.BadParameter(f"No runs found in {runs_dir}")
    return max(candidates, key=lambda p: p.stat().st_mtime)


def _summary(record: dict) -> str:
    if record.get("type") == "note":
        return f"{record.get('kind')}: {json.dumps(record.get('payload', {}))}"
    event = dict(record.get("event") or {})
    name = event.pop("kind", "?")
    args = ", ".join(f"{k}={v}" for k, v in event.items())
    reqs = " ".join(r.get("tag", "?") for r in record.get("requests", []))
    return f"{name}({args})" + (f" -> {reqs}" if reqs else "")


@app.command()
def replay(
    runs_dir: Path = typer.Option(Path("runs"), help="Directory containing runs"),
    run_path: Optional[Path] = typer.Option(None, help="Specific run directory to replay"),
    kind: List[str] = typer.Option([], help="Filter by event kind or note kind, e.g. --kind answer --kind game_over"),
    skip_ticks: bool = typer.Option(True, help="Hide timer ticks that did not end a game"),
    limit: int = typer.Option(200, help="Max records to display"),
):
    """Replay records from a Prime Time run (reads events.jsonl)."""
    run_dir = run_path or _latest_run_dir(runs_dir)
    records = load_records(run_dir)
    if not records:
        raise typer.BadParameter(f"No events.jsonl records in {run_dir}")

    table = Table(title=f"Replay — {run_dir.name}")
    table.add_column("At", justify="right")
    table.add_column("Type")
    table.add_column("Screen")
    table.add_column("Rounds", justify="right")
    table.add_column("Summary")

    shown = 0
    for rec in records:
        ev_kind = (rec.get("event") or {}).get("kind") if rec.get("type") == "event" else rec.get("kind")
        if kind and ev_kind not in kind:
            continue
        if skip_ticks and ev_kind == "timer_tick" and not rec.get("requests"):
            continue
        table.add_row(
            str(rec.get("at", "")),
            str(rec.get("type", "")),
            str(rec.get("screen", "")),
            str(rec.get("rounds", "")),
            _summary(rec)[:80],
        )
        shown += 1
        if shown >= limit:
            break

    console.print(table)


if __name__ == "__main__":
    app()
