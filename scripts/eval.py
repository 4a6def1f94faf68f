from __future__ import annotations

from pathlib import Path
import typer

from primetime.eval.metrics import compute_metrics
from primetime.eval.report import build_markdown

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.command()
def eval_run(run_dir: Path = typer.Argument(..., help="Path to runs/<id>")) -> None:
    """Summarize a run into report.md."""
    run_dir = Path(run_dir)
    if not (run_dir / "events.jsonl").exists():
        raise typer.BadParameter(f"No events.jsonl in {run_dir}")
    metrics = compute_metrics(run_dir)
    out_md = run_dir / "report.md"
    out_md.write_text(build_markdown(metrics), encoding="utf-8")
    typer.echo(f"Wrote {out_md}")


if __name__ == "__main__":
    app()
