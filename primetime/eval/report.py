from __future__ import annotations

from typing import Any, Dict
import json


def build_markdown(metrics: Dict[str, Any]) -> str:
    m = metrics
    meta = m.get("meta", {})
    counts = m.get("counts", {})
    rounds = m.get("rounds", {})
    lat = m.get("latency", {})

    endings_table = "Ending | Games\n---|---\n"
    for k, v in sorted((m.get("endings") or {}).items(), key=lambda kv: (-kv[1], kv[0])):
        endings_table += f"{k} | {v}\n"
    if endings_table.strip().endswith("---|---"):
        endings_table += "- | -\n"

    md = [
        f"# Prime Time Run Report — {meta.get('run_id', '(unknown)')}",
        "\n## Meta\n",
        "```json\n" + json.dumps(meta, indent=2) + "\n```\n",
        "## Summary\n",
        f"- Games: {counts.get('games', 0)} | ticks: {counts.get('ticks', 0)} | records: {counts.get('records', 0)}",
        f"- Rounds best: {rounds.get('best', 0)} | mean: {rounds.get('mean', 0.0):.2f} | total: {rounds.get('total', 0)}",
        f"- Answers: {counts.get('answers', 0)} | stray keys: {counts.get('stray_keys', 0)}",
        f"- Answer latency mean: {lat.get('mean', 0.0):.1f} ms | p95: {lat.get('p95', 0.0):.1f} ms",
        "\n## Endings\n\n" + endings_table,
    ]

    games = m.get("games", [])
    if games:
        md.append("## Games\n")
        md.append("Game | Rounds | Ending | Started | Ended\n---|---|---|---|---")
        for g in games:
            ended = "-" if g.get("ended_at") is None else str(g["ended_at"])
            md.append(f"{g['game']} | {g['rounds']} | {g['ending']} | {g['started_at']} | {ended}")

    return "\n".join(md) + "\n"
