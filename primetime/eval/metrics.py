from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional
import json
from statistics import mean

from pydantic import ValidationError

from primetime.core.messages import EnterGame, KeyPressed, TimerStarted, TimerTick, parse_event

Number = float

# ---------- Loading ----------

def load_meta(run_dir: Path) -> Dict[str, Any]:
    meta_path = Path(run_dir) / "meta.json"
    try:
        return json.loads(meta_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}


def load_records(run_dir: Path) -> List[Dict[str, Any]]:
    ev_path = Path(run_dir) / "events.jsonl"
    out: List[Dict[str, Any]] = []
    if not ev_path.exists():
        return out
    with ev_path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                out.append(json.loads(line))
            except ValueError:
                # tolerate partial/corrupt lines
                continue
    return out


# ---------- Helpers ----------

def p95(xs: List[Number]) -> Number:
    if not xs:
        return 0.0
    s = sorted(xs)
    idx = max(0, min(len(s) - 1, int(round(0.95 * (len(s) - 1)))))
    return float(s[idx])


def _event_of(record: Dict[str, Any]) -> Optional[Any]:
    if record.get("type") != "event":
        return None
    try:
        return parse_event(record.get("event") or {})
    except ValidationError:
        return None


# ---------- Metrics ----------

def compute_metrics(run_dir: Path) -> Dict[str, Any]:
    """Per-game and aggregate figures from a run's events.jsonl.

    Answer latency is measured from the round's TimerStarted to the answering
    key press, both taken from the record's `at` clock reading.
    """
    meta = load_meta(run_dir)
    records = load_records(run_dir)

    games: List[Dict[str, Any]] = []
    latencies: List[Number] = []
    ticks = 0
    stray_keys = 0
    current: Optional[Dict[str, Any]] = None
    round_started_at: Optional[int] = None

    for rec in records:
        if rec.get("type") == "note" and rec.get("kind") == "game_over" and current is not None:
            payload = rec.get("payload") or {}
            current["ending"] = payload.get("reason", "unknown")
            current["rounds"] = int(payload.get("rounds", current["rounds"]))
            current["ended_at"] = rec.get("at")
            continue

        event = _event_of(rec)
        if event is None:
            continue
        at = int(rec.get("at", 0))

        if isinstance(event, EnterGame):
            current = {"game": len(games) + 1, "rounds": 0, "ending": "abandoned", "started_at": at, "ended_at": None}
            games.append(current)
        elif isinstance(event, TimerStarted):
            round_started_at = event.now
        elif isinstance(event, TimerTick):
            ticks += 1
        elif isinstance(event, KeyPressed):
            if rec.get("requests"):
                if round_started_at is not None:
                    latencies.append(float(at - round_started_at))
            else:
                stray_keys += 1

        if current is not None and rec.get("screen") == "game":
            current["rounds"] = int(rec.get("rounds", current["rounds"]))

    rounds = [g["rounds"] for g in games]
    endings: Dict[str, int] = {}
    for g in games:
        endings[g["ending"]] = endings.get(g["ending"], 0) + 1

    return {
        "meta": meta,
        "games": games,
        "counts": {
            "games": len(games),
            "records": len(records),
            "ticks": ticks,
            "answers": len(latencies),
            "stray_keys": stray_keys,
        },
        "rounds": {
            "best": max(rounds) if rounds else 0,
            "mean": float(mean(rounds)) if rounds else 0.0,
            "total": sum(rounds),
        },
        "latency": {
            "mean": float(mean(latencies)) if latencies else 0.0,
            "p95": p95(latencies),
        },
        "endings": endings,
    }
