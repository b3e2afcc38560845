"""
Read-only data access for the positions dashboard.
Reads the positions journal (positions.jsonl) written by `roundtrip analyze`.
"""

import json
import os
from pathlib import Path
from typing import Any


def _data_dir() -> Path:
    """Base data dir: repo root / data, or ROUNDTRIP_DASHBOARD_DATA_DIR if set."""
    if env := os.environ.get("ROUNDTRIP_DASHBOARD_DATA_DIR"):
        return Path(env)
    return Path(__file__).resolve().parent.parent / "data"


def discover_journals(data_dir: Path | None = None) -> list[Path]:
    """Find *.jsonl journals directly under the data dir."""
    root = data_dir or _data_dir()
    if not root.is_dir():
        return []
    return sorted(p for p in root.iterdir() if p.is_file() and p.suffix == ".jsonl")


def read_events(path: Path) -> list[dict[str, Any]]:
    """All parseable journal events, oldest first. Corrupt lines are skipped."""
    if not path.exists():
        return []
    out = []
    try:
        with open(path) as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    out.append(json.loads(line))
                except json.JSONDecodeError:
                    continue
    except OSError:
        return []
    return out


def latest_run(path: Path) -> dict[str, Any]:
    """
    Events of the most recent complete run: everything after the previous
    "summary" event up to and including the last one.

    Returns {"positions": [...], "open_segments": [...], "summary": {...} | None}.
    """
    events = read_events(path)
    summary_idx = [i for i, e in enumerate(events) if e.get("event") == "summary"]
    if not summary_idx:
        return {"positions": [], "open_segments": [], "summary": None}
    end = summary_idx[-1]
    start = summary_idx[-2] + 1 if len(summary_idx) > 1 else 0
    run = events[start:end]
    return {
        "positions": [e for e in run if e.get("event") == "position"],
        "open_segments": [e for e in run if e.get("event") == "open_segment"],
        "summary": events[end],
    }


def position_rows(positions: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten journal position events into table rows (same columns as the CLI table)."""
    return [
        {
            "ID": p.get("id"),
            "Symbol": p.get("symbol"),
            "Direction": p.get("direction"),
            "Size": p.get("size"),
            "Entry Price": p.get("entry_price"),
            "Duration": p.get("duration"),
            "Exit Price": p.get("exit_price"),
            "Realized PnL": p.get("realized_pnl"),
            "Fees": p.get("total_fees"),
        }
        for p in positions
    ]
