"""Tests for journal writer. Append-only; Decimals as strings."""

import json
from pathlib import Path

from journal.writer import JournalWriter
from roundtrip_core.engine import reconstruct


def test_journal_writer_append_only(tmp_path: Path, long_btc_fills) -> None:
    path = tmp_path / "nested" / "positions.jsonl"
    analysis = reconstruct(long_btc_fills)
    j = JournalWriter(path)
    j.position(analysis.positions[0], source="test")
    j.summary(analysis.summary)
    j.summary(analysis.summary)
    lines = path.read_text().splitlines()
    assert len(lines) == 3

    r0 = json.loads(lines[0])
    assert r0["event"] == "position"
    assert r0["source"] == "test"
    assert r0["direction"] == "Long"
    assert r0["realized_pnl"] == "0.027158"
    assert r0["entry_time"] == "2025-06-01T12:00:00+00:00"
    assert [f["side"] for f in r0["fills"]] == ["Buy", "Sell"]
    assert "ts_utc" in r0

    r1 = json.loads(lines[1])
    assert r1["event"] == "summary"
    assert r1["total_positions"] == 1
    assert r1["by_symbol"]["BTC_USDC_PERP"] == {"positions": 1, "pnl": "0.027158"}


def test_journal_open_segment(tmp_path: Path, long_btc_fills) -> None:
    path = tmp_path / "positions.jsonl"
    analysis = reconstruct(long_btc_fills[:1])
    JournalWriter(path).open_segment(analysis.open_segments["BTC_USDC_PERP"])
    record = json.loads(path.read_text())
    assert record["event"] == "open_segment"
    assert record["net_quantity"] == "0.00037"


def test_journal_echo(tmp_path: Path, long_btc_fills, capsys) -> None:
    analysis = reconstruct(long_btc_fills)
    JournalWriter(tmp_path / "j.jsonl", echo_stdout=True).summary(analysis.summary)
    assert '"event": "summary"' in capsys.readouterr().out
