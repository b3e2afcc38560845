"""Tests for config loader: YAML parsing, defaults, error cases."""

from decimal import Decimal
from pathlib import Path

import pytest

from config import load_config
from roundtrip_core.contracts import IdAssignment


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(content)
    return path


def test_load_config_basic(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
data:
  fills_path: exports/fills.json
  symbol_filter: ["PERP", "SOL"]
  skip_invalid: true
engine:
  zero_tolerance: "1e-7"
  id_assignment: close_order
journal:
  path: out/journal.jsonl
  echo_stdout: true
alerting:
  structured_logs: true
""",
    )
    cfg = load_config(path)
    assert cfg.data.fills_path == "exports/fills.json"
    assert cfg.data.symbol_filter == ("PERP", "SOL")
    assert cfg.data.skip_invalid is True
    assert cfg.engine.zero_tolerance == Decimal("1e-7")
    assert cfg.engine.id_assignment is IdAssignment.CLOSE_ORDER
    assert cfg.journal.path == "out/journal.jsonl"
    assert cfg.journal.echo_stdout is True
    assert cfg.alerting.structured_logs is True


def test_load_config_defaults(tmp_path: Path) -> None:
    cfg = load_config(_write(tmp_path, "data:\n  fills_path: f.json\n"))
    assert cfg.data.symbol_filter == ("PERP",)
    assert cfg.data.skip_invalid is False
    assert cfg.engine.zero_tolerance == 0
    assert cfg.engine.id_assignment is IdAssignment.ENTRY_ORDER
    assert cfg.journal.path == "data/positions.jsonl"
    assert cfg.alerting.structured_logs is False


def test_load_config_empty_file(tmp_path: Path) -> None:
    cfg = load_config(_write(tmp_path, ""))
    assert cfg.data.fills_path == "data/fills.json"


def test_symbol_filter_forms(tmp_path: Path) -> None:
    assert load_config(_write(tmp_path, "data:\n  symbol_filter: []\n")).data.symbol_filter == ()
    assert load_config(_write(tmp_path, "data:\n  symbol_filter: BTC\n")).data.symbol_filter == ("BTC",)
    assert load_config(_write(tmp_path, "data:\n  symbol_filter:\n")).data.symbol_filter == ()


def test_load_config_missing_file() -> None:
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/path.yaml")


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "engine:\n  id_assignment: random\n",
        "engine:\n  zero_tolerance: lots\n",
        "engine:\n  zero_tolerance: '-1'\n",
        "data:\n  symbol_filter: {a: 1}\n",
    ],
)
def test_load_config_invalid(tmp_path: Path, content: str) -> None:
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, content))
