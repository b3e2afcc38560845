"""Tests for fill sources and symbol filters. No network."""

import json
from pathlib import Path

import pytest

from data.filters import filter_symbols
from data.normalize import FillNormalizationError
from data.source import FillSourceError, JsonFileFillSource, StaticFillSource


def test_filter_symbols(raw_fill_records) -> None:
    fills = StaticFillSource(raw_fill_records).fetch().fills
    assert len(filter_symbols(fills, [])) == 4
    assert {f.symbol for f in filter_symbols(fills, ["PERP"])} == {"BTC_USDC_PERP", "ETH_USDC_PERP"}
    assert {f.symbol for f in filter_symbols(fills, ["eth"])} == {"ETH_USDC_PERP"}


def test_static_source_applies_filter(raw_fill_records) -> None:
    result = StaticFillSource(raw_fill_records).fetch(symbol_filter=["PERP"])
    assert result.raw_count == 4
    assert len(result.fills) == 3
    assert result.symbols == ["BTC_USDC_PERP", "ETH_USDC_PERP"]
    assert result.source == "memory"


def test_json_file_array(tmp_path: Path, raw_fill_records) -> None:
    path = tmp_path / "fills.json"
    path.write_text(json.dumps(raw_fill_records))
    result = JsonFileFillSource(path).fetch()
    assert len(result.fills) == 4
    assert result.source == str(path)


def test_json_file_wrapped_object(tmp_path: Path, raw_fill_records) -> None:
    path = tmp_path / "fills.json"
    path.write_text(json.dumps({"fills": raw_fill_records}))
    assert len(JsonFileFillSource(path).fetch(symbol_filter=["BTC"]).fills) == 2


def test_json_file_missing(tmp_path: Path) -> None:
    with pytest.raises(FillSourceError, match="not found"):
        JsonFileFillSource(tmp_path / "nope.json").fetch()


def test_json_file_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "fills.json"
    path.write_text("[{")
    with pytest.raises(FillSourceError, match="not valid JSON"):
        JsonFileFillSource(path).fetch()


def test_json_file_schema_violation(tmp_path: Path) -> None:
    path = tmp_path / "fills.json"
    path.write_text(json.dumps([{"symbol": "BTC_USDC_PERP", "side": "Bid"}]))
    with pytest.raises(FillSourceError, match="validation failed"):
        JsonFileFillSource(path).fetch()


def test_json_file_malformed_value_strict_and_lenient(tmp_path: Path, raw_fill_records) -> None:
    raw_fill_records[0]["quantity"] = "lots"
    path = tmp_path / "fills.json"
    path.write_text(json.dumps(raw_fill_records))
    with pytest.raises(FillNormalizationError):
        JsonFileFillSource(path).fetch()
    assert len(JsonFileFillSource(path).fetch(strict=False).fills) == 3
