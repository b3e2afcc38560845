"""
Fill sources. Configurable adapter; sync, file-based.

JSON exports are validated against docs/config/fills.schema.json before
normalization, the same way config files are schema-checked.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, Sequence

import jsonschema

from roundtrip_core.contracts import Fill

from data.filters import filter_symbols
from data.normalize import normalize_fills

logger = logging.getLogger("roundtrip.data")


def _find_project_root() -> Path:
    """Walk up from this file looking for pyproject.toml; fall back to CWD."""
    candidate = Path(__file__).resolve().parent
    for _ in range(10):
        if (candidate / "pyproject.toml").exists():
            return candidate
        parent = candidate.parent
        if parent == candidate:
            break
        candidate = parent
    return Path.cwd()


DEFAULT_SCHEMA_PATH = _find_project_root() / "docs" / "config" / "fills.schema.json"


class FillSourceError(Exception):
    """Raised when a fill source cannot be read or fails schema validation."""


@dataclass
class FetchResult:
    """Fills loaded from a source, after normalization and symbol filtering."""

    fills: list[Fill]
    source: str
    raw_count: int = 0
    symbols: list[str] = field(default_factory=list)


class FillSource(Protocol):
    """Protocol for fill sources. Implement per provider (file export, API client, ...)."""

    def fetch(self, *, symbol_filter: Sequence[str] = (), strict: bool = True) -> FetchResult:
        """Load fills, normalize, filter by symbol. Returns FetchResult."""
        ...


def _result(fills: list[Fill], source: str, raw_count: int, symbol_filter: Sequence[str]) -> FetchResult:
    kept = filter_symbols(fills, symbol_filter)
    symbols = sorted({f.symbol for f in kept})
    logger.info("Loaded %d fills (%d after filter) from %s", len(fills), len(kept), source)
    return FetchResult(fills=kept, source=source, raw_count=raw_count, symbols=symbols)


class StaticFillSource:
    """Serves an in-memory list of raw records; for tests and embedding."""

    def __init__(self, records: Sequence[dict[str, Any]], name: str = "memory") -> None:
        self._records = list(records)
        self._name = name

    def fetch(self, *, symbol_filter: Sequence[str] = (), strict: bool = True) -> FetchResult:
        fills = normalize_fills(self._records, strict=strict)
        return _result(fills, self._name, len(self._records), symbol_filter)


class JsonFileFillSource:
    """
    Read a JSON fill export: a top-level array, or an object with a "fills" array.
    """

    def __init__(self, path: str | Path, *, schema_path: str | Path | None = None) -> None:
        self._path = Path(path)
        self._schema_path = Path(schema_path) if schema_path else DEFAULT_SCHEMA_PATH

    def _load_raw(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            raise FillSourceError(f"Fills file not found: {self._path}")
        try:
            with open(self._path) as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise FillSourceError(f"Fills file is not valid JSON: {exc}") from exc
        if isinstance(data, dict):
            data = data.get("fills", [])
        self._validate(data)
        return data

    def _validate(self, data: Any) -> None:
        if not self._schema_path.exists():
            raise FillSourceError(f"Schema file not found: {self._schema_path}")
        with open(self._schema_path) as f:
            schema = json.load(f)
        try:
            jsonschema.validate(instance=data, schema=schema)
        except jsonschema.ValidationError as exc:
            raise FillSourceError(f"Fills file validation failed: {exc.message}") from exc

    def fetch(self, *, symbol_filter: Sequence[str] = (), strict: bool = True) -> FetchResult:
        raw = self._load_raw()
        fills = normalize_fills(raw, strict=strict)
        return _result(fills, str(self._path), len(raw), symbol_filter)
