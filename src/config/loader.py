"""
Config loader: YAML file -> frozen dataclass tree.

The config path itself may come from the ROUNDTRIP_CONFIG environment
variable (a .env file is loaded by the CLI). The file holds no secrets.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path

import yaml

from roundtrip_core.contracts import IdAssignment
from roundtrip_core.numeric import to_decimal


@dataclass(frozen=True)
class DataConfig:
    fills_path: str = "data/fills.json"
    symbol_filter: tuple[str, ...] = ("PERP",)
    skip_invalid: bool = False


@dataclass(frozen=True)
class EngineConfig:
    zero_tolerance: Decimal = Decimal(0)
    id_assignment: IdAssignment = IdAssignment.ENTRY_ORDER


@dataclass(frozen=True)
class JournalConfig:
    path: str = "data/positions.jsonl"
    echo_stdout: bool = False


@dataclass(frozen=True)
class AlertingConfig:
    structured_logs: bool = False


@dataclass(frozen=True)
class AppConfig:
    data: DataConfig = field(default_factory=DataConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    journal: JournalConfig = field(default_factory=JournalConfig)
    alerting: AlertingConfig = field(default_factory=AlertingConfig)


def _symbol_filter(value) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if not isinstance(value, list):
        raise ValueError(f"data.symbol_filter must be a string or list, got {type(value).__name__}")
    return tuple(str(v) for v in value)


def _engine_config(raw: dict) -> EngineConfig:
    try:
        tolerance = to_decimal(raw.get("zero_tolerance", "0"))
    except ValueError as exc:
        raise ValueError(f"engine.zero_tolerance: {exc}") from exc
    if tolerance < 0:
        raise ValueError(f"engine.zero_tolerance must be >= 0, got {tolerance}")
    mode = str(raw.get("id_assignment", IdAssignment.ENTRY_ORDER.value)).lower()
    try:
        id_assignment = IdAssignment(mode)
    except ValueError as exc:
        valid = ", ".join(m.value for m in IdAssignment)
        raise ValueError(f"engine.id_assignment must be one of {valid}, got {mode!r}") from exc
    return EngineConfig(zero_tolerance=tolerance, id_assignment=id_assignment)


def load_config(path: str | Path = "config.yaml") -> AppConfig:
    """
    Load configuration from a YAML file.

    Every section is optional; missing keys take the dataclass defaults.
    Raises FileNotFoundError for a missing file, ValueError for bad values.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    data_raw = raw.get("data") or {}
    data_cfg = DataConfig(
        fills_path=str(data_raw.get("fills_path", "data/fills.json")),
        symbol_filter=_symbol_filter(data_raw.get("symbol_filter", ["PERP"])),
        skip_invalid=bool(data_raw.get("skip_invalid", False)),
    )

    engine_cfg = _engine_config(raw.get("engine") or {})

    j_raw = raw.get("journal") or {}
    j_cfg = JournalConfig(
        path=str(j_raw.get("path", "data/positions.jsonl")),
        echo_stdout=bool(j_raw.get("echo_stdout", False)),
    )

    a_raw = raw.get("alerting") or {}
    a_cfg = AlertingConfig(
        structured_logs=bool(a_raw.get("structured_logs", False)),
    )

    return AppConfig(
        data=data_cfg,
        engine=engine_cfg,
        journal=j_cfg,
        alerting=a_cfg,
    )
