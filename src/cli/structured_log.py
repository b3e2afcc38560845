"""
Structured JSON event logger.

Emits one JSON object per line to stderr. Events are designed to be
parsed by log aggregators (Grafana Loki, CloudWatch, ELK).
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from roundtrip_core.contracts import CompletedPosition, OpenSegment, PositionSummary


class StructuredEventLogger:
    """Emit structured JSON events to stderr."""

    def __init__(
        self,
        source: str,
        *,
        enabled: bool = True,
        stream: Any = None,
    ) -> None:
        self._source = source
        self._enabled = enabled
        self._stream = stream or sys.stderr

    def _emit(self, event_type: str, **fields: Any) -> dict:
        record = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "event": event_type,
            "source": self._source,
            **fields,
        }
        if self._enabled:
            self._stream.write(json.dumps(record, default=_default) + "\n")
            self._stream.flush()
        return record

    def run_start(self, fills: int, symbols: list[str]) -> dict:
        return self._emit("run_start", fills=fills, symbols=symbols)

    def position_closed(self, position: CompletedPosition) -> dict:
        return self._emit(
            "position_closed",
            id=position.id,
            symbol=position.symbol,
            direction=position.direction.value,
            size=position.size,
            pnl=position.realized_pnl,
            fees=position.total_fees,
        )

    def open_segment(self, segment: OpenSegment) -> dict:
        return self._emit(
            "open_segment",
            symbol=segment.symbol,
            direction=segment.direction.value,
            net_quantity=segment.net_quantity,
            fills=len(segment.fills),
        )

    def run_complete(self, summary: PositionSummary, open_segments: int) -> dict:
        return self._emit(
            "run_complete",
            positions=summary.total_positions,
            pnl=summary.total_pnl,
            fees=summary.total_fees,
            open_segments=open_segments,
        )

    def error(self, message: str, detail: str = "") -> dict:
        return self._emit("error", message=message, detail=detail)


def _default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        return str(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
