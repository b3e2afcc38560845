"""
roundtrip-core: pure round-trip position reconstruction and PnL.

No I/O, no network, no side effects beyond logging. Consumes Fills,
produces CompletedPositions. Exact Decimal arithmetic; fully deterministic.
"""

from roundtrip_core.builder import build_position
from roundtrip_core.contracts import (
    CompletedPosition,
    Direction,
    Fill,
    IdAssignment,
    OpenSegment,
    PositionAnalysis,
    PositionSummary,
    Side,
    SymbolSummary,
)
from roundtrip_core.engine import reconstruct
from roundtrip_core.ledger import SymbolLedger, is_flat

__all__ = [
    "build_position",
    "CompletedPosition",
    "Direction",
    "Fill",
    "IdAssignment",
    "is_flat",
    "OpenSegment",
    "PositionAnalysis",
    "PositionSummary",
    "reconstruct",
    "Side",
    "SymbolLedger",
    "SymbolSummary",
]
