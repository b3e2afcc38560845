"""
Data contracts for roundtrip-core: Fill, CompletedPosition, OpenSegment, PositionAnalysis.

roundtrip-core consumes normalized Fills and produces CompletedPositions.
No I/O; these are plain frozen dataclasses. Quantities, prices, fees and
PnL are Decimal end to end.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class Side(str, Enum):
    """Execution side of a fill."""

    BUY = "Buy"
    SELL = "Sell"


class Direction(str, Enum):
    """Direction of a round-trip position, fixed by its first fill."""

    LONG = "Long"
    SHORT = "Short"

    @classmethod
    def opened_by(cls, side: Side) -> "Direction":
        return cls.LONG if side is Side.BUY else cls.SHORT

    @property
    def opening_side(self) -> Side:
        return Side.BUY if self is Direction.LONG else Side.SELL


class IdAssignment(str, Enum):
    """How position ids are numbered in a reconstruction run."""

    ENTRY_ORDER = "entry_order"  # 1..n in final (entry-time) order
    CLOSE_ORDER = "close_order"  # order in which segments closed during the scan


@dataclass(frozen=True)
class Fill:
    """One matched trade execution. Never mutated after creation."""

    id: str
    order_id: str
    trade_id: str
    symbol: str
    side: Side
    quantity: Decimal
    price: Decimal
    fee: Decimal
    timestamp: datetime
    fee_symbol: str | None = None

    @property
    def signed_quantity(self) -> Decimal:
        """+quantity for Buy, -quantity for Sell."""
        return self.quantity if self.side is Side.BUY else -self.quantity

    @property
    def value(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class CompletedPosition:
    """A closed round trip: flat -> exposure -> flat for one symbol."""

    id: int
    symbol: str
    direction: Direction
    size: Decimal
    notional_value: Decimal
    entry_price: Decimal
    exit_price: Decimal
    entry_time: datetime
    exit_time: datetime
    duration: str
    realized_pnl: Decimal
    realized_pnl_percent: Decimal
    total_fees: Decimal
    fills: tuple[Fill, ...] = ()


@dataclass(frozen=True)
class OpenSegment:
    """Fills of a symbol that had not returned to flat when the scan ended."""

    symbol: str
    net_quantity: Decimal
    direction: Direction
    fills: tuple[Fill, ...]
    total_fees: Decimal


@dataclass(frozen=True)
class SymbolSummary:
    positions: int
    pnl: Decimal


@dataclass(frozen=True)
class PositionSummary:
    total_positions: int
    total_pnl: Decimal
    total_fees: Decimal
    by_symbol: dict[str, SymbolSummary] = field(default_factory=dict)


@dataclass(frozen=True)
class PositionAnalysis:
    """Result of one reconstruction run."""

    positions: tuple[CompletedPosition, ...]
    open_segments: dict[str, OpenSegment]
    summary: PositionSummary

    def get(self, position_id: int) -> CompletedPosition | None:
        for position in self.positions:
            if position.id == position_id:
                return position
        return None
