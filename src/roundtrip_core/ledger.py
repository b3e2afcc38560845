"""
Per-symbol running state and the round-trip (flat) detector.

A SymbolLedger buffers the fills of the currently-open segment for one
symbol and tracks their signed net quantity. The engine owns one ledger per
symbol for the duration of a single reconstruction run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from roundtrip_core.contracts import Direction, Fill, OpenSegment
from roundtrip_core.numeric import ZERO, dsum


def is_flat(net_quantity: Decimal, tolerance: Decimal = ZERO) -> bool:
    """True when the segment has returned to zero net exposure.

    Exact comparison when *tolerance* is zero; otherwise
    ``abs(net_quantity) < tolerance``. Only the post-update value is
    inspected: a fill that jumps across zero is not a closure.
    """
    if tolerance > 0:
        return abs(net_quantity) < tolerance
    return net_quantity == 0


@dataclass
class SymbolLedger:
    """Net quantity and buffered fills of the open segment for one symbol."""

    symbol: str
    net_quantity: Decimal = ZERO
    open_fills: list[Fill] = field(default_factory=list)

    def apply(self, fill: Fill) -> Decimal:
        """Buffer *fill* and update the net quantity. Returns the previous net."""
        if fill.symbol != self.symbol:
            raise ValueError(f"Fill {fill.id} for {fill.symbol} routed to ledger {self.symbol}")
        previous = self.net_quantity
        self.open_fills.append(fill)
        self.net_quantity = previous + fill.signed_quantity
        return previous

    def close(self) -> list[Fill]:
        """Return the buffered segment and reset to flat."""
        segment, self.open_fills = self.open_fills, []
        self.net_quantity = ZERO
        return segment

    @property
    def is_open(self) -> bool:
        return self.net_quantity != 0

    def to_open_segment(self) -> OpenSegment:
        return OpenSegment(
            symbol=self.symbol,
            net_quantity=self.net_quantity,
            direction=Direction.opened_by(self.open_fills[0].side),
            fills=tuple(self.open_fills),
            total_fees=dsum(f.fee for f in self.open_fills),
        )
