"""
Position builder: closed segment of fills -> CompletedPosition.

Entry/exit prices are value-weighted averages per side. Realized PnL
excludes fees; fees are reported alongside, the way the exchange's own
position history separates them.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Sequence

from roundtrip_core.contracts import CompletedPosition, Direction, Fill
from roundtrip_core.numeric import ZERO, format_duration, weighted_average

logger = logging.getLogger("roundtrip.builder")

_HUNDRED = Decimal(100)


def pnl_percent(realized_pnl: Decimal, notional_value: Decimal) -> Decimal:
    """PnL as a percentage of notional; exactly 0 when notional is 0."""
    if notional_value == 0:
        return ZERO
    return realized_pnl / notional_value * _HUNDRED


def build_position(fills: Sequence[Fill], position_id: int = 0) -> CompletedPosition | None:
    """Build one CompletedPosition from a chronologically ordered segment.

    Parameters
    ----------
    fills:
        Fills of one symbol whose signed quantities sum to zero, in scan order.
    position_id:
        Id to stamp on the position. The engine passes 0 and assigns ids
        after its final sort.

    Returns None for an empty segment.
    """
    if not fills:
        logger.debug("Empty segment; nothing to build")
        return None

    first = fills[0]
    direction = Direction.opened_by(first.side)
    opening_side = direction.opening_side

    total_fees = ZERO
    open_value = open_qty = ZERO
    close_value = close_qty = ZERO
    entry_time: datetime | None = None
    exit_time: datetime | None = None

    for fill in fills:
        total_fees += fill.fee
        if fill.side is opening_side:
            open_value += fill.value
            open_qty += fill.quantity
            if entry_time is None or fill.timestamp < entry_time:
                entry_time = fill.timestamp
        else:
            close_value += fill.value
            close_qty += fill.quantity
            exit_time = fill.timestamp

    # A segment made only of zero-quantity fills has no closing side.
    if exit_time is None:
        exit_time = fills[-1].timestamp
    assert entry_time is not None

    entry_price = weighted_average(open_value, open_qty)
    exit_price = weighted_average(close_value, close_qty)
    size = min(open_qty, close_qty)
    notional_value = size * entry_price

    if direction is Direction.LONG:
        realized_pnl = (exit_price - entry_price) * size
    else:
        realized_pnl = (entry_price - exit_price) * size

    if open_qty != close_qty:
        logger.debug(
            "%s segment residual: open %s vs close %s; size uses the smaller",
            first.symbol, open_qty, close_qty,
        )

    return CompletedPosition(
        id=position_id,
        symbol=first.symbol,
        direction=direction,
        size=size,
        notional_value=notional_value,
        entry_price=entry_price,
        exit_price=exit_price,
        entry_time=entry_time,
        exit_time=exit_time,
        duration=format_duration(exit_time - entry_time),
        realized_pnl=realized_pnl,
        realized_pnl_percent=pnl_percent(realized_pnl, notional_value),
        total_fees=total_fees,
        fills=tuple(fills),
    )
