"""
Reconstruction engine: fills in, round-trip positions out.

Stable chronological sort -> per-symbol ledger dispatch -> flat detection ->
position build -> entry-time sort -> id assignment -> summary.
Pure function of its input: every call owns its ledgers and counters.
"""

from __future__ import annotations

import dataclasses
import logging
from decimal import Decimal
from typing import Iterable

from roundtrip_core.builder import build_position
from roundtrip_core.contracts import (
    CompletedPosition,
    Fill,
    IdAssignment,
    OpenSegment,
    PositionAnalysis,
    PositionSummary,
    SymbolSummary,
)
from roundtrip_core.ledger import SymbolLedger, is_flat
from roundtrip_core.numeric import ZERO, dsum

logger = logging.getLogger("roundtrip.engine")


def _crossed_zero(previous: Decimal, current: Decimal) -> bool:
    return (previous > 0 and current < 0) or (previous < 0 and current > 0)


def summarize(positions: Iterable[CompletedPosition], symbols: Iterable[str] = ()) -> PositionSummary:
    """Totals and per-symbol breakdown. *symbols* seeds the breakdown order."""
    positions = list(positions)
    counts: dict[str, int] = {s: 0 for s in symbols}
    pnl: dict[str, Decimal] = {s: ZERO for s in counts}
    for p in positions:
        counts[p.symbol] = counts.get(p.symbol, 0) + 1
        pnl[p.symbol] = pnl.get(p.symbol, ZERO) + p.realized_pnl
    return PositionSummary(
        total_positions=len(positions),
        total_pnl=dsum(p.realized_pnl for p in positions),
        total_fees=dsum(p.total_fees for p in positions),
        by_symbol={s: SymbolSummary(positions=counts[s], pnl=pnl[s]) for s in counts},
    )


def reconstruct(
    fills: Iterable[Fill],
    *,
    zero_tolerance: Decimal = ZERO,
    id_assignment: IdAssignment = IdAssignment.ENTRY_ORDER,
) -> PositionAnalysis:
    """Reconstruct completed round-trip positions from a collection of fills.

    Parameters
    ----------
    fills:
        Fills in any order. Sorted by timestamp; equal timestamps keep
        their input order.
    zero_tolerance:
        0 (default) for exact flat detection; a positive value treats
        ``abs(net) < zero_tolerance`` as flat.
    id_assignment:
        ENTRY_ORDER numbers positions 1..n in output order. CLOSE_ORDER
        numbers them in the order their segments closed during the scan.

    Returns
    -------
    PositionAnalysis
        Positions sorted by entry time, trailing open segments per symbol
        (excluded from totals), and the summary.
    """
    if zero_tolerance < 0:
        raise ValueError(f"zero_tolerance must be >= 0, got {zero_tolerance}")

    ordered = sorted(fills, key=lambda f: f.timestamp)
    ledgers: dict[str, SymbolLedger] = {}
    closed: list[tuple[int, CompletedPosition]] = []
    closure_seq = 0

    for fill in ordered:
        ledger = ledgers.get(fill.symbol)
        if ledger is None:
            ledger = ledgers[fill.symbol] = SymbolLedger(fill.symbol)

        previous = ledger.apply(fill)

        if is_flat(ledger.net_quantity, zero_tolerance):
            segment = ledger.close()
            position = build_position(segment)
            if position is None:
                continue
            closure_seq += 1
            closed.append((closure_seq, position))
            logger.debug(
                "Closed %s %s segment: %d fills, pnl %s",
                position.symbol, position.direction.value, len(segment), position.realized_pnl,
            )
        elif _crossed_zero(previous, ledger.net_quantity):
            # Not split: the segment stays open in the new direction.
            logger.info(
                "%s fill %s crossed zero (%s -> %s) without closing the segment",
                fill.symbol, fill.id, previous, ledger.net_quantity,
            )

    closed.sort(key=lambda item: item[1].entry_time)
    if id_assignment is IdAssignment.CLOSE_ORDER:
        positions = tuple(dataclasses.replace(p, id=seq) for seq, p in closed)
    else:
        positions = tuple(dataclasses.replace(p, id=i) for i, (_, p) in enumerate(closed, 1))

    open_segments: dict[str, OpenSegment] = {}
    for symbol, ledger in ledgers.items():
        if ledger.is_open:
            open_segments[symbol] = ledger.to_open_segment()
            logger.warning(
                "%s still open at end of fills: net %s over %d fills",
                symbol, ledger.net_quantity, len(ledger.open_fills),
            )

    summary = summarize(positions, symbols=ledgers)
    logger.info(
        "Reconstructed %d positions from %d fills (%d open)",
        summary.total_positions, len(ordered), len(open_segments),
    )
    return PositionAnalysis(positions=positions, open_segments=open_segments, summary=summary)
