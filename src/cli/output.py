"""
Human-readable position output for the terminal, plus detailed export records.

Every CLI command uses these formatters. Journal receives the same data.
Money is shown rounded half-up to 2 places and fees to 5; sizes are exact.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Mapping

from roundtrip_core.contracts import CompletedPosition, OpenSegment, PositionSummary, Side
from roundtrip_core.numeric import round_money

_TABLE_COLUMNS = (
    ("ID", 4),
    ("Symbol", 16),
    ("Size", 14),
    ("Entry Price", 14),
    ("Duration", 18),
    ("Exit Price", 14),
    ("Realized PnL", 14),
    ("Fees", 12),
)


def _fmt_signed_money(value: Decimal) -> str:
    rounded = round_money(value)
    sign = "+" if rounded >= 0 else "-"
    return f"{sign}${abs(rounded):,.2f}"


def _fmt_price(value: Decimal) -> str:
    return f"{round_money(value):,.2f}"


def _fmt_size(value: Decimal) -> str:
    return f"{value.normalize():f}" if value != 0 else "0"


def _fmt_fees(value: Decimal) -> str:
    return f"${round_money(value, 5):.5f}"


def format_positions_table(positions: Iterable[CompletedPosition]) -> str:
    """Fixed-width table: id, symbol, size, entry, duration, exit, PnL, fees."""
    header = "  ".join(name.ljust(width) for name, width in _TABLE_COLUMNS)
    lines = [header, "-" * len(header)]
    for p in positions:
        cells = (
            str(p.id),
            p.symbol,
            _fmt_size(p.size),
            _fmt_price(p.entry_price),
            p.duration,
            _fmt_price(p.exit_price),
            _fmt_signed_money(p.realized_pnl),
            _fmt_fees(p.total_fees),
        )
        lines.append("  ".join(c.ljust(w) for c, (_, w) in zip(cells, _TABLE_COLUMNS)).rstrip())
    return "\n".join(lines)


def format_position_detail(position: CompletedPosition) -> str:
    """Per-position breakdown with its constituent executions."""
    p = position
    base_asset = p.symbol.split("_")[0]
    pnl_sign = "+" if p.realized_pnl >= 0 else "-"
    lines = [
        f"Position #{p.id} - {p.symbol}",
        f"├─ Side: {p.direction.value}",
        f"├─ Size: {_fmt_size(p.size)} {base_asset} (${round_money(p.notional_value):,.2f})",
        f"├─ Entry: ${_fmt_price(p.entry_price)} ({p.entry_time.isoformat()})",
        f"├─ Exit: ${_fmt_price(p.exit_price)} ({p.exit_time.isoformat()})",
        f"├─ Duration: {p.duration}",
        f"├─ Realized PnL: {_fmt_signed_money(p.realized_pnl)} "
        f"({pnl_sign}{abs(round_money(p.realized_pnl_percent)):.2f}%)",
        f"└─ Total Fees: {_fmt_fees(p.total_fees)}",
        "",
        f"Executions ({len(p.fills)} fills):",
    ]
    for i, fill in enumerate(p.fills, 1):
        lines.append(f"  {i}. {fill.side.value} {fill.quantity} at ${fill.price} (fee: ${fill.fee})")
    return "\n".join(lines)


def format_open_segments(open_segments: Mapping[str, OpenSegment]) -> str:
    if not open_segments:
        return "Open positions: none"
    lines = [f"Open positions ({len(open_segments)}, not included in totals):"]
    for seg in open_segments.values():
        lines.append(
            f"  {seg.symbol}: {seg.direction.value} net {seg.net_quantity} "
            f"over {len(seg.fills)} fill(s), fees {_fmt_fees(seg.total_fees)}"
        )
    return "\n".join(lines)


def format_summary(summary: PositionSummary) -> str:
    lines = [
        "=== Summary ===",
        f"Total Positions: {summary.total_positions}",
        f"Net PnL        : {_fmt_signed_money(summary.total_pnl)}",
        f"Total Fees     : {_fmt_fees(summary.total_fees)}",
    ]
    if summary.by_symbol:
        lines.append("")
        lines.append("By symbol:")
        for symbol, s in summary.by_symbol.items():
            lines.append(f"  {symbol}: {s.positions} position(s), {_fmt_signed_money(s.pnl)} PnL")
    lines.append("===")
    return "\n".join(lines)


def format_no_positions() -> str:
    return "\n".join([
        "No completed positions found.",
        "This could mean:",
        "- All positions are still open",
        "- No fills matched the symbol filter",
        "- Only one-sided trades (no round trips)",
    ])


def _execution_record(fill, opening_side: Side) -> dict[str, Any]:
    return {
        "fillId": fill.id,
        "orderId": fill.order_id,
        "tradeId": fill.trade_id,
        "side": fill.side.value,
        "action": "open" if fill.side is opening_side else "close",
        "price": str(fill.price),
        "quantity": str(fill.quantity),
        "fee": str(fill.fee),
        "feeSymbol": fill.fee_symbol,
        "timestamp": fill.timestamp.isoformat(),
    }


def position_to_record(position: CompletedPosition) -> dict[str, Any]:
    """Detailed export record for one position. Decimals as strings."""
    p = position
    executions = [_execution_record(f, p.direction.opening_side) for f in p.fills]
    return {
        "tradeId": p.id,
        "symbol": p.symbol,
        "direction": p.direction.value,
        "size": str(p.size),
        "notionalValue": str(p.notional_value),
        "entryPrice": str(p.entry_price),
        "exitPrice": str(p.exit_price),
        "entryTime": p.entry_time.isoformat(),
        "exitTime": p.exit_time.isoformat(),
        "duration": p.duration,
        "realizedPnl": str(p.realized_pnl),
        "realizedPnlPercent": str(p.realized_pnl_percent),
        "totalFees": str(p.total_fees),
        "executions": executions,
    }


def positions_to_records(positions: Iterable[CompletedPosition]) -> list[dict[str, Any]]:
    return [position_to_record(p) for p in positions]
