"""
Normalization boundary: raw exchange fill records -> roundtrip_core.contracts.Fill.

Malformed records (missing fields, non-numeric or negative quantity/price,
non-numeric fee, unknown side, bad timestamp) are rejected here and never
reach the engine. Decimal strings are parsed straight into Decimal.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Iterable, Mapping

from roundtrip_core.contracts import Fill, Side
from roundtrip_core.numeric import to_decimal

logger = logging.getLogger("roundtrip.data")

# Exchange wire values (Bid/Ask) and plain Buy/Sell, case-insensitive.
_SIDE_MAP = {
    "bid": Side.BUY,
    "buy": Side.BUY,
    "ask": Side.SELL,
    "sell": Side.SELL,
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_REQUIRED = ("symbol", "side", "quantity", "price", "timestamp")


class FillNormalizationError(ValueError):
    """Raised when a raw fill record cannot be turned into a Fill."""

    def __init__(self, message: str, raw: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.raw = raw


def parse_side(value: Any) -> Side:
    if isinstance(value, Side):
        return value
    side = _SIDE_MAP.get(str(value).strip().lower())
    if side is None:
        raise FillNormalizationError(f"Unknown side {value!r}; expected Buy/Sell (or Bid/Ask)")
    return side


def parse_timestamp(value: Any) -> datetime:
    """Epoch milliseconds (int or digit string), ISO-8601 string, or datetime -> aware UTC."""
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, bool):
        raise FillNormalizationError(f"Invalid timestamp {value!r}")
    elif isinstance(value, (int, float)) or (isinstance(value, str) and value.strip().isdigit()):
        try:
            ms = Decimal(str(value).strip())
            ts = _EPOCH + timedelta(microseconds=int(ms * 1000))
        except (ArithmeticError, ValueError, OverflowError) as exc:
            raise FillNormalizationError(f"Invalid timestamp {value!r}") from exc
    elif isinstance(value, str):
        try:
            ts = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise FillNormalizationError(f"Invalid timestamp {value!r}") from exc
    else:
        raise FillNormalizationError(f"Invalid timestamp {value!r}")
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _decimal_field(raw: Mapping[str, Any], name: str, *, allow_negative: bool = False) -> Decimal:
    try:
        value = to_decimal(raw[name])
    except (ValueError, TypeError) as exc:
        raise FillNormalizationError(f"Field {name!r} is not numeric: {raw[name]!r}", raw) from exc
    if value < 0 and not allow_negative:
        raise FillNormalizationError(f"Field {name!r} must be >= 0, got {value}", raw)
    return value


def normalize_fill(raw: Mapping[str, Any]) -> Fill:
    """Convert one raw record (exchange camelCase or snake_case keys) to a Fill."""
    missing = [k for k in _REQUIRED if raw.get(k) in (None, "")]
    if missing:
        raise FillNormalizationError(f"Missing required field(s): {', '.join(missing)}", raw)

    try:
        side = parse_side(raw["side"])
        timestamp = parse_timestamp(raw["timestamp"])
    except FillNormalizationError as exc:
        exc.raw = raw
        raise

    quantity = _decimal_field(raw, "quantity")
    price = _decimal_field(raw, "price")
    fee = _decimal_field(raw, "fee", allow_negative=True) if raw.get("fee") not in (None, "") else Decimal(0)

    if quantity == 0:
        logger.debug("Zero-quantity fill %s on %s", raw.get("id"), raw["symbol"])

    trade_id = raw.get("tradeId", raw.get("trade_id"))
    return Fill(
        id=str(raw.get("id") or trade_id or ""),
        order_id=str(raw.get("orderId", raw.get("order_id")) or ""),
        trade_id=str(trade_id or ""),
        symbol=str(raw["symbol"]).strip(),
        side=side,
        quantity=quantity,
        price=price,
        fee=fee,
        timestamp=timestamp,
        fee_symbol=raw.get("feeSymbol", raw.get("fee_symbol")),
    )


def normalize_fills(raws: Iterable[Mapping[str, Any]], *, strict: bool = True) -> list[Fill]:
    """Normalize a batch. With strict=False, bad records are logged and skipped."""
    fills: list[Fill] = []
    skipped = 0
    for i, raw in enumerate(raws):
        try:
            fills.append(normalize_fill(raw))
        except FillNormalizationError as exc:
            if strict:
                raise
            skipped += 1
            logger.warning("Skipping fill record #%d: %s", i, exc)
    if skipped:
        logger.warning("Skipped %d malformed fill record(s)", skipped)
    return fills
