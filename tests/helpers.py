"""Fill factories shared by the test modules."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from itertools import count

from roundtrip_core.contracts import Fill, Side

T0 = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

_ids = count(1)


def ts(seconds: float = 0) -> datetime:
    """T0 plus *seconds*."""
    return T0 + timedelta(seconds=seconds)


def make_fill(
    side: Side | str,
    quantity: str,
    price: str,
    at: float = 0,
    *,
    symbol: str = "BTC_USDC_PERP",
    fee: str = "0",
    fill_id: str | None = None,
) -> Fill:
    n = next(_ids)
    return Fill(
        id=fill_id or f"f{n}",
        order_id=f"o{n}",
        trade_id=f"t{n}",
        symbol=symbol,
        side=Side(side) if isinstance(side, str) else side,
        quantity=Decimal(quantity),
        price=Decimal(price),
        fee=Decimal(fee),
        timestamp=ts(at),
    )
