"""Pytest fixtures: fill sequences for deterministic tests."""

import pytest

from helpers import make_fill
from roundtrip_core.contracts import Fill, Side


@pytest.fixture
def long_btc_fills() -> list[Fill]:
    """One long BTC round trip: buy then sell the same size."""
    return [
        make_fill(Side.BUY, "0.00037", "106235.4", 0, fee="0.0196"),
        make_fill(Side.SELL, "0.00037", "106308.8", 21, fee="0.0197"),
    ]


@pytest.fixture
def short_btc_fills() -> list[Fill]:
    """One short BTC round trip closed by two partial buys."""
    return [
        make_fill(Side.SELL, "0.00037", "103593.2", 0),
        make_fill(Side.BUY, "0.00017", "103776.6", 60),
        make_fill(Side.BUY, "0.00020", "103778.0", 312),
    ]


@pytest.fixture
def interleaved_fills() -> list[Fill]:
    """BTC and ETH round trips interleaved in time."""
    return [
        make_fill(Side.BUY, "0.001", "100000", 0, symbol="BTC_USDC_PERP"),
        make_fill(Side.BUY, "0.5", "2500", 10, symbol="ETH_USDC_PERP"),
        make_fill(Side.SELL, "0.001", "101000", 20, symbol="BTC_USDC_PERP"),
        make_fill(Side.SELL, "0.5", "2400", 30, symbol="ETH_USDC_PERP"),
    ]


@pytest.fixture
def raw_fill_records() -> list[dict]:
    """Exchange wire-format records (camelCase, Bid/Ask, decimal strings, epoch ms)."""
    base_ms = 1_748_779_200_000  # 2025-06-01T12:00:00Z
    return [
        {
            "id": "1001", "orderId": "9001", "tradeId": "5001", "symbol": "BTC_USDC_PERP",
            "side": "Bid", "quantity": "0.00037", "price": "106235.4", "fee": "0.0196",
            "feeSymbol": "USDC", "timestamp": base_ms,
        },
        {
            "id": "1002", "orderId": "9002", "tradeId": "5002", "symbol": "BTC_USDC_PERP",
            "side": "Ask", "quantity": "0.00037", "price": "106308.8", "fee": "0.0197",
            "feeSymbol": "USDC", "timestamp": base_ms + 21_000,
        },
        {
            "id": "1003", "orderId": "9003", "tradeId": "5003", "symbol": "SOL_USDC",
            "side": "Bid", "quantity": "2", "price": "150.25", "fee": "0.03",
            "feeSymbol": "USDC", "timestamp": base_ms + 30_000,
        },
        {
            "id": "1004", "orderId": "9004", "tradeId": "5004", "symbol": "ETH_USDC_PERP",
            "side": "Ask", "quantity": "0.1", "price": "2500", "fee": "0.01",
            "feeSymbol": "USDC", "timestamp": base_ms + 40_000,
        },
    ]
