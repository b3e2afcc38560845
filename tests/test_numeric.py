"""Tests for numeric helpers and duration formatting."""

from datetime import timedelta
from decimal import Decimal

import pytest

from roundtrip_core.numeric import format_duration, round_money, to_decimal, weighted_average


class TestToDecimal:
    def test_strings_are_exact(self) -> None:
        assert to_decimal("0.00037") == Decimal("0.00037")
        assert to_decimal(" 106235.4 ") == Decimal("106235.4")

    def test_float_uses_shortest_repr(self) -> None:
        assert to_decimal(0.1) == Decimal("0.1")

    def test_int_and_decimal(self) -> None:
        assert to_decimal(5) == Decimal(5)
        d = Decimal("1.5")
        assert to_decimal(d) is d

    @pytest.mark.parametrize("bad", ["abc", "", "NaN", "inf", True, None])
    def test_rejects_non_numeric(self, bad) -> None:
        with pytest.raises(ValueError):
            to_decimal(bad)


def test_weighted_average() -> None:
    assert weighted_average(Decimal("412"), Decimal("4")) == Decimal("103")
    assert weighted_average(Decimal("0"), Decimal("0")) == 0


def test_round_money_half_up() -> None:
    assert round_money(Decimal("0.025")) == Decimal("0.03")
    assert round_money(Decimal("-0.068138")) == Decimal("-0.07")
    assert round_money(Decimal("0.000125"), 5) == Decimal("0.00013")


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("elapsed", "expected"),
        [
            (timedelta(seconds=0), "0 seconds"),
            (timedelta(seconds=1), "1 second"),
            (timedelta(seconds=21), "21 seconds"),
            (timedelta(seconds=21, milliseconds=900), "21 seconds"),
            (timedelta(minutes=1, seconds=1), "1 min 1 sec"),
            (timedelta(minutes=5, seconds=12), "5 mins 12 secs"),
            (timedelta(hours=1), "1 hour 0 mins"),
            (timedelta(hours=3, minutes=1), "3 hours 1 min"),
            (timedelta(days=1), "1 day 0 hours"),
            (timedelta(days=2, hours=3, minutes=59), "2 days 3 hours"),
        ],
    )
    def test_two_largest_units(self, elapsed: timedelta, expected: str) -> None:
        assert format_duration(elapsed) == expected

    def test_negative_clamped(self) -> None:
        assert format_duration(timedelta(seconds=-5)) == "0 seconds"
