"""
Shared numeric and duration helpers: decimal coercion, weighted average,
display rounding, human-readable durations.
"""

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

ZERO = Decimal(0)

# Float-era tolerance for the zero check; opt-in via engine.zero_tolerance.
LEGACY_EPSILON = Decimal("1e-7")


def to_decimal(value: str | int | float | Decimal) -> Decimal:
    """Convert *value* to Decimal without passing through binary float.

    Floats are converted through their shortest repr ("0.1" not
    "0.1000000000000000055511151231257827"). Raises ValueError for
    non-numeric or non-finite input.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a decimal value: {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Not a decimal value: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a finite decimal value: {value!r}")
    return result


def weighted_average(value: Decimal, quantity: Decimal) -> Decimal:
    """Sum(price * qty) / Sum(qty); 0 when no quantity traded."""
    if quantity == 0:
        return ZERO
    return value / quantity


def dsum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def round_money(value: Decimal, places: int = 2) -> Decimal:
    """Round half-up to *places* decimals for display."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _unit(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def format_duration(elapsed: timedelta) -> str:
    """Human-readable elapsed time using the two largest units.

    >>> format_duration(timedelta(days=2, hours=3))
    '2 days 3 hours'
    >>> format_duration(timedelta(minutes=5, seconds=12))
    '5 mins 12 secs'
    >>> format_duration(timedelta(seconds=21))
    '21 seconds'
    """
    seconds = max(elapsed // timedelta(seconds=1), 0)
    minutes, secs = divmod(seconds, 60)
    hours, mins = divmod(minutes, 60)
    days, hrs = divmod(hours, 24)

    if days > 0:
        return f"{_unit(days, 'day', 'days')} {_unit(hrs, 'hour', 'hours')}"
    if hours > 0:
        return f"{_unit(hours, 'hour', 'hours')} {_unit(mins, 'min', 'mins')}"
    if minutes > 0:
        return f"{_unit(minutes, 'min', 'mins')} {_unit(secs, 'sec', 'secs')}"
    return _unit(seconds, "second", "seconds")
