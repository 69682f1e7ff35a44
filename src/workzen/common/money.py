from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value, default: Decimal = ZERO) -> Decimal:
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


def round_money(value) -> Decimal:
    """Round half-up to 2 decimal places (0.005 -> 0.01)."""
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def percent(base: Decimal, rate: Decimal) -> Decimal:
    """Unrounded share of `base`; round only the figure that gets reported."""
    return to_decimal(base) * to_decimal(rate) / Decimal(100)


def percent_of(base: Decimal, rate: Decimal) -> Decimal:
    return round_money(percent(base, rate))


def as_number(value: Decimal) -> float:
    """JSON friendly representation of a money amount."""
    return float(round_money(value))
