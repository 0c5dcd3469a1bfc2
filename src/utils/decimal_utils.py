"""Helpers for Decimal normalization."""

from decimal import Decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Floats go through ``str`` so that slider and form values such as
    ``0.05`` keep their displayed precision.

    Args:
        value: Raw numeric value from a form, JSON document or adapter.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def coerce_optional_decimal(value) -> Decimal | None:
    """Return ``None`` for missing values, a Decimal otherwise."""
    if value is None:
        return None
    return coerce_decimal(value)


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide, returning zero when the denominator is zero.

    Args:
        numerator: Dividend.
        denominator: Divisor.

    Returns:
        Decimal: Quotient, or zero for a zero divisor.
    """
    if denominator == 0:
        return ZERO
    return numerator / denominator


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part / whole * 100`` with the zero-divisor guard."""
    return safe_divide(part, whole) * HUNDRED


__all__ = [
    "ZERO",
    "HUNDRED",
    "coerce_decimal",
    "coerce_optional_decimal",
    "safe_divide",
    "percent_of",
]
