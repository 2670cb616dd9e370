"""Conversions between currency amounts and stored minor units."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

MINOR_UNITS_PER_MAJOR = 100
_CENT = Decimal("0.01")

# Largest value the signed 64-bit ``invoices.amount`` column holds.
MAX_MINOR_UNITS = 2**63 - 1
MAX_AMOUNT = Decimal(MAX_MINOR_UNITS) / MINOR_UNITS_PER_MAJOR

Number = Union[Decimal, int, str]


def to_minor_units(amount: Number) -> int:
    """Return ``amount`` expressed in cents.

    Sub-cent fractions are rounded half up, so ``Decimal("12.34")`` becomes
    ``1234`` and ``Decimal("0.005")`` becomes ``1``.
    """

    value = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    cents = (value * MINOR_UNITS_PER_MAJOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


def from_minor_units(cents: int) -> Decimal:
    """Return the decimal currency amount for ``cents``."""

    return (Decimal(int(cents)) / MINOR_UNITS_PER_MAJOR).quantize(_CENT)


def format_currency(cents: int, symbol: str = "$") -> str:
    """Render stored cents for display, e.g. ``123456`` -> ``"$1,234.56"``."""

    if cents is None:
        return ""
    amount = from_minor_units(cents)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
