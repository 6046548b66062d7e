"""Number formatting for human-readable report strings."""

from __future__ import annotations

import math


def format_number(value: float) -> str:
    """Thousands-separated, at most 3 decimals, no trailing zeros.

    10000 -> "10,000", 7.5 -> "7.5", 6.0 -> "6".
    """
    if not math.isfinite(value):
        return str(value)
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def with_unit(amount: str, unit: str | None) -> str:
    """Join an amount and a display unit, skipping an empty unit."""
    return f"{amount} {unit}" if unit else amount
