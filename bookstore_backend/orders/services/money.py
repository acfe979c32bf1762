# orders/services/money.py

"""
Money quantization shared by the order engine.

Amounts are decimal major units with three places (19.900), rounded half up.
Blank input reads as zero; anything else that is not a number raises
decimal.InvalidOperation.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

THREEPLACES = Decimal("0.001")
ZERO = Decimal("0.000")


def money(v) -> Decimal:
    if v is None or v == "":
        return ZERO
    return Decimal(str(v)).quantize(THREEPLACES, rounding=ROUND_HALF_UP)


def money_str(v) -> str:
    """Wire/CSV form: always three decimals."""
    return f"{money(v):.3f}"
