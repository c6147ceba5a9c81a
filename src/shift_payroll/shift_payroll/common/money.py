from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def quantize_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def round_money(value: float) -> float:
    """Round a float amount half-up to cents.

    Goes through the shortest repr so 2.675 rounds to 2.68 as written.
    """
    return float(quantize_money(Decimal(repr(value))))
