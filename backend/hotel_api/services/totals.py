"""Money helpers shared by every derived total."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Final

MONEY_PLACES: Final = Decimal("0.01")


def to_money(value: Decimal | int | str) -> Decimal:
    """Normalize numeric values to a money-safe decimal."""

    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def order_line_subtotal(unit_price: Decimal, quantity: int) -> Decimal:
    return to_money(Decimal(unit_price) * quantity)


def stay_grand_total(
    nightly_rate: Decimal, price_multiplier: Decimal, nights: int
) -> Decimal:
    return to_money(Decimal(nightly_rate) * Decimal(price_multiplier) * nights)
