# orderflow/services/pricing.py
"""Availability check and order total for checkout lines.

Both functions are pure; they work on the row mappings returned by
CartRepo.get_cart_with_items (keys: product_id, quantity, price, stock).

Totals use Decimal arithmetic and are rounded to cents with ROUND_HALF_UP,
i.e. ties go away from zero: 25.005 -> 25.01, 25.004 -> 25.00.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Mapping

from orderflow.domain.errors import InsufficientStock

CENTS = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # through str() so 5.005 stays 5.005 and not 5.00499999...
    return Decimal(str(value))


def validate_availability(lines: Iterable[Mapping]) -> None:
    """Raise InsufficientStock for the first line asking for more than is in stock."""
    for line in lines:
        requested = int(line["quantity"])
        available = int(line["stock"])
        if requested > available:
            raise InsufficientStock(line["product_id"], requested, available)


def calculate_order_total(lines: Iterable[Mapping]) -> Decimal:
    total = sum(
        (to_decimal(line["price"]) * int(line["quantity"]) for line in lines),
        Decimal("0"),
    )
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)
