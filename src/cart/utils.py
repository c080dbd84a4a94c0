"""Calculs purs sur les lignes de panier."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from src.cart.models import CartItem

CENTS = Decimal("0.01")


def line_subtotal(unit_price: Decimal, quantity: int) -> Decimal:
    return (Decimal(unit_price) * quantity).quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_cart_totals(items: Iterable[CartItem]) -> Tuple[Decimal, int]:
    """Retourne (total, item_count) pour un ensemble de lignes."""
    total = Decimal("0.00")
    item_count = 0
    for item in items:
        total += line_subtotal(item.unit_price, item.quantity)
        item_count += item.quantity
    return total.quantize(CENTS, rounding=ROUND_HALF_UP), item_count
