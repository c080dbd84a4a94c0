from decimal import Decimal

from src.cart.models import CartItem
from src.cart.utils import compute_cart_totals, line_subtotal


def test_line_subtotal_rounds_to_cents():
    assert line_subtotal(Decimal("3.335"), 1) == Decimal("3.34")
    assert line_subtotal(Decimal("7.50"), 3) == Decimal("22.50")

def test_compute_cart_totals():
    items = [
        CartItem(cart_id=1, product_id=1, quantity=2, unit_price=Decimal("20.00")),
        CartItem(cart_id=1, product_id=2, quantity=3, unit_price=Decimal("7.50")),
    ]
    total, item_count = compute_cart_totals(items)
    assert total == Decimal("62.50")
    assert item_count == 5

def test_compute_cart_totals_empty():
    assert compute_cart_totals([]) == (Decimal("0.00"), 0)
