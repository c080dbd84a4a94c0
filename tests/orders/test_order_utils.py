import re
from decimal import Decimal

from src.orders.exceptions import InvalidOrderStatusTransitionException
from src.orders.utils import can_transition, compute_order_totals, generate_order_number, get_allowed_transitions


def test_order_number_format():
    number = generate_order_number(timestamp_ms=1700000000123)
    assert re.fullmatch(r"ORD-1700000000123-[A-Z0-9]{9}", number)

def test_order_numbers_are_distinct():
    assert len({generate_order_number(timestamp_ms=1) for _ in range(50)}) == 50

def test_small_order_pays_delivery():
    totals = compute_order_totals(Decimal("40.00"))
    assert totals.tax == Decimal("5.20")
    assert totals.delivery_fee == Decimal("5.00")
    assert totals.total == Decimal("50.20")

def test_threshold_is_exclusive():
    # Livraison gratuite strictement au-dessus de 50
    assert compute_order_totals(Decimal("50.00")).delivery_fee == Decimal("5.00")
    assert compute_order_totals(Decimal("50.01")).delivery_fee == Decimal("0.00")

def test_tax_rounds_half_up():
    # 10.50 x 0.13 = 1.365
    assert compute_order_totals(Decimal("10.50")).tax == Decimal("1.37")

def test_discount_is_subtracted():
    totals = compute_order_totals(Decimal("100.00"), discount=Decimal("10"))
    assert totals.total == Decimal("103.00")

def test_status_transitions():
    assert can_transition("pending", "confirmed")
    assert can_transition("packed", "cancelled")
    assert not can_transition("shipped", "cancelled")
    assert not can_transition("pending", "delivered")
    assert get_allowed_transitions("delivered") == []

def test_transition_error_uses_display_labels():
    error = InvalidOrderStatusTransitionException("shipped", "cancelled", get_allowed_transitions("shipped"))
    assert error.message == (
        "Impossible de passer la commande de 'Expédiée' à 'Annulée'. Statuts suivants autorisés: Livrée."
    )
