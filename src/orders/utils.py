"""
Utilitaires pour le module de gestion des commandes.
"""
import secrets
import string
import time
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from src.config import settings
from src.orders.config import (
    ORDER_NUMBER_PREFIX,
    ORDER_NUMBER_SUFFIX_LENGTH,
    ORDER_STATUS_TRANSITIONS,
)

CENTS = Decimal("0.01")
_ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal
    discount: Decimal
    total: Decimal


def generate_order_number(timestamp_ms: Optional[int] = None) -> str:
    """
    Génère un numéro de commande lisible.

    Format: ORD-<epoch ms>-<9 caractères A-Z0-9>
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ORDER_NUMBER_ALPHABET) for _ in range(ORDER_NUMBER_SUFFIX_LENGTH))
    return f"{ORDER_NUMBER_PREFIX}-{timestamp_ms}-{suffix}"


def compute_order_totals(subtotal: Decimal, discount: Decimal = Decimal("0")) -> OrderTotals:
    """
    Calcule taxe, frais de livraison et total à partir du sous-total.

    - taxe = sous-total x ORDER_TAX_RATE, arrondie au centime (demi supérieur)
    - livraison gratuite si sous-total > FREE_DELIVERY_THRESHOLD, sinon DELIVERY_FEE
    - total = sous-total + taxe + livraison - remise
    """
    subtotal = Decimal(subtotal).quantize(CENTS, rounding=ROUND_HALF_UP)
    tax = (subtotal * settings.ORDER_TAX_RATE).quantize(CENTS, rounding=ROUND_HALF_UP)
    delivery_fee = Decimal("0.00") if subtotal > settings.FREE_DELIVERY_THRESHOLD else settings.DELIVERY_FEE
    delivery_fee = Decimal(delivery_fee).quantize(CENTS)
    discount = Decimal(discount).quantize(CENTS, rounding=ROUND_HALF_UP)
    total = subtotal + tax + delivery_fee - discount
    return OrderTotals(subtotal=subtotal, tax=tax, delivery_fee=delivery_fee, discount=discount, total=total)


def get_allowed_transitions(current_status: str) -> List[str]:
    return ORDER_STATUS_TRANSITIONS.get(current_status, [])


def can_transition(current_status: str, new_status: str) -> bool:
    return new_status in get_allowed_transitions(current_status)
