"""Exceptions spécifiques au domaine Order."""
from typing import List

from src.orders.config import ORDER_STATUS_DISPLAY
from src.orders.constants import (
    ERROR_ORDER_NOT_FOUND,
    ERROR_EMPTY_CART,
    ERROR_INVALID_ADDRESS,
    ERROR_PRODUCT_UNAVAILABLE,
)

class OrderDomainException(Exception):
    """Classe de base pour les exceptions du domaine Order."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class OrderNotFoundException(OrderDomainException):
    """Levée lorsqu'une commande n'existe pas ou n'est pas visible par l'utilisateur."""
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"{ERROR_ORDER_NOT_FOUND} (ID: {order_id}).")

class EmptyCartException(OrderDomainException):
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"{ERROR_EMPTY_CART} pour l'utilisateur ID {user_id}.")

class InvalidDeliveryAddressException(OrderDomainException):
    def __init__(self, address_id: int):
        self.address_id = address_id
        super().__init__(f"{ERROR_INVALID_ADDRESS} (ID: {address_id}).")

class ProductUnavailableException(OrderDomainException):
    def __init__(self, product_id: int, name: str):
        self.product_id = product_id
        super().__init__(f"{ERROR_PRODUCT_UNAVAILABLE}: {name} (ID: {product_id}).")

class InvalidOrderStatusTransitionException(OrderDomainException):
    """Levée lorsque la transition de statut demandée n'est pas autorisée."""
    def __init__(self, current: str, requested: str, allowed: List[str]):
        self.current = current
        self.requested = requested
        allowed_str = ", ".join(ORDER_STATUS_DISPLAY.get(s, s) for s in allowed) if allowed else "aucun"
        super().__init__(
            f"Impossible de passer la commande de '{ORDER_STATUS_DISPLAY.get(current, current)}' "
            f"à '{ORDER_STATUS_DISPLAY.get(requested, requested)}'. Statuts suivants autorisés: {allowed_str}."
        )

class OrderCreationFailedException(OrderDomainException):
    pass
