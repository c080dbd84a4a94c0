"""Exceptions personnalisées pour le module cart."""
from typing import Optional

from src.cart.constants import ERROR_CART_NOT_FOUND, ERROR_CART_ITEM_NOT_FOUND

class CartError(Exception):
    """Classe de base pour les exceptions liées au panier."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class CartNotFoundError(CartError):
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"{ERROR_CART_NOT_FOUND} pour l'utilisateur ID {user_id}.")

class CartItemNotFoundError(CartError):
    def __init__(self, product_id: int, variant_id: Optional[int] = None):
        self.product_id = product_id
        self.variant_id = variant_id
        super().__init__(
            f"{ERROR_CART_ITEM_NOT_FOUND} (produit ID {product_id}{f', variante {variant_id}' if variant_id else ''})."
        )
