"""Exceptions personnalisées pour le module products."""
from typing import Optional

from src.products.constants import (
    ERROR_PRODUCT_NOT_FOUND,
    ERROR_VARIANT_NOT_FOUND,
    ERROR_PRODUCT_FORBIDDEN,
    ERROR_VARIANT_IN_USE,
)

class ProductError(Exception):
    """Classe de base pour les exceptions liées aux produits."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class ProductNotFoundException(ProductError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"{ERROR_PRODUCT_NOT_FOUND} (ID: {product_id}).")

class VariantNotFoundException(ProductError):
    def __init__(self, variant_id: int, product_id: Optional[int] = None):
        self.variant_id = variant_id
        self.product_id = product_id
        super().__init__(f"{ERROR_VARIANT_NOT_FOUND} (ID: {variant_id}).")

class ProductOwnershipException(ProductError):
    """Levée lorsqu'un vendeur agit sur le produit d'une autre boutique."""
    def __init__(self, product_id: int, user_id: int):
        self.product_id = product_id
        self.user_id = user_id
        super().__init__(f"{ERROR_PRODUCT_FORBIDDEN} (produit ID: {product_id}).")

class VariantInUseException(ProductError):
    def __init__(self, variant_id: int):
        self.variant_id = variant_id
        super().__init__(f"{ERROR_VARIANT_IN_USE} (ID: {variant_id}).")

class InvalidProductOperationException(ProductError):
    pass

class InsufficientStockException(ProductError):
    """Levée lorsque la quantité demandée dépasse le stock disponible."""
    def __init__(self, product_id: int, requested: int, available: Optional[int] = None, variant_id: Optional[int] = None):
        self.product_id = product_id
        self.variant_id = variant_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Stock insuffisant pour le produit ID {product_id}"
            f"{f' (variante {variant_id})' if variant_id else ''}: demandé {requested}"
            f"{f', disponible {available}' if available is not None else ''}."
        )
