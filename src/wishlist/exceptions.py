"""Exceptions personnalisées pour le module wishlist."""
from src.wishlist.constants import ERROR_WISHLIST_ITEM_NOT_FOUND

class WishlistError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class WishlistItemNotFoundError(WishlistError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"{ERROR_WISHLIST_ITEM_NOT_FOUND} (produit ID: {product_id}).")
