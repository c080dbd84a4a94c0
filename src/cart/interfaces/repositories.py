# src/cart/interfaces/repositories.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from src.cart.models import Cart, CartItem
from src.products.models import Product


class AbstractCartRepository(ABC):
    """Interface abstraite pour le repository du panier."""

    @abstractmethod
    async def get_by_user(self, user_id: int) -> Optional[Cart]:
        pass

    @abstractmethod
    async def get_or_create(self, user_id: int) -> Cart:
        pass

    @abstractmethod
    async def list_items(self, cart_id: int) -> List[CartItem]:
        pass

    @abstractmethod
    async def list_lines(self, cart_id: int) -> List[Tuple[CartItem, Product]]:
        """Lignes du panier avec leur produit, dans l'ordre d'ajout."""
        pass

    @abstractmethod
    async def find_item(self, cart_id: int, product_id: int, variant_id: Optional[int]) -> Optional[CartItem]:
        pass

    @abstractmethod
    async def add_item(self, item_data: Dict[str, Any]) -> CartItem:
        pass

    @abstractmethod
    async def delete_item(self, item: CartItem) -> None:
        pass

    @abstractmethod
    async def save(self, cart: Cart) -> Cart:
        """Recalcule total et item_count depuis les lignes puis commit."""
        pass

    @abstractmethod
    async def clear(self, cart: Cart) -> Cart:
        pass
