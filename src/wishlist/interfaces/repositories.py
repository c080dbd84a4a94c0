from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.products.models import Product
from src.wishlist.models import WishlistItem


class AbstractWishlistRepository(ABC):
    """Interface abstraite pour le repository de la liste de souhaits."""

    @abstractmethod
    async def list_with_products(self, user_id: int) -> List[Tuple[WishlistItem, Product]]:
        """Entrées de la liste avec leur produit, les plus récentes d'abord."""
        pass

    @abstractmethod
    async def get(self, user_id: int, product_id: int) -> Optional[WishlistItem]:
        pass

    @abstractmethod
    async def add(self, user_id: int, product_id: int) -> WishlistItem:
        pass

    @abstractmethod
    async def remove(self, item: WishlistItem) -> None:
        pass

    @abstractmethod
    async def clear(self, user_id: int) -> int:
        """Vide la liste et retourne le nombre d'entrées supprimées."""
        pass
