from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional, Tuple

from src.orders.models import Order, OrderItem


class AbstractSellerRepository(ABC):
    """Requêtes d'agrégation pour le tableau de bord d'une boutique."""

    @abstractmethod
    async def count_active_products(self, store_id: int) -> int:
        pass

    @abstractmethod
    async def count_low_stock_products(self, store_id: int, threshold: int) -> int:
        pass

    @abstractmethod
    async def count_orders(self, store_id: int, status: Optional[str] = None) -> int:
        """Nombre de commandes contenant au moins une ligne de la boutique."""
        pass

    @abstractmethod
    async def revenue(self, store_id: int, statuses: List[str]) -> Decimal:
        pass

    @abstractmethod
    async def recent_orders(self, store_id: int, limit: int) -> List[Tuple[Order, List[OrderItem]]]:
        pass
