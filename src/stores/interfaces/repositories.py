# src/stores/interfaces/repositories.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from src.stores.models import Store, StoreRead


class AbstractStoreRepository(ABC):
    """Interface abstraite pour le repository des boutiques."""

    @abstractmethod
    async def get_by_id(self, store_id: int) -> Optional[Store]:
        pass

    @abstractmethod
    async def get_by_seller(self, seller_id: int) -> Optional[Store]:
        pass

    @abstractmethod
    async def slug_exists(self, slug: str) -> bool:
        pass

    @abstractmethod
    async def has_products(self, store_id: int) -> bool:
        pass

    @abstractmethod
    async def list(
        self,
        offset: int,
        limit: int,
        is_active: Optional[bool] = None,
        category_id: Optional[int] = None,
        verified_only: bool = False,
        search: Optional[str] = None,
        sort_by: str = "rating",
        sort_order: str = "desc",
    ) -> Tuple[List[StoreRead], int]:
        """Liste paginée des boutiques (items, total)."""
        pass

    @abstractmethod
    async def create(self, store_data: Dict[str, Any]) -> Store:
        pass

    @abstractmethod
    async def update(self, store: Store, update_data: Dict[str, Any]) -> Store:
        pass

    @abstractmethod
    async def delete(self, store: Store) -> None:
        pass
