from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from src.products.models import Product, ProductVariant


class AbstractProductRepository(ABC):
    """Abstract interface for product data access operations."""

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        """Retrieves a product by its ID."""
        pass

    @abstractmethod
    async def get_variant(self, variant_id: int) -> Optional[ProductVariant]:
        pass

    @abstractmethod
    async def list_variants(self, product_ids: List[int]) -> Dict[int, List[ProductVariant]]:
        """Variants grouped by product ID."""
        pass

    @abstractmethod
    async def list(
        self,
        offset: int,
        limit: int,
        active_only: bool = True,
        category_id: Optional[int] = None,
        store_id: Optional[int] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        featured: Optional[bool] = None,
        search: Optional[str] = None,
        max_stock: Optional[int] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Tuple[List[Product], int]:
        """Lists products with filtering, sorting and pagination (items, total)."""
        pass

    @abstractmethod
    async def slug_exists(self, slug: str) -> bool:
        pass

    @abstractmethod
    async def create(self, product_data: Dict[str, Any], variants: List[Dict[str, Any]]) -> Product:
        pass

    @abstractmethod
    async def update(self, product: Product, update_data: Dict[str, Any]) -> Product:
        pass

    @abstractmethod
    async def add_variant(self, variant_data: Dict[str, Any]) -> ProductVariant:
        pass

    @abstractmethod
    async def variant_in_use(self, variant_id: int) -> bool:
        """True when a cart line or an order line references the variant."""
        pass

    @abstractmethod
    async def delete_variant(self, variant: ProductVariant) -> None:
        pass

    @abstractmethod
    async def set_rating(self, product_id: int, rating: float, review_count: int) -> None:
        pass
