# src/categories/interfaces/repositories.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from src.categories.models import Category, CategoryRead


class AbstractCategoryRepository(ABC):
    """Interface abstraite pour le repository des catégories."""

    @abstractmethod
    async def get_by_id(self, category_id: int) -> Optional[Category]:
        """Récupère une catégorie par son ID (modèle Table)."""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Category]:
        """Récupère une catégorie par son nom (modèle Table)."""
        pass

    @abstractmethod
    async def list(
        self,
        level: Optional[int] = None,
        parent_id: Optional[int] = None,
        root_only: bool = False,
        active: Optional[bool] = None,
    ) -> List[CategoryRead]:
        """Liste les catégories filtrées, triées par sort_order puis nom."""
        pass

    @abstractmethod
    async def list_children(self, category_id: int) -> List[Category]:
        pass

    @abstractmethod
    async def has_products(self, category_id: int) -> bool:
        pass

    @abstractmethod
    async def create(self, category_data: Dict[str, Any]) -> Category:
        pass

    @abstractmethod
    async def update(self, category: Category, update_data: Dict[str, Any]) -> Category:
        pass

    @abstractmethod
    async def delete(self, category: Category) -> None:
        pass
