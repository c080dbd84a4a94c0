import logging
from typing import Dict, List, Optional

from src.core.utils import slugify
from src.categories.config import MAX_CATEGORY_LEVEL
from src.categories.constants import ERROR_MAX_LEVEL
from src.categories.interfaces.repositories import AbstractCategoryRepository
from src.categories.models import Category, CategoryCreate, CategoryUpdate, CategoryRead
from src.categories.exceptions import (
    CategoryNotFoundException,
    DuplicateCategoryNameException,
    InvalidParentCategoryException,
    CategoryInUseException,
)

logger = logging.getLogger(__name__)


class CategoryService:
    """Service applicatif pour la gestion des catégories hiérarchiques."""

    def __init__(self, repository: AbstractCategoryRepository):
        self.repository = repository

    async def list_categories(
        self,
        level: Optional[int] = None,
        parent_id: Optional[int] = None,
        root_only: bool = False,
        active: Optional[bool] = None,
    ) -> List[CategoryRead]:
        return await self.repository.list(level=level, parent_id=parent_id, root_only=root_only, active=active)

    async def list_by_level(self, active: Optional[bool] = True) -> Dict[int, List[CategoryRead]]:
        """Regroupe les catégories par niveau hiérarchique."""
        grouped: Dict[int, List[CategoryRead]] = {}
        for category in await self.repository.list(active=active):
            grouped.setdefault(category.level, []).append(category)
        return grouped

    async def get_category(self, category_id: int) -> CategoryRead:
        """Récupère une catégorie par ID."""
        category = await self._get_orm(category_id)
        return CategoryRead.model_validate(category)

    async def _get_orm(self, category_id: int) -> Category:
        category = await self.repository.get_by_id(category_id)
        if not category:
            raise CategoryNotFoundException(category_id)
        return category

    async def _level_for_parent(self, parent_id: Optional[int], category_id: Optional[int] = None) -> int:
        if parent_id is None:
            return 0
        if category_id is not None and parent_id == category_id:
            raise InvalidParentCategoryException(parent_id, "Une catégorie ne peut pas être son propre parent")
        parent = await self.repository.get_by_id(parent_id)
        if not parent:
            raise InvalidParentCategoryException(parent_id)
        if parent.level + 1 > MAX_CATEGORY_LEVEL:
            raise InvalidParentCategoryException(parent_id, ERROR_MAX_LEVEL)
        return parent.level + 1

    async def create_category(self, category_data: CategoryCreate) -> CategoryRead:
        logger.info(f"[CategoryService] Create Category: {category_data.name}")
        if await self.repository.get_by_name(category_data.name):
            raise DuplicateCategoryNameException(category_data.name)

        data = category_data.model_dump()
        data["level"] = await self._level_for_parent(category_data.parent_id)
        data["slug"] = slugify(category_data.name)
        created = await self.repository.create(data)
        logger.info(f"[CategoryService] Category ID {created.id} created (level {created.level}).")
        return CategoryRead.model_validate(created)

    async def update_category(self, category_id: int, category_data: CategoryUpdate) -> CategoryRead:
        logger.info(f"[CategoryService] Update Category ID: {category_id}")
        category = await self._get_orm(category_id)
        update_data = category_data.model_dump(exclude_unset=True)

        if update_data.get("name"):
            existing = await self.repository.get_by_name(update_data["name"])
            if existing and existing.id != category_id:
                raise DuplicateCategoryNameException(update_data["name"])
            update_data["slug"] = slugify(update_data["name"])

        level_changed = False
        if "parent_id" in update_data:
            new_level = await self._level_for_parent(update_data["parent_id"], category_id=category_id)
            level_changed = new_level != category.level
            update_data["level"] = new_level

        updated = await self.repository.update(category, update_data)
        if level_changed:
            await self._refresh_children_levels(updated)
        return CategoryRead.model_validate(updated)

    async def _refresh_children_levels(self, parent: Category) -> None:
        for child in await self.repository.list_children(parent.id):
            child = await self.repository.update(child, {"level": parent.level + 1})
            await self._refresh_children_levels(child)

    async def delete_category(self, category_id: int) -> None:
        """Supprime une catégorie sans enfants ni produits."""
        logger.info(f"[CategoryService] Delete Category ID: {category_id}")
        category = await self._get_orm(category_id)
        if await self.repository.list_children(category_id) or await self.repository.has_products(category_id):
            logger.warning(f"[CategoryService] Category ID {category_id} still in use, deletion refused.")
            raise CategoryInUseException(category_id)
        await self.repository.delete(category)
