# src/categories/repositories.py
import logging
from typing import Any, Dict, List, Optional

from fastcrud import FastCRUD
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.categories.exceptions import DuplicateCategoryNameException, CategoryInUseException
from src.categories.interfaces.repositories import AbstractCategoryRepository
from src.categories.models import Category, CategoryCreate, CategoryRead, CategoryUpdate
from src.products.models import Product

logger = logging.getLogger(__name__)


class SQLAlchemyCategoryRepository(AbstractCategoryRepository):
    """Implémentation SQLAlchemy du repository des catégories avec FastCRUD."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD[Category, CategoryCreate, CategoryUpdate, CategoryUpdate, CategoryUpdate, CategoryRead](Category)

    async def get_by_id(self, category_id: int) -> Optional[Category]:
        logger.debug(f"[CategoryRepository] Getting category by ID: {category_id}")
        return await self.db.get(Category, category_id)

    async def get_by_name(self, name: str) -> Optional[Category]:
        logger.debug(f"[CategoryRepository] Getting category by name: {name}")
        result = await self.db.execute(select(Category).where(Category.name == name))
        return result.scalars().first()

    async def list(
        self,
        level: Optional[int] = None,
        parent_id: Optional[int] = None,
        root_only: bool = False,
        active: Optional[bool] = None,
    ) -> List[CategoryRead]:
        logger.debug(f"[CategoryRepository] Listing categories: level={level}, parent_id={parent_id}, root_only={root_only}, active={active}")
        stmt = select(Category)
        if level is not None:
            stmt = stmt.where(Category.level == level)
        if root_only:
            stmt = stmt.where(Category.parent_id.is_(None))
        elif parent_id is not None:
            stmt = stmt.where(Category.parent_id == parent_id)
        if active is not None:
            stmt = stmt.where(Category.is_active.is_(active))
        stmt = stmt.order_by(Category.sort_order, Category.name)
        result = await self.db.execute(stmt)
        return [CategoryRead.model_validate(c) for c in result.scalars().all()]

    async def list_children(self, category_id: int) -> List[Category]:
        result = await self.db.execute(select(Category).where(Category.parent_id == category_id))
        return list(result.scalars().all())

    async def has_products(self, category_id: int) -> bool:
        result = await self.db.execute(select(Product.id).where(Product.category_id == category_id).limit(1))
        return result.first() is not None

    async def create(self, category_data: Dict[str, Any]) -> Category:
        logger.debug(f"[CategoryRepository] Creating category: {category_data.get('name')}")
        category = Category(**category_data)
        try:
            self.db.add(category)
            await self.db.commit()
            await self.db.refresh(category)
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[CategoryRepository] Integrity error creating category {category_data.get('name')}: {e}")
            raise DuplicateCategoryNameException(category_data.get("name"))
        return category

    async def update(self, category: Category, update_data: Dict[str, Any]) -> Category:
        logger.debug(f"[CategoryRepository] Updating category ID: {category.id} with {list(update_data)}")
        for key, value in update_data.items():
            setattr(category, key, value)
        try:
            self.db.add(category)
            await self.db.commit()
            await self.db.refresh(category)
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[CategoryRepository] Integrity error updating category {category.id}: {e}")
            raise DuplicateCategoryNameException(update_data.get("name", "<unknown>"))
        return category

    async def delete(self, category: Category) -> None:
        category_id = category.id
        logger.debug(f"[CategoryRepository] Deleting category ID: {category_id}")
        try:
            await self.db.delete(category)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[CategoryRepository] Category {category_id} still referenced: {e}")
            raise CategoryInUseException(category_id)
