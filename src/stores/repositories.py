# src/stores/repositories.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from fastcrud import FastCRUD
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.products.models import Product
from src.stores.exceptions import StoreAlreadyExistsError
from src.stores.interfaces.repositories import AbstractStoreRepository
from src.stores.models import Store, StoreCreate, StoreRead, StoreUpdate, StoreAdminUpdate

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "rating": Store.rating,
    "created_at": Store.created_at,
    "name": Store.name,
}


class SQLAlchemyStoreRepository(AbstractStoreRepository):
    """Implémentation SQLAlchemy du repository des boutiques."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD[Store, StoreCreate, StoreUpdate, StoreAdminUpdate, StoreAdminUpdate, StoreRead](Store)

    async def get_by_id(self, store_id: int) -> Optional[Store]:
        logger.debug(f"[StoreRepository] Récupération boutique ID: {store_id}")
        return await self.db.get(Store, store_id)

    async def get_by_seller(self, seller_id: int) -> Optional[Store]:
        logger.debug(f"[StoreRepository] Récupération boutique du vendeur ID: {seller_id}")
        result = await self.db.execute(select(Store).where(Store.seller_id == seller_id))
        return result.scalars().first()

    async def slug_exists(self, slug: str) -> bool:
        return await self.crud.exists(db=self.db, slug=slug)

    async def has_products(self, store_id: int) -> bool:
        result = await self.db.execute(select(Product.id).where(Product.store_id == store_id).limit(1))
        return result.first() is not None

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
        logger.debug(f"[StoreRepository] Listage boutiques: offset={offset}, limit={limit}, active={is_active}, search={search}")
        stmt = select(Store)
        if is_active is not None:
            stmt = stmt.where(Store.is_active.is_(is_active))
        if category_id is not None:
            stmt = stmt.where(Store.category_id == category_id)
        if verified_only:
            stmt = stmt.where(Store.is_verified.is_(True))
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Store.name.ilike(pattern), Store.description.ilike(pattern)))

        total = (await self.db.execute(select(func.count()).select_from(stmt.subquery()))).scalar_one()

        column = SORT_COLUMNS.get(sort_by, Store.rating)
        stmt = stmt.order_by(column.desc() if sort_order == "desc" else column.asc(), Store.id)
        result = await self.db.execute(stmt.offset(offset).limit(limit))
        return [StoreRead.model_validate(s) for s in result.scalars().all()], total

    async def create(self, store_data: Dict[str, Any]) -> Store:
        store = Store(**store_data)
        try:
            self.db.add(store)
            await self.db.commit()
            await self.db.refresh(store)
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[StoreRepository] Erreur d'intégrité à la création: {e}")
            raise StoreAlreadyExistsError(store_data.get("seller_id"))
        logger.info(f"[StoreRepository] Boutique créée ID: {store.id} (vendeur {store.seller_id})")
        return store

    async def update(self, store: Store, update_data: Dict[str, Any]) -> Store:
        logger.debug(f"[StoreRepository] Mise à jour boutique ID: {store.id} avec {list(update_data)}")
        for key, value in update_data.items():
            setattr(store, key, value)
        self.db.add(store)
        await self.db.commit()
        await self.db.refresh(store)
        return store

    async def delete(self, store: Store) -> None:
        logger.debug(f"[StoreRepository] Suppression boutique ID: {store.id}")
        await self.db.delete(store)
        await self.db.commit()
