"""
Module contenant la logique métier des boutiques.
"""
import logging
from typing import Optional

from src.core.schemas import PaginatedResponse, page_to_offset
from src.core.utils import slugify
from src.stores.config import STATUS_ACTIVE, STATUS_INACTIVE
from src.stores.exceptions import (
    StoreNotFoundError,
    SellerStoreNotFoundError,
    StoreAlreadyExistsError,
    StoreInUseError,
)
from src.stores.interfaces.repositories import AbstractStoreRepository
from src.stores.models import Store, StoreCreate, StoreRead, StoreUpdate, StoreAdminUpdate

logger = logging.getLogger(__name__)


class StoreService:
    """Service pour gérer les boutiques des vendeurs."""

    def __init__(self, repository: AbstractStoreRepository):
        self.repository = repository

    async def _unique_slug(self, name: str, seller_id: int) -> str:
        slug = slugify(name) or f"store-{seller_id}"
        if await self.repository.slug_exists(slug):
            slug = f"{slug}-{seller_id}"
        return slug

    async def create_store(self, seller_id: int, store_data: StoreCreate) -> StoreRead:
        """Crée la boutique d'un vendeur. Un vendeur ne peut en posséder qu'une."""
        if await self.repository.get_by_seller(seller_id):
            logger.warning(f"[StoreService] Le vendeur {seller_id} possède déjà une boutique.")
            raise StoreAlreadyExistsError(seller_id)

        data = store_data.model_dump()
        data["seller_id"] = seller_id
        data["slug"] = await self._unique_slug(store_data.name, seller_id)
        created = await self.repository.create(data)
        return StoreRead.model_validate(created)

    async def list_stores(
        self,
        page: int,
        limit: int,
        category_id: Optional[int] = None,
        verified_only: bool = False,
        search: Optional[str] = None,
        sort_by: str = "rating",
        sort_order: str = "desc",
    ) -> PaginatedResponse[StoreRead]:
        """Liste publique : uniquement les boutiques actives."""
        items, total = await self.repository.list(
            offset=page_to_offset(page, limit),
            limit=limit,
            is_active=True,
            category_id=category_id,
            verified_only=verified_only,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return PaginatedResponse[StoreRead].build(items=items, total=total, page=page, limit=limit)

    async def admin_list_stores(self, page: int, limit: int, status_filter: str) -> PaginatedResponse[StoreRead]:
        is_active = None
        if status_filter == STATUS_ACTIVE:
            is_active = True
        elif status_filter == STATUS_INACTIVE:
            is_active = False
        items, total = await self.repository.list(
            offset=page_to_offset(page, limit), limit=limit, is_active=is_active, sort_by="created_at"
        )
        return PaginatedResponse[StoreRead].build(items=items, total=total, page=page, limit=limit)

    async def get_public_store(self, store_id: int) -> StoreRead:
        store = await self.repository.get_by_id(store_id)
        if not store or not store.is_active:
            raise StoreNotFoundError(store_id)
        return StoreRead.model_validate(store)

    async def get_store_orm(self, store_id: int) -> Store:
        store = await self.repository.get_by_id(store_id)
        if not store:
            raise StoreNotFoundError(store_id)
        return store

    async def get_seller_store(self, seller_id: int) -> Store:
        """Boutique du vendeur (modèle Table). Utilisé par les modules produits et vendeurs."""
        store = await self.repository.get_by_seller(seller_id)
        if not store:
            raise SellerStoreNotFoundError(seller_id)
        return store

    async def get_my_store(self, seller_id: int) -> StoreRead:
        return StoreRead.model_validate(await self.get_seller_store(seller_id))

    async def update_my_store(self, seller_id: int, store_update: StoreUpdate) -> StoreRead:
        store = await self.get_seller_store(seller_id)
        update_data = store_update.model_dump(exclude_unset=True)
        if update_data.get("name") and update_data["name"] != store.name:
            update_data["slug"] = await self._unique_slug(update_data["name"], seller_id)
        updated = await self.repository.update(store, update_data)
        logger.info(f"[StoreService] Boutique {store.id} mise à jour par le vendeur {seller_id}")
        return StoreRead.model_validate(updated)

    async def admin_update_store(self, store_id: int, store_update: StoreAdminUpdate) -> StoreRead:
        store = await self.get_store_orm(store_id)
        update_data = store_update.model_dump(exclude_unset=True)
        if update_data.get("name") and update_data["name"] != store.name:
            update_data["slug"] = await self._unique_slug(update_data["name"], store.seller_id)
        updated = await self.repository.update(store, update_data)
        logger.info(f"[StoreService] Boutique {store_id} mise à jour par un admin: {list(update_data)}")
        return StoreRead.model_validate(updated)

    async def delete_store(self, store_id: int) -> None:
        store = await self.get_store_orm(store_id)
        if await self.repository.has_products(store_id):
            logger.warning(f"[StoreService] Suppression refusée, la boutique {store_id} a des produits.")
            raise StoreInUseError(store_id)
        await self.repository.delete(store)
        logger.info(f"[StoreService] Boutique {store_id} supprimée")
