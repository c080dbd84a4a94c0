import logging
from decimal import Decimal
from typing import List, Optional

from src.core.schemas import PaginatedResponse, page_to_offset
from src.core.utils import slugify
from src.products.constants import ERROR_STORE_REQUIRED
from src.products.exceptions import (
    ProductNotFoundException,
    VariantNotFoundException,
    ProductOwnershipException,
    VariantInUseException,
    InvalidProductOperationException,
)
from src.products.interfaces.repositories import AbstractProductRepository
from src.products.models import (
    Product, ProductCreate, ProductRead, ProductUpdate,
    ProductVariant, ProductVariantCreate, ProductVariantRead,
)
from src.stores.service import StoreService
from src.users.config import ROLE_ADMIN
from src.users.models import UserRead

logger = logging.getLogger(__name__)


class ProductService:
    """Service du catalogue : produits, variantes et contrôle d'appartenance à la boutique."""

    def __init__(self, product_repo: AbstractProductRepository, store_service: StoreService):
        self.product_repo = product_repo
        self.store_service = store_service

    # --- Lecture ---

    async def _to_read(self, products: List[Product]) -> List[ProductRead]:
        variants = await self.product_repo.list_variants([p.id for p in products])
        return [
            ProductRead.model_validate(p, update={"variants": [ProductVariantRead.model_validate(v) for v in variants[p.id]]})
            for p in products
        ]

    async def get_product(self, product_id: int, include_inactive: bool = False) -> ProductRead:
        """Détail d'un produit avec ses variantes. Un produit inactif est introuvable côté public."""
        product = await self.product_repo.get_by_id(product_id)
        if not product or (not product.is_active and not include_inactive):
            raise ProductNotFoundException(product_id)
        return (await self._to_read([product]))[0]

    async def list_products(
        self,
        page: int,
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
    ) -> PaginatedResponse[ProductRead]:
        products, total = await self.product_repo.list(
            offset=page_to_offset(page, limit),
            limit=limit,
            active_only=active_only,
            category_id=category_id,
            store_id=store_id,
            min_price=min_price,
            max_price=max_price,
            featured=featured,
            search=search,
            max_stock=max_stock,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        items = await self._to_read(products)
        return PaginatedResponse[ProductRead].build(items=items, total=total, page=page, limit=limit)

    # --- Écriture (vendeur propriétaire ou admin) ---

    async def _get_owned_product(self, product_id: int, user: UserRead) -> Product:
        product = await self.product_repo.get_by_id(product_id)
        if not product:
            raise ProductNotFoundException(product_id)
        if user.role != ROLE_ADMIN:
            store = await self.store_service.get_seller_store(user.id)
            if product.store_id != store.id:
                logger.warning(f"[ProductService] User {user.id} tente de modifier le produit {product_id} d'une autre boutique.")
                raise ProductOwnershipException(product_id, user.id)
        return product

    async def _unique_slug(self, name: str) -> str:
        base = slugify(name) or "produit"
        slug, suffix = base, 2
        while await self.product_repo.slug_exists(slug):
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    async def create_product(self, user: UserRead, product_data: ProductCreate) -> ProductRead:
        if user.role == ROLE_ADMIN:
            if product_data.store_id is None:
                raise InvalidProductOperationException(ERROR_STORE_REQUIRED)
            store = await self.store_service.get_store_orm(product_data.store_id)
        else:
            store = await self.store_service.get_seller_store(user.id)

        data = product_data.model_dump(exclude={"variants", "store_id"})
        data["store_id"] = store.id
        data["slug"] = await self._unique_slug(product_data.name)
        variants = [v.model_dump() for v in product_data.variants]
        product = await self.product_repo.create(data, variants)
        logger.info(f"[ProductService] Produit {product.id} créé dans la boutique {store.id} par user {user.id}")
        return (await self._to_read([product]))[0]

    async def update_product(self, user: UserRead, product_id: int, product_update: ProductUpdate) -> ProductRead:
        product = await self._get_owned_product(product_id, user)
        update_data = product_update.model_dump(exclude_unset=True)
        if update_data.get("name") and update_data["name"] != product.name:
            update_data["slug"] = await self._unique_slug(update_data["name"])
        updated = await self.product_repo.update(product, update_data)
        logger.info(f"[ProductService] Produit {product_id} mis à jour par user {user.id}: {list(update_data)}")
        return (await self._to_read([updated]))[0]

    async def delete_product(self, user: UserRead, product_id: int) -> None:
        """
        Retire un produit du catalogue (désactivation).

        Les commandes passées conservent leur référence au produit.
        """
        product = await self._get_owned_product(product_id, user)
        await self.product_repo.update(product, {"is_active": False})
        logger.info(f"[ProductService] Produit {product_id} désactivé par user {user.id}")

    async def add_variant(self, user: UserRead, product_id: int, variant_data: ProductVariantCreate) -> ProductVariantRead:
        await self._get_owned_product(product_id, user)
        data = variant_data.model_dump()
        data["product_id"] = product_id
        variant = await self.product_repo.add_variant(data)
        return ProductVariantRead.model_validate(variant)

    async def delete_variant(self, user: UserRead, product_id: int, variant_id: int) -> None:
        await self._get_owned_product(product_id, user)
        variant = await self.product_repo.get_variant(variant_id)
        if not variant or variant.product_id != product_id:
            raise VariantNotFoundException(variant_id, product_id)
        if await self.product_repo.variant_in_use(variant_id):
            raise VariantInUseException(variant_id)
        await self.product_repo.delete_variant(variant)

    # --- Utilisé par le panier et les commandes ---

    async def get_active_product(self, product_id: int) -> Product:
        product = await self.product_repo.get_by_id(product_id)
        if not product or not product.is_active:
            raise ProductNotFoundException(product_id)
        return product

    async def get_product_variant(self, product_id: int, variant_id: int) -> ProductVariant:
        variant = await self.product_repo.get_variant(variant_id)
        if not variant or variant.product_id != product_id:
            raise VariantNotFoundException(variant_id, product_id)
        return variant

    async def update_rating(self, product_id: int, rating: float, review_count: int) -> None:
        """Enregistre la note moyenne et le nombre d'avis recalculés par le module avis."""
        await self.product_repo.set_rating(product_id, rating, review_count)
