import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from fastcrud import FastCRUD
from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.cart.models import CartItem
from src.orders.models import OrderItem
from src.products.interfaces.repositories import AbstractProductRepository
from src.products.models import Product, ProductCreate, ProductRead, ProductUpdate, ProductVariant

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "created_at": Product.created_at,
    "price": Product.price,
    "rating": Product.rating,
    "name": Product.name,
}


def guarded_decrement_statement(product_id: int, variant_id: Optional[int], quantity: int):
    """
    UPDATE conditionnel : ne décrémente que si le stock restant couvre la quantité.

    Aucune ligne modifiée signifie stock insuffisant au moment de l'écriture.
    """
    if variant_id is not None:
        return (
            update(ProductVariant)
            .where(
                ProductVariant.id == variant_id,
                ProductVariant.product_id == product_id,
                ProductVariant.stock >= quantity,
            )
            .values(stock=ProductVariant.stock - quantity)
        )
    return (
        update(Product)
        .where(Product.id == product_id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity)
    )


def restock_statement(product_id: int, variant_id: Optional[int], quantity: int):
    if variant_id is not None:
        return (
            update(ProductVariant)
            .where(ProductVariant.id == variant_id, ProductVariant.product_id == product_id)
            .values(stock=ProductVariant.stock + quantity)
        )
    return update(Product).where(Product.id == product_id).values(stock=Product.stock + quantity)


class SQLAlchemyProductRepository(AbstractProductRepository):
    """SQLAlchemy implementation of the product repository."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.crud = FastCRUD[Product, ProductCreate, ProductUpdate, ProductUpdate, ProductUpdate, ProductRead](Product)

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        logger.debug(f"[ProductRepository] Getting product by ID: {product_id}")
        return await self.db.get(Product, product_id)

    async def get_variant(self, variant_id: int) -> Optional[ProductVariant]:
        return await self.db.get(ProductVariant, variant_id)

    async def list_variants(self, product_ids: List[int]) -> Dict[int, List[ProductVariant]]:
        grouped: Dict[int, List[ProductVariant]] = {pid: [] for pid in product_ids}
        if not product_ids:
            return grouped
        result = await self.db.execute(
            select(ProductVariant)
            .where(ProductVariant.product_id.in_(product_ids))
            .order_by(ProductVariant.id)
        )
        for variant in result.scalars().all():
            grouped[variant.product_id].append(variant)
        return grouped

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
        logger.debug(
            f"[ProductRepository] Listing products: offset={offset}, limit={limit}, category={category_id}, "
            f"store={store_id}, price=[{min_price}, {max_price}], search={search}, sort={sort_by} {sort_order}"
        )
        stmt = select(Product)
        if active_only:
            stmt = stmt.where(Product.is_active.is_(True))
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        if store_id is not None:
            stmt = stmt.where(Product.store_id == store_id)
        if min_price is not None:
            stmt = stmt.where(Product.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(Product.price <= max_price)
        if featured is not None:
            stmt = stmt.where(Product.is_featured.is_(featured))
        if max_stock is not None:
            stmt = stmt.where(Product.stock <= max_stock)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(
                Product.name.ilike(pattern),
                Product.description.ilike(pattern),
                Product.brand.ilike(pattern),
            ))

        total = (await self.db.execute(select(func.count()).select_from(stmt.subquery()))).scalar_one()

        column = SORT_COLUMNS.get(sort_by, Product.created_at)
        stmt = stmt.order_by(column.desc() if sort_order == "desc" else column.asc(), Product.id)
        result = await self.db.execute(stmt.offset(offset).limit(limit))
        return list(result.scalars().all()), total

    async def slug_exists(self, slug: str) -> bool:
        return await self.crud.exists(db=self.db, slug=slug)

    async def create(self, product_data: Dict[str, Any], variants: List[Dict[str, Any]]) -> Product:
        product = Product(**product_data)
        self.db.add(product)
        await self.db.flush()
        for variant_data in variants:
            self.db.add(ProductVariant(product_id=product.id, **variant_data))
        await self.db.commit()
        await self.db.refresh(product)
        logger.info(f"[ProductRepository] Product '{product.name}' created with ID: {product.id} ({len(variants)} variants)")
        return product

    async def update(self, product: Product, update_data: Dict[str, Any]) -> Product:
        logger.debug(f"[ProductRepository] Updating product ID: {product.id} with {list(update_data)}")
        for key, value in update_data.items():
            setattr(product, key, value)
        self.db.add(product)
        await self.db.commit()
        await self.db.refresh(product)
        return product

    async def add_variant(self, variant_data: Dict[str, Any]) -> ProductVariant:
        variant = ProductVariant(**variant_data)
        self.db.add(variant)
        await self.db.commit()
        await self.db.refresh(variant)
        return variant

    async def variant_in_use(self, variant_id: int) -> bool:
        for model in (CartItem, OrderItem):
            result = await self.db.execute(select(model.id).where(model.variant_id == variant_id).limit(1))
            if result.first() is not None:
                return True
        return False

    async def delete_variant(self, variant: ProductVariant) -> None:
        await self.db.delete(variant)
        await self.db.commit()

    async def set_rating(self, product_id: int, rating: float, review_count: int) -> None:
        await self.db.execute(
            update(Product).where(Product.id == product_id).values(rating=rating, review_count=review_count)
        )
        await self.db.commit()
