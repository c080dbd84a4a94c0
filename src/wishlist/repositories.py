import logging
from typing import List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.products.models import Product
from src.wishlist.interfaces.repositories import AbstractWishlistRepository
from src.wishlist.models import WishlistItem

logger = logging.getLogger(__name__)


class SQLAlchemyWishlistRepository(AbstractWishlistRepository):
    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def list_with_products(self, user_id: int) -> List[Tuple[WishlistItem, Product]]:
        result = await self.db.execute(
            select(WishlistItem, Product)
            .join(Product, Product.id == WishlistItem.product_id)
            .where(WishlistItem.user_id == user_id)
            .order_by(WishlistItem.created_at.desc(), WishlistItem.id.desc())
        )
        return [(item, product) for item, product in result.all()]

    async def get(self, user_id: int, product_id: int) -> Optional[WishlistItem]:
        result = await self.db.execute(
            select(WishlistItem).where(WishlistItem.user_id == user_id, WishlistItem.product_id == product_id)
        )
        return result.scalars().first()

    async def add(self, user_id: int, product_id: int) -> WishlistItem:
        item = WishlistItem(user_id=user_id, product_id=product_id)
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        logger.debug(f"[WishlistRepository] Produit {product_id} ajouté pour user {user_id}")
        return item

    async def remove(self, item: WishlistItem) -> None:
        await self.db.delete(item)
        await self.db.commit()

    async def clear(self, user_id: int) -> int:
        result = await self.db.execute(delete(WishlistItem).where(WishlistItem.user_id == user_id))
        await self.db.commit()
        return result.rowcount
