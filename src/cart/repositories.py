# src/cart/repositories.py
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cart.interfaces.repositories import AbstractCartRepository
from src.cart.models import Cart, CartItem
from src.cart.utils import compute_cart_totals
from src.products.models import Product

logger = logging.getLogger(__name__)


class SQLAlchemyCartRepository(AbstractCartRepository):
    """Implémentation SQLAlchemy du repository du panier."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def get_by_user(self, user_id: int) -> Optional[Cart]:
        logger.debug(f"[CartRepository] Récupération panier pour user ID: {user_id}")
        result = await self.db.execute(select(Cart).where(Cart.user_id == user_id))
        return result.scalars().first()

    async def get_or_create(self, user_id: int) -> Cart:
        cart = await self.get_by_user(user_id)
        if cart is None:
            cart = Cart(user_id=user_id, total=Decimal("0.00"), item_count=0)
            self.db.add(cart)
            await self.db.flush()
            logger.info(f"[CartRepository] Panier créé ID: {cart.id} pour user {user_id}")
        return cart

    async def list_items(self, cart_id: int) -> List[CartItem]:
        result = await self.db.execute(select(CartItem).where(CartItem.cart_id == cart_id).order_by(CartItem.id))
        return list(result.scalars().all())

    async def list_lines(self, cart_id: int) -> List[Tuple[CartItem, Product]]:
        result = await self.db.execute(
            select(CartItem, Product)
            .join(Product, Product.id == CartItem.product_id)
            .where(CartItem.cart_id == cart_id)
            .order_by(CartItem.id)
        )
        return [(item, product) for item, product in result.all()]

    async def find_item(self, cart_id: int, product_id: int, variant_id: Optional[int]) -> Optional[CartItem]:
        stmt = select(CartItem).where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
        if variant_id is None:
            stmt = stmt.where(CartItem.variant_id.is_(None))
        else:
            stmt = stmt.where(CartItem.variant_id == variant_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def add_item(self, item_data: Dict[str, Any]) -> CartItem:
        item = CartItem(**item_data)
        self.db.add(item)
        await self.db.flush()
        return item

    async def delete_item(self, item: CartItem) -> None:
        await self.db.delete(item)
        await self.db.flush()

    async def save(self, cart: Cart) -> Cart:
        items = await self.list_items(cart.id)
        cart.total, cart.item_count = compute_cart_totals(items)
        self.db.add(cart)
        await self.db.commit()
        await self.db.refresh(cart)
        logger.debug(f"[CartRepository] Panier {cart.id} enregistré: total={cart.total}, item_count={cart.item_count}")
        return cart

    async def clear(self, cart: Cart) -> Cart:
        await self.db.execute(delete(CartItem).where(CartItem.cart_id == cart.id))
        cart.total, cart.item_count = Decimal("0.00"), 0
        self.db.add(cart)
        await self.db.commit()
        await self.db.refresh(cart)
        logger.info(f"[CartRepository] Panier {cart.id} vidé")
        return cart
