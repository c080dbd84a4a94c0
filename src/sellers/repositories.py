import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.orders.models import Order, OrderItem
from src.products.models import Product
from src.sellers.interfaces.repositories import AbstractSellerRepository

logger = logging.getLogger(__name__)


class SQLAlchemySellerRepository(AbstractSellerRepository):
    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def count_active_products(self, store_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Product.id)).where(Product.store_id == store_id, Product.is_active.is_(True))
        )
        return result.scalar_one()

    async def count_low_stock_products(self, store_id: int, threshold: int) -> int:
        result = await self.db.execute(
            select(func.count(Product.id)).where(
                Product.store_id == store_id,
                Product.is_active.is_(True),
                Product.stock <= threshold,
            )
        )
        return result.scalar_one()

    async def count_orders(self, store_id: int, status: Optional[str] = None) -> int:
        stmt = (
            select(func.count(func.distinct(Order.id)))
            .join(OrderItem, OrderItem.order_id == Order.id)
            .where(OrderItem.store_id == store_id)
        )
        if status:
            stmt = stmt.where(Order.status == status)
        return (await self.db.execute(stmt)).scalar_one()

    async def revenue(self, store_id: int, statuses: List[str]) -> Decimal:
        result = await self.db.execute(
            select(func.coalesce(func.sum(OrderItem.total), 0))
            .join(Order, Order.id == OrderItem.order_id)
            .where(OrderItem.store_id == store_id, Order.status.in_(statuses))
        )
        return Decimal(str(result.scalar_one())).quantize(Decimal("0.01"))

    async def recent_orders(self, store_id: int, limit: int) -> List[Tuple[Order, List[OrderItem]]]:
        logger.debug(f"[SellerRepository] {limit} dernières commandes pour la boutique {store_id}")
        order_ids = (
            select(OrderItem.order_id).where(OrderItem.store_id == store_id).distinct().scalar_subquery()
        )
        orders = (await self.db.execute(
            select(Order)
            .where(Order.id.in_(order_ids))
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(limit)
        )).scalars().all()
        if not orders:
            return []

        items = (await self.db.execute(
            select(OrderItem)
            .where(OrderItem.order_id.in_([o.id for o in orders]), OrderItem.store_id == store_id)
            .order_by(OrderItem.id)
        )).scalars().all()
        grouped = {o.id: [] for o in orders}
        for item in items:
            grouped[item.order_id].append(item)
        return [(order, grouped[order.id]) for order in orders]
