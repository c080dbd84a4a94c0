import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.cart.models import Cart, CartItem
from src.orders.config import ORDER_STATUS_DELIVERED
from src.orders.interfaces.repositories import AbstractOrderRepository
from src.orders.models import Order, OrderItem
from src.products.exceptions import InsufficientStockException
from src.products.repositories import guarded_decrement_statement, restock_statement

logger = logging.getLogger(__name__)


class SQLAlchemyOrderRepository(AbstractOrderRepository):
    """Implémentation SQLAlchemy du repository des commandes."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        logger.debug(f"[OrderRepository] Récupération commande ID: {order_id}")
        return await self.db.get(Order, order_id)

    async def list_items(self, order_ids: List[int]) -> Dict[int, List[OrderItem]]:
        grouped: Dict[int, List[OrderItem]] = {oid: [] for oid in order_ids}
        if not order_ids:
            return grouped
        result = await self.db.execute(
            select(OrderItem).where(OrderItem.order_id.in_(order_ids)).order_by(OrderItem.id)
        )
        for item in result.scalars().all():
            grouped[item.order_id].append(item)
        return grouped

    async def list(
        self,
        offset: int,
        limit: int,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[Order], int]:
        logger.debug(f"[OrderRepository] Listage commandes: user={user_id}, status={status}, offset={offset}, limit={limit}")
        stmt = select(Order)
        if user_id is not None:
            stmt = stmt.where(Order.user_id == user_id)
        if status:
            stmt = stmt.where(Order.status == status)
        total = (await self.db.execute(select(func.count()).select_from(stmt.subquery()))).scalar_one()
        result = await self.db.execute(
            stmt.order_by(Order.created_at.desc(), Order.id.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), total

    async def place_order(
        self,
        order_data: Dict[str, Any],
        lines: List[Dict[str, Any]],
        cart_id_to_clear: Optional[int] = None,
    ) -> Order:
        order = Order(**order_data)
        try:
            self.db.add(order)
            await self.db.flush()

            for line in lines:
                self.db.add(OrderItem(order_id=order.id, **line))
                result = await self.db.execute(
                    guarded_decrement_statement(line["product_id"], line["variant_id"], line["quantity"])
                )
                if result.rowcount != 1:
                    # Stock consommé entre la validation et l'écriture
                    logger.warning(
                        f"[OrderRepository] Décrément refusé pour produit {line['product_id']} "
                        f"(variante {line['variant_id']}), commande {order.order_number} annulée."
                    )
                    raise InsufficientStockException(line["product_id"], line["quantity"], variant_id=line["variant_id"])

            if cart_id_to_clear is not None:
                await self.db.execute(delete(CartItem).where(CartItem.cart_id == cart_id_to_clear))
                await self.db.execute(
                    update(Cart).where(Cart.id == cart_id_to_clear).values(total=Decimal("0.00"), item_count=0)
                )

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(order)
        logger.info(f"[OrderRepository] Commande {order.order_number} (ID {order.id}) enregistrée, {len(lines)} lignes")
        return order

    async def update(self, order: Order, update_data: Dict[str, Any], restock: bool = False) -> Order:
        logger.debug(f"[OrderRepository] Mise à jour commande ID: {order.id} avec {list(update_data)} (restock={restock})")
        try:
            if restock:
                items = (await self.list_items([order.id]))[order.id]
                for item in items:
                    await self.db.execute(restock_statement(item.product_id, item.variant_id, item.quantity))
            for key, value in update_data.items():
                setattr(order, key, value)
            self.db.add(order)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(order)
        return order

    async def has_delivered_purchase(self, user_id: int, product_id: int) -> Optional[int]:
        result = await self.db.execute(
            select(Order.id)
            .join(OrderItem, OrderItem.order_id == Order.id)
            .where(
                Order.user_id == user_id,
                Order.status == ORDER_STATUS_DELIVERED,
                OrderItem.product_id == product_id,
            )
            .order_by(Order.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
