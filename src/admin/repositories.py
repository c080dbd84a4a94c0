import logging
from decimal import Decimal
from typing import List

from fastcrud import FastCRUD
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.orders.models import Order
from src.products.models import Product
from src.stores.models import Store
from src.users.models import User

logger = logging.getLogger(__name__)


class SQLAlchemyAdminStatsRepository:
    """Compteurs d'administration, calculés via FastCRUD sur chaque table."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.users = FastCRUD(User)
        self.products = FastCRUD(Product)
        self.orders = FastCRUD(Order)
        self.stores = FastCRUD(Store)

    async def count_users(self, role: str) -> int:
        return await self.users.count(db=self.db, role=role)

    async def count_active_products(self) -> int:
        return await self.products.count(db=self.db, is_active=True)

    async def count_orders(self, **filters) -> int:
        return await self.orders.count(db=self.db, **filters)

    async def count_active_stores(self) -> int:
        return await self.stores.count(db=self.db, is_active=True)

    async def revenue(self, statuses: List[str]) -> Decimal:
        result = await self.db.execute(
            select(func.coalesce(func.sum(Order.total), 0)).where(Order.status.in_(statuses))
        )
        return Decimal(str(result.scalar_one())).quantize(Decimal("0.01"))
