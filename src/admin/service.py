import logging

from src.admin.models import PlatformStats
from src.admin.repositories import SQLAlchemyAdminStatsRepository
from src.orders.config import ORDER_STATUS_PENDING, REVENUE_STATUS
from src.users.config import ROLE_CUSTOMER

logger = logging.getLogger(__name__)


class AdminStatsService:
    def __init__(self, repository: SQLAlchemyAdminStatsRepository):
        self.repository = repository

    async def get_platform_stats(self) -> PlatformStats:
        logger.debug("[AdminStatsService] Calcul des compteurs de la plateforme")
        return PlatformStats(
            total_customers=await self.repository.count_users(ROLE_CUSTOMER),
            active_products=await self.repository.count_active_products(),
            total_orders=await self.repository.count_orders(),
            active_stores=await self.repository.count_active_stores(),
            revenue=await self.repository.revenue(REVENUE_STATUS),
            pending_orders=await self.repository.count_orders(status=ORDER_STATUS_PENDING),
        )
