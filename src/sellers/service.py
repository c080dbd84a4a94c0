"""
Tableau de bord vendeur : statistiques, commandes récentes et produits de la boutique.

Toutes les opérations exigent que le vendeur possède une boutique.
"""
import logging
from decimal import Decimal
from typing import List

from src.config import settings
from src.core.schemas import PaginatedResponse
from src.orders.config import ORDER_STATUS_PENDING, REVENUE_STATUS
from src.orders.models import OrderItemRead
from src.products.models import ProductRead
from src.products.service import ProductService
from src.sellers.interfaces.repositories import AbstractSellerRepository
from src.sellers.models import SellerOrderRead, SellerStats
from src.stores.service import StoreService

logger = logging.getLogger(__name__)


class SellerService:
    def __init__(
        self,
        repository: AbstractSellerRepository,
        store_service: StoreService,
        product_service: ProductService,
    ):
        self.repository = repository
        self.store_service = store_service
        self.product_service = product_service

    async def get_stats(self, seller_id: int) -> SellerStats:
        store = await self.store_service.get_seller_store(seller_id)
        logger.debug(f"[SellerService] Calcul des statistiques de la boutique {store.id}")
        return SellerStats(
            store_id=store.id,
            active_products=await self.repository.count_active_products(store.id),
            total_orders=await self.repository.count_orders(store.id),
            revenue=await self.repository.revenue(store.id, REVENUE_STATUS),
            pending_orders=await self.repository.count_orders(store.id, status=ORDER_STATUS_PENDING),
            low_stock_products=await self.repository.count_low_stock_products(store.id, settings.LOW_STOCK_THRESHOLD),
            store_rating=store.rating,
        )

    async def recent_orders(self, seller_id: int, limit: int) -> List[SellerOrderRead]:
        store = await self.store_service.get_seller_store(seller_id)
        rows = await self.repository.recent_orders(store.id, limit)
        return [
            SellerOrderRead(
                id=order.id,
                order_number=order.order_number,
                user_id=order.user_id,
                status=order.status,
                payment_status=order.payment_status,
                created_at=order.created_at,
                items=[OrderItemRead.model_validate(i) for i in items],
                store_total=sum((i.total for i in items), Decimal("0.00")),
            )
            for order, items in rows
        ]

    async def list_products(self, seller_id: int, page: int, limit: int, low_stock: bool = False) -> PaginatedResponse[ProductRead]:
        """Produits de la boutique, actifs ou non. low_stock limite aux stocks <= LOW_STOCK_THRESHOLD."""
        store = await self.store_service.get_seller_store(seller_id)
        return await self.product_service.list_products(
            page=page,
            limit=limit,
            active_only=False,
            store_id=store.id,
            max_stock=settings.LOW_STOCK_THRESHOLD if low_stock else None,
            sort_by="created_at",
            sort_order="desc",
        )
