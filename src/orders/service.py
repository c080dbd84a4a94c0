"""
Service métier des commandes.

Passage de commande à partir du panier :
1. le panier doit contenir au moins une ligne ;
2. l'adresse de livraison doit appartenir à l'utilisateur ;
3. chaque produit doit être actif et disposer du stock demandé ;
4. les montants sont calculés aux prix courants puis figés dans les lignes ;
5. commande, lignes, décrément du stock et vidage du panier sont écrits
   dans une seule transaction.
"""
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from src.addresses.exceptions import AddressNotFoundException
from src.addresses.service import AddressService
from src.cart.service import CartService
from src.cart.utils import line_subtotal
from src.config import settings
from src.core.schemas import PaginatedResponse, page_to_offset
from src.orders.config import (
    CUSTOMER_CANCELLABLE_STATUS,
    MAX_ITEMS_PER_ORDER,
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_DELIVERED,
)
from src.orders.constants import ERROR_TOO_MANY_ITEMS
from src.orders.exceptions import (
    EmptyCartException,
    InvalidDeliveryAddressException,
    InvalidOrderStatusTransitionException,
    OrderCreationFailedException,
    OrderNotFoundException,
    ProductUnavailableException,
)
from src.orders.interfaces.repositories import AbstractOrderRepository
from src.orders.models import (
    Order,
    OrderCreate,
    OrderItemRead,
    OrderPaymentUpdate,
    OrderRead,
    OrderStatusUpdate,
)
from src.orders.utils import can_transition, compute_order_totals, generate_order_number, get_allowed_transitions
from src.products.exceptions import InsufficientStockException
from src.products.service import ProductService

logger = logging.getLogger(__name__)


class OrderService:
    """Service pour gérer les opérations liées aux commandes."""

    def __init__(
        self,
        repository: AbstractOrderRepository,
        cart_service: CartService,
        address_service: AddressService,
        product_service: ProductService,
    ):
        self.repository = repository
        self.cart_service = cart_service
        self.address_service = address_service
        self.product_service = product_service

    async def _to_read(self, orders: List[Order]) -> List[OrderRead]:
        items = await self.repository.list_items([o.id for o in orders])
        return [
            OrderRead.model_validate(
                order,
                update={"items": [OrderItemRead.model_validate(i) for i in items[order.id]]},
            )
            for order in orders
        ]

    async def _get_orm(self, order_id: int) -> Order:
        order = await self.repository.get_by_id(order_id)
        if not order:
            raise OrderNotFoundException(order_id)
        return order

    # --- Client ---

    async def place_order(self, user_id: int, order_in: OrderCreate) -> OrderRead:
        logger.info(f"[OrderService] Passage de commande pour user {user_id} (adresse {order_in.delivery_address_id})")

        cart, lines = await self.cart_service.get_lines_for_checkout(user_id)
        if not lines:
            logger.warning(f"[OrderService] Panier vide pour user {user_id}")
            raise EmptyCartException(user_id)
        if len(lines) > MAX_ITEMS_PER_ORDER:
            raise OrderCreationFailedException(f"{ERROR_TOO_MANY_ITEMS} (max {MAX_ITEMS_PER_ORDER}).")

        try:
            await self.address_service.validate_address_ownership(order_in.delivery_address_id, user_id)
        except AddressNotFoundException:
            raise InvalidDeliveryAddressException(order_in.delivery_address_id)

        order_lines: List[Dict[str, Any]] = []
        subtotal = Decimal("0.00")
        for item, product in lines:
            if not product.is_active:
                raise ProductUnavailableException(product.id, product.name)

            unit_price, available, variant_label = product.price, product.stock, None
            if item.variant_id is not None:
                variant = await self.product_service.get_product_variant(product.id, item.variant_id)
                if variant.price is not None:
                    unit_price = variant.price
                available = variant.stock
                variant_label = f"{variant.name}: {variant.value}"

            if available < item.quantity:
                logger.warning(
                    f"[OrderService] Stock insuffisant pour produit {product.id} "
                    f"(variante {item.variant_id}): {item.quantity} > {available}"
                )
                raise InsufficientStockException(product.id, item.quantity, available, item.variant_id)

            line_total = line_subtotal(unit_price, item.quantity)
            subtotal += line_total
            order_lines.append({
                "product_id": product.id,
                "variant_id": item.variant_id,
                "store_id": product.store_id,
                "product_name": product.name,
                "variant_label": variant_label,
                "quantity": item.quantity,
                "unit_price": unit_price,
                "total": line_total,
            })

        totals = compute_order_totals(subtotal)
        order_data = {
            "order_number": generate_order_number(),
            "user_id": user_id,
            "payment_method": order_in.payment_method,
            "subtotal": totals.subtotal,
            "tax": totals.tax,
            "delivery_fee": totals.delivery_fee,
            "discount": totals.discount,
            "total": totals.total,
            "delivery_address_id": order_in.delivery_address_id,
            "notes": order_in.notes,
            "estimated_delivery": datetime.utcnow() + timedelta(days=settings.ESTIMATED_DELIVERY_DAYS),
        }

        order = await self.repository.place_order(
            order_data, order_lines, cart_id_to_clear=cart.id if order_in.clear_cart else None
        )
        logger.info(f"[OrderService] Commande {order.order_number} créée: total {order.total}")
        return (await self._to_read([order]))[0]

    async def list_my_orders(
        self, user_id: int, page: int, limit: int, status: Optional[str] = None
    ) -> PaginatedResponse[OrderRead]:
        orders, total = await self.repository.list(
            offset=page_to_offset(page, limit), limit=limit, user_id=user_id, status=status
        )
        items = await self._to_read(orders)
        return PaginatedResponse[OrderRead].build(items=items, total=total, page=page, limit=limit)

    async def get_my_order(self, user_id: int, order_id: int) -> OrderRead:
        order = await self._get_orm(order_id)
        if order.user_id != user_id:
            logger.warning(f"[OrderService] User {user_id} tente d'accéder à la commande {order_id}")
            raise OrderNotFoundException(order_id)
        return (await self._to_read([order]))[0]

    async def cancel_my_order(self, user_id: int, order_id: int) -> OrderRead:
        """Annulation par le client, possible tant que la commande n'est pas préparée. Le stock est restitué."""
        order = await self._get_orm(order_id)
        if order.user_id != user_id:
            raise OrderNotFoundException(order_id)
        if order.status not in CUSTOMER_CANCELLABLE_STATUS:
            raise InvalidOrderStatusTransitionException(
                order.status, ORDER_STATUS_CANCELLED, [s for s in get_allowed_transitions(order.status) if s != ORDER_STATUS_CANCELLED]
            )
        order = await self.repository.update(order, {"status": ORDER_STATUS_CANCELLED}, restock=True)
        logger.info(f"[OrderService] Commande {order.order_number} annulée par le client {user_id}")
        return (await self._to_read([order]))[0]

    # --- Administration ---

    async def admin_list_orders(
        self, page: int, limit: int, status: Optional[str] = None, user_id: Optional[int] = None
    ) -> PaginatedResponse[OrderRead]:
        orders, total = await self.repository.list(
            offset=page_to_offset(page, limit), limit=limit, user_id=user_id, status=status
        )
        items = await self._to_read(orders)
        return PaginatedResponse[OrderRead].build(items=items, total=total, page=page, limit=limit)

    async def admin_get_order(self, order_id: int) -> OrderRead:
        order = await self._get_orm(order_id)
        return (await self._to_read([order]))[0]

    async def admin_update_status(self, order_id: int, status_update: OrderStatusUpdate) -> OrderRead:
        order = await self._get_orm(order_id)
        if not can_transition(order.status, status_update.status):
            logger.warning(f"[OrderService] Transition refusée pour commande {order_id}: {order.status} -> {status_update.status}")
            raise InvalidOrderStatusTransitionException(
                order.status, status_update.status, get_allowed_transitions(order.status)
            )

        update_data = status_update.model_dump(exclude_unset=True, exclude_none=True)
        if status_update.status == ORDER_STATUS_DELIVERED:
            update_data["actual_delivery"] = datetime.utcnow()
        order = await self.repository.update(
            order, update_data, restock=status_update.status == ORDER_STATUS_CANCELLED
        )
        logger.info(f"[OrderService] Commande {order.order_number} passée au statut {order.status}")
        return (await self._to_read([order]))[0]

    async def admin_update_payment(self, order_id: int, payment_update: OrderPaymentUpdate) -> OrderRead:
        order = await self._get_orm(order_id)
        update_data = payment_update.model_dump(exclude_unset=True, exclude_none=True)
        order = await self.repository.update(order, update_data)
        return (await self._to_read([order]))[0]

    # --- Utilisé par les avis ---

    async def find_delivered_purchase(self, user_id: int, product_id: int) -> Optional[int]:
        return await self.repository.has_delivered_purchase(user_id, product_id)
