"""
Routes API des commandes.

- /orders/ : passage de commande et historique du client connecté.
- /orders/admin/all, /orders/{id}/status, /orders/{id}/payment : administration.
"""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from src.auth.dependencies import AdminUserDep, CurrentUserDep
from src.core.schemas import PaginatedResponse, PaginationParams
from src.orders.dependencies import OrderServiceDep
from src.orders.exceptions import OrderDomainException, OrderNotFoundException
from src.orders.models import OrderCreate, OrderPaymentUpdate, OrderRead, OrderStatusUpdate
from src.products.exceptions import ProductError

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_order_errors(e: Exception):
    """Traduit les exceptions métier des commandes en HTTPException."""
    if isinstance(e, OrderNotFoundException):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, (OrderDomainException, ProductError)):
        # Panier vide, adresse invalide, produit indisponible, stock insuffisant, transition interdite
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    logger.error(f"[Router] Erreur inattendue dans le module commandes: {e}", exc_info=True)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")


# --- Client ---

@router.post("/", response_model=OrderRead, status_code=status.HTTP_201_CREATED, tags=["Orders"])
async def place_order(order_in: OrderCreate, current_user: CurrentUserDep, order_service: OrderServiceDep):
    """Crée une commande à partir du panier de l'utilisateur connecté."""
    logger.info(f"[Router] Commande demandée par user {current_user.id}")
    try:
        return await order_service.place_order(current_user.id, order_in)
    except Exception as e:
        handle_order_errors(e)

@router.get("/", response_model=PaginatedResponse[OrderRead], tags=["Orders"])
async def list_my_orders(
    current_user: CurrentUserDep,
    order_service: OrderServiceDep,
    pagination: PaginationParams,
    status_filter: Optional[str] = Query(None, alias="status"),
):
    page, limit = pagination
    return await order_service.list_my_orders(current_user.id, page=page, limit=limit, status=status_filter)

@router.get("/admin/all", response_model=PaginatedResponse[OrderRead], tags=["Orders - Admin"])
async def admin_list_orders(
    admin: AdminUserDep,
    order_service: OrderServiceDep,
    pagination: PaginationParams,
    status_filter: Optional[str] = Query(None, alias="status"),
    user_id: Optional[int] = Query(None),
):
    page, limit = pagination
    logger.info(f"[Router] Admin {admin.id} liste les commandes (status={status_filter})")
    return await order_service.admin_list_orders(page=page, limit=limit, status=status_filter, user_id=user_id)

@router.get("/{order_id}", response_model=OrderRead, tags=["Orders"])
async def get_my_order(order_id: int, current_user: CurrentUserDep, order_service: OrderServiceDep):
    try:
        return await order_service.get_my_order(current_user.id, order_id)
    except Exception as e:
        handle_order_errors(e)

@router.post("/{order_id}/cancel", response_model=OrderRead, tags=["Orders"])
async def cancel_my_order(order_id: int, current_user: CurrentUserDep, order_service: OrderServiceDep):
    """Annule une commande en attente ou confirmée et remet les articles en stock."""
    try:
        return await order_service.cancel_my_order(current_user.id, order_id)
    except Exception as e:
        handle_order_errors(e)


# --- Administration ---

@router.patch("/{order_id}/status", response_model=OrderRead, tags=["Orders - Admin"])
async def update_order_status(
    order_id: int,
    status_update: OrderStatusUpdate,
    admin: AdminUserDep,
    order_service: OrderServiceDep,
):
    logger.info(f"[Router] Admin {admin.id} passe la commande {order_id} au statut {status_update.status}")
    try:
        return await order_service.admin_update_status(order_id, status_update)
    except Exception as e:
        handle_order_errors(e)

@router.patch("/{order_id}/payment", response_model=OrderRead, tags=["Orders - Admin"])
async def update_order_payment(
    order_id: int,
    payment_update: OrderPaymentUpdate,
    admin: AdminUserDep,
    order_service: OrderServiceDep,
):
    try:
        return await order_service.admin_update_payment(order_id, payment_update)
    except Exception as e:
        handle_order_errors(e)

order_router = router
