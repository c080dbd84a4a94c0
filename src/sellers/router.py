"""
Routes API du tableau de bord vendeur (/sellers/me/...).
"""
import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from src.auth.dependencies import SellerUserDep
from src.config import settings
from src.core.schemas import PaginatedResponse, PaginationParams
from src.products.models import ProductRead
from src.sellers.dependencies import SellerServiceDep
from src.sellers.models import SellerOrderRead, SellerStats
from src.stores.exceptions import SellerStoreNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_seller_errors(e: Exception):
    if isinstance(e, SellerStoreNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    logger.error(f"[Router] Erreur inattendue dans le module vendeurs: {e}", exc_info=True)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")


@router.get("/me/stats", response_model=SellerStats)
async def read_my_stats(seller: SellerUserDep, seller_service: SellerServiceDep):
    try:
        return await seller_service.get_stats(seller.id)
    except Exception as e:
        handle_seller_errors(e)

@router.get("/me/orders", response_model=List[SellerOrderRead])
async def read_my_orders(
    seller: SellerUserDep,
    seller_service: SellerServiceDep,
    limit: int = Query(10, ge=1, le=settings.MAX_PAGE_SIZE),
):
    """Dernières commandes contenant des produits de la boutique."""
    try:
        return await seller_service.recent_orders(seller.id, limit)
    except Exception as e:
        handle_seller_errors(e)

@router.get("/me/products", response_model=PaginatedResponse[ProductRead])
async def read_my_products(
    seller: SellerUserDep,
    seller_service: SellerServiceDep,
    pagination: PaginationParams,
    low_stock: bool = Query(False, description="Uniquement les produits dont le stock est bas"),
):
    page, limit = pagination
    try:
        return await seller_service.list_products(seller.id, page=page, limit=limit, low_stock=low_stock)
    except Exception as e:
        handle_seller_errors(e)

seller_router = router
