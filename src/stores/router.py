"""
Routes API des boutiques.

- Public : liste et détail des boutiques actives.
- Vendeur : création et gestion de sa propre boutique (/me).
- Admin : liste complète, modération et suppression.
"""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from src.auth.dependencies import AdminUserDep, SellerUserDep
from src.core.schemas import PaginatedResponse, PaginationParams
from src.stores.config import ALLOWED_SORT_FIELDS, ALLOWED_STATUS_FILTERS, DEFAULT_SORT_FIELD, STATUS_ALL
from src.stores.dependencies import StoreServiceDep
from src.stores.exceptions import (
    StoreError,
    StoreNotFoundError,
    SellerStoreNotFoundError,
    StoreAlreadyExistsError,
    StoreInUseError,
)
from src.stores.models import StoreCreate, StoreRead, StoreUpdate, StoreAdminUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_store_errors(e: Exception):
    if isinstance(e, (StoreNotFoundError, SellerStoreNotFoundError)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, (StoreAlreadyExistsError, StoreInUseError)):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    if isinstance(e, StoreError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    logger.error(f"[Router] Erreur inattendue dans le module boutiques: {e}", exc_info=True)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")


# --- Public ---

@router.get("/", response_model=PaginatedResponse[StoreRead])
async def list_stores(
    service: StoreServiceDep,
    pagination: PaginationParams,
    category_id: Optional[int] = Query(None),
    verified: bool = Query(False, description="Uniquement les boutiques vérifiées"),
    search: Optional[str] = Query(None, min_length=1),
    sort_by: str = Query(DEFAULT_SORT_FIELD, pattern=f"^({'|'.join(ALLOWED_SORT_FIELDS)})$"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
):
    page, limit = pagination
    return await service.list_stores(
        page=page, limit=limit, category_id=category_id, verified_only=verified,
        search=search, sort_by=sort_by, sort_order=sort_order,
    )


# --- Vendeur ---
# Les routes statiques sont déclarées avant /{store_id}

@router.post("/", response_model=StoreRead, status_code=status.HTTP_201_CREATED)
async def create_store(store_in: StoreCreate, seller: SellerUserDep, service: StoreServiceDep):
    logger.info(f"[Router] Création de boutique par le vendeur {seller.id}: {store_in.name}")
    try:
        return await service.create_store(seller.id, store_in)
    except Exception as e:
        handle_store_errors(e)

@router.get("/me", response_model=StoreRead)
async def read_my_store(seller: SellerUserDep, service: StoreServiceDep):
    try:
        return await service.get_my_store(seller.id)
    except Exception as e:
        handle_store_errors(e)

@router.patch("/me", response_model=StoreRead)
async def update_my_store(store_update: StoreUpdate, seller: SellerUserDep, service: StoreServiceDep):
    try:
        return await service.update_my_store(seller.id, store_update)
    except Exception as e:
        handle_store_errors(e)


# --- Admin ---

@router.get("/admin/all", response_model=PaginatedResponse[StoreRead])
async def admin_list_stores(
    admin: AdminUserDep,
    service: StoreServiceDep,
    pagination: PaginationParams,
    status_filter: str = Query(STATUS_ALL, alias="status", pattern=f"^({'|'.join(ALLOWED_STATUS_FILTERS)})$"),
):
    page, limit = pagination
    return await service.admin_list_stores(page=page, limit=limit, status_filter=status_filter)

@router.get("/{store_id}", response_model=StoreRead)
async def read_store(store_id: int, service: StoreServiceDep):
    try:
        return await service.get_public_store(store_id)
    except Exception as e:
        handle_store_errors(e)

@router.patch("/{store_id}", response_model=StoreRead)
async def admin_update_store(
    store_id: int,
    store_update: StoreAdminUpdate,
    admin: AdminUserDep,
    service: StoreServiceDep,
):
    """Modération d'une boutique (vérification, activation, tout champ)."""
    logger.info(f"[Router] Admin {admin.id} met à jour la boutique {store_id}")
    try:
        return await service.admin_update_store(store_id, store_update)
    except Exception as e:
        handle_store_errors(e)

@router.delete("/{store_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_store(store_id: int, admin: AdminUserDep, service: StoreServiceDep):
    logger.info(f"[Router] Admin {admin.id} supprime la boutique {store_id}")
    try:
        await service.delete_store(store_id)
    except Exception as e:
        handle_store_errors(e)
