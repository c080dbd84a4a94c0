import logging
from decimal import Decimal
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query, Path

from src.auth.dependencies import AdminUserDep, require_roles
from src.core.schemas import PaginatedResponse, PaginationParams
from src.products.config import ALLOWED_SORT_FIELDS, DEFAULT_SORT_FIELD
from src.products.dependencies import ProductServiceDep
from src.products.exceptions import (
    ProductError,
    ProductNotFoundException,
    VariantNotFoundException,
    ProductOwnershipException,
    VariantInUseException,
)
from src.products.models import (
    ProductCreate, ProductRead, ProductUpdate, ProductVariantCreate, ProductVariantRead,
)
from src.stores.exceptions import StoreNotFoundError, SellerStoreNotFoundError
from src.users.config import ROLE_ADMIN, ROLE_SELLER
from src.users.models import UserRead

logger = logging.getLogger(__name__)

# Vendeur (sur sa boutique) ou administrateur
CatalogManagerDep = Annotated[UserRead, Depends(require_roles(ROLE_SELLER, ROLE_ADMIN))]

router = APIRouter()

SORT_PATTERN = f"^({'|'.join(ALLOWED_SORT_FIELDS)})$"


def handle_product_errors(e: Exception):
    if isinstance(e, (ProductNotFoundException, VariantNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, (StoreNotFoundError, SellerStoreNotFoundError)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, ProductOwnershipException):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    if isinstance(e, VariantInUseException):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    if isinstance(e, ProductError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    logger.error(f"[Router] Unexpected error in products module: {e}", exc_info=True)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")


# --- Catalogue public ---

@router.get("/", response_model=PaginatedResponse[ProductRead])
async def list_products(
    service: ProductServiceDep,
    pagination: PaginationParams,
    category_id: Optional[int] = Query(None),
    store_id: Optional[int] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    featured: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, min_length=1),
    sort_by: str = Query(DEFAULT_SORT_FIELD, pattern=SORT_PATTERN),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
):
    """Liste les produits actifs avec filtres, tri et pagination."""
    page, limit = pagination
    return await service.list_products(
        page=page, limit=limit, category_id=category_id, store_id=store_id,
        min_price=min_price, max_price=max_price, featured=featured, search=search,
        sort_by=sort_by, sort_order=sort_order,
    )

@router.get("/admin/all", response_model=PaginatedResponse[ProductRead])
async def admin_list_products(
    admin: AdminUserDep,
    service: ProductServiceDep,
    pagination: PaginationParams,
    store_id: Optional[int] = Query(None),
    search: Optional[str] = Query(None, min_length=1),
):
    """Liste tous les produits, y compris inactifs (Admin requis)."""
    page, limit = pagination
    return await service.list_products(page=page, limit=limit, active_only=False, store_id=store_id, search=search)

@router.get("/{product_id}", response_model=ProductRead)
async def read_product(service: ProductServiceDep, product_id: int = Path(..., ge=1)):
    try:
        return await service.get_product(product_id)
    except Exception as e:
        handle_product_errors(e)


# --- Gestion (vendeur propriétaire / admin) ---

@router.post("/", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(product_in: ProductCreate, user: CatalogManagerDep, service: ProductServiceDep):
    logger.info(f"[Router] Création produit '{product_in.name}' par user {user.id} ({user.role})")
    try:
        return await service.create_product(user, product_in)
    except Exception as e:
        handle_product_errors(e)

@router.patch("/{product_id}", response_model=ProductRead)
async def update_product(
    product_update: ProductUpdate,
    user: CatalogManagerDep,
    service: ProductServiceDep,
    product_id: int = Path(..., ge=1),
):
    try:
        return await service.update_product(user, product_id, product_update)
    except Exception as e:
        handle_product_errors(e)

@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(user: CatalogManagerDep, service: ProductServiceDep, product_id: int = Path(..., ge=1)):
    try:
        await service.delete_product(user, product_id)
    except Exception as e:
        handle_product_errors(e)

@router.post("/{product_id}/variants", response_model=ProductVariantRead, status_code=status.HTTP_201_CREATED)
async def add_variant(
    variant_in: ProductVariantCreate,
    user: CatalogManagerDep,
    service: ProductServiceDep,
    product_id: int = Path(..., ge=1),
):
    try:
        return await service.add_variant(user, product_id, variant_in)
    except Exception as e:
        handle_product_errors(e)

@router.delete("/{product_id}/variants/{variant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_variant(
    user: CatalogManagerDep,
    service: ProductServiceDep,
    product_id: int = Path(..., ge=1),
    variant_id: int = Path(..., ge=1),
):
    try:
        await service.delete_variant(user, product_id, variant_id)
    except Exception as e:
        handle_product_errors(e)
