"""
Routes API du panier de l'utilisateur connecté.
"""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from src.auth.dependencies import CurrentUserDep
from src.cart.dependencies import CartServiceDep
from src.cart.exceptions import CartError, CartNotFoundError, CartItemNotFoundError
from src.cart.models import CartItemAdd, CartItemUpdate, CartRead
from src.products.exceptions import (
    ProductError,
    ProductNotFoundException,
    VariantNotFoundException,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_cart_errors(e: Exception):
    if isinstance(e, (CartNotFoundError, CartItemNotFoundError, ProductNotFoundException, VariantNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, (CartError, ProductError)):
        # Stock insuffisant et autres règles métier
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    logger.error(f"[Router] Erreur inattendue dans le module panier: {e}", exc_info=True)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")


@router.get("/", response_model=CartRead)
async def read_cart(current_user: CurrentUserDep, cart_service: CartServiceDep):
    return await cart_service.get_cart(current_user.id)

@router.post("/items", response_model=CartRead)
async def add_cart_item(item_in: CartItemAdd, current_user: CurrentUserDep, cart_service: CartServiceDep):
    """Ajoute un produit au panier (ou incrémente la ligne existante)."""
    logger.info(f"[Router] Ajout au panier pour user {current_user.id}: produit {item_in.product_id} x{item_in.quantity}")
    try:
        return await cart_service.add_item(current_user.id, item_in)
    except Exception as e:
        handle_cart_errors(e)

@router.put("/items", response_model=CartRead)
async def update_cart_item(item_in: CartItemUpdate, current_user: CurrentUserDep, cart_service: CartServiceDep):
    """Fixe la quantité d'une ligne. Une quantité <= 0 retire la ligne."""
    try:
        return await cart_service.update_item(current_user.id, item_in)
    except Exception as e:
        handle_cart_errors(e)

@router.delete("/items", response_model=CartRead)
async def remove_cart_item(
    current_user: CurrentUserDep,
    cart_service: CartServiceDep,
    product_id: int = Query(...),
    variant_id: Optional[int] = Query(None),
):
    try:
        return await cart_service.remove_item(current_user.id, product_id, variant_id)
    except Exception as e:
        handle_cart_errors(e)

@router.delete("/", response_model=CartRead)
async def clear_cart(current_user: CurrentUserDep, cart_service: CartServiceDep):
    logger.info(f"[Router] Vidage du panier pour user {current_user.id}")
    try:
        return await cart_service.clear_cart(current_user.id)
    except Exception as e:
        handle_cart_errors(e)
