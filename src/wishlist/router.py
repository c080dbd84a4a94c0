"""
Routes API de la liste de souhaits.
"""
import logging

from fastapi import APIRouter, HTTPException, status

from src.auth.dependencies import CurrentUserDep
from src.products.exceptions import ProductNotFoundException
from src.wishlist.dependencies import WishlistServiceDep
from src.wishlist.exceptions import WishlistItemNotFoundError
from src.wishlist.models import WishlistExistsResponse, WishlistRead

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_wishlist_errors(e: Exception):
    if isinstance(e, (WishlistItemNotFoundError, ProductNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    logger.error(f"[Router] Erreur inattendue dans le module wishlist: {e}", exc_info=True)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")


@router.get("/", response_model=WishlistRead)
async def read_wishlist(current_user: CurrentUserDep, wishlist_service: WishlistServiceDep):
    return await wishlist_service.get_wishlist(current_user.id)

@router.delete("/", response_model=WishlistRead)
async def clear_wishlist(current_user: CurrentUserDep, wishlist_service: WishlistServiceDep):
    return await wishlist_service.clear(current_user.id)

@router.post("/{product_id}", response_model=WishlistRead)
async def add_to_wishlist(product_id: int, current_user: CurrentUserDep, wishlist_service: WishlistServiceDep):
    """Ajoute un produit. Ajouter un produit déjà présent ne change rien."""
    try:
        return await wishlist_service.add_product(current_user.id, product_id)
    except Exception as e:
        handle_wishlist_errors(e)

@router.delete("/{product_id}", response_model=WishlistRead)
async def remove_from_wishlist(product_id: int, current_user: CurrentUserDep, wishlist_service: WishlistServiceDep):
    try:
        return await wishlist_service.remove_product(current_user.id, product_id)
    except Exception as e:
        handle_wishlist_errors(e)

@router.get("/{product_id}/exists", response_model=WishlistExistsResponse)
async def wishlist_contains(product_id: int, current_user: CurrentUserDep, wishlist_service: WishlistServiceDep):
    return await wishlist_service.contains(current_user.id, product_id)

wishlist_router = router
