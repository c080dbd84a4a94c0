"""
Routes API des avis produits.
"""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from src.auth.dependencies import CurrentUserDep
from src.core.schemas import PaginatedResponse, PaginationParams
from src.products.exceptions import ProductNotFoundException
from src.reviews.config import MIN_RATING, MAX_RATING
from src.reviews.dependencies import ReviewServiceDep
from src.reviews.exceptions import DuplicateReviewError, ReviewError, ReviewNotFoundError
from src.reviews.models import ReviewCreate, ReviewRead, ReviewUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_review_errors(e: Exception):
    if isinstance(e, (ReviewNotFoundError, ProductNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, DuplicateReviewError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    if isinstance(e, ReviewError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    logger.error(f"[Router] Erreur inattendue dans le module avis: {e}", exc_info=True)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")


@router.get("/", response_model=PaginatedResponse[ReviewRead])
async def list_reviews(
    review_service: ReviewServiceDep,
    pagination: PaginationParams,
    product_id: Optional[int] = Query(None),
    rating: Optional[int] = Query(None, ge=MIN_RATING, le=MAX_RATING),
):
    """Liste publique des avis, filtrable par produit et par note."""
    page, limit = pagination
    return await review_service.list_reviews(page=page, limit=limit, product_id=product_id, rating=rating)

@router.post("/", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
async def create_review(review_in: ReviewCreate, current_user: CurrentUserDep, review_service: ReviewServiceDep):
    try:
        return await review_service.create_review(current_user, review_in)
    except Exception as e:
        handle_review_errors(e)

@router.put("/{review_id}", response_model=ReviewRead)
async def update_review(
    review_id: int,
    review_update: ReviewUpdate,
    current_user: CurrentUserDep,
    review_service: ReviewServiceDep,
):
    """Modifie un avis. Seul son auteur peut le modifier."""
    try:
        return await review_service.update_review(current_user, review_id, review_update)
    except Exception as e:
        handle_review_errors(e)

@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(review_id: int, current_user: CurrentUserDep, review_service: ReviewServiceDep):
    try:
        await review_service.delete_review(current_user, review_id)
    except Exception as e:
        handle_review_errors(e)

review_router = router
