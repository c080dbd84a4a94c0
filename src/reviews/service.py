"""
Logique métier des avis produits.

Toute création, modification ou suppression recalcule la note moyenne et le
nombre d'avis du produit.
"""
import logging
from typing import Optional

from src.core.schemas import PaginatedResponse, page_to_offset
from src.orders.service import OrderService
from src.products.service import ProductService
from src.reviews.config import RATING_DECIMALS
from src.reviews.exceptions import DuplicateReviewError, ReviewNotFoundError
from src.reviews.interfaces.repositories import AbstractReviewRepository
from src.reviews.models import Review, ReviewCreate, ReviewRead, ReviewUpdate
from src.users.config import ROLE_ADMIN
from src.users.models import User, UserRead

logger = logging.getLogger(__name__)


def _to_read(review: Review, author: Optional[User]) -> ReviewRead:
    return ReviewRead.model_validate(
        review,
        update={
            "user_name": author.name if author else None,
            "user_avatar": author.avatar if author else None,
        },
    )


class ReviewService:
    def __init__(
        self,
        repository: AbstractReviewRepository,
        product_service: ProductService,
        order_service: OrderService,
    ):
        self.repository = repository
        self.product_service = product_service
        self.order_service = order_service

    async def _refresh_product_rating(self, product_id: int) -> None:
        average, count = await self.repository.rating_stats(product_id)
        await self.product_service.update_rating(product_id, round(average, RATING_DECIMALS), count)
        logger.debug(f"[ReviewService] Produit {product_id}: note {average:.2f} sur {count} avis")

    async def _get_own_review(self, review_id: int, user: UserRead) -> Review:
        review = await self.repository.get_by_id(review_id)
        if not review or review.user_id != user.id:
            raise ReviewNotFoundError(review_id)
        return review

    async def list_reviews(
        self,
        page: int,
        limit: int,
        product_id: Optional[int] = None,
        rating: Optional[int] = None,
    ) -> PaginatedResponse[ReviewRead]:
        rows, total = await self.repository.list(
            offset=page_to_offset(page, limit), limit=limit, product_id=product_id, rating=rating
        )
        items = [_to_read(review, author) for review, author in rows]
        return PaginatedResponse[ReviewRead].build(items=items, total=total, page=page, limit=limit)

    async def create_review(self, user: UserRead, review_in: ReviewCreate) -> ReviewRead:
        logger.info(f"[ReviewService] Avis de user {user.id} sur produit {review_in.product_id} ({review_in.rating}/5)")
        # ProductNotFoundException si le produit est inconnu ou inactif
        await self.product_service.get_active_product(review_in.product_id)

        if await self.repository.exists_for_user(user.id, review_in.product_id):
            logger.warning(f"[ReviewService] Avis en double refusé: user {user.id}, produit {review_in.product_id}")
            raise DuplicateReviewError(user.id, review_in.product_id)

        order_id = await self.order_service.find_delivered_purchase(user.id, review_in.product_id)
        data = review_in.model_dump()
        data.update({"user_id": user.id, "order_id": order_id, "is_verified": order_id is not None})
        review = await self.repository.create(data)

        await self._refresh_product_rating(review.product_id)
        return _to_read(review, await self.repository.get_author(user.id))

    async def update_review(self, user: UserRead, review_id: int, review_update: ReviewUpdate) -> ReviewRead:
        review = await self._get_own_review(review_id, user)
        update_data = review_update.model_dump(exclude_unset=True, exclude_none=True)
        review = await self.repository.update(review, update_data)
        await self._refresh_product_rating(review.product_id)
        return _to_read(review, await self.repository.get_author(user.id))

    async def delete_review(self, user: UserRead, review_id: int) -> None:
        """Suppression par l'auteur, ou par un administrateur pour n'importe quel avis."""
        if user.role == ROLE_ADMIN:
            review = await self.repository.get_by_id(review_id)
            if not review:
                raise ReviewNotFoundError(review_id)
        else:
            review = await self._get_own_review(review_id, user)
        product_id = review.product_id
        await self.repository.delete(review)
        logger.info(f"[ReviewService] Avis {review_id} supprimé par user {user.id}")
        await self._refresh_product_rating(product_id)
