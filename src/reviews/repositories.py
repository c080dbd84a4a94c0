import logging
from typing import Any, Dict, List, Optional, Tuple

from fastcrud import FastCRUD
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.reviews.exceptions import DuplicateReviewError
from src.reviews.interfaces.repositories import AbstractReviewRepository
from src.reviews.models import Review, ReviewCreate, ReviewRead, ReviewUpdate
from src.users.models import User

logger = logging.getLogger(__name__)


class SQLAlchemyReviewRepository(AbstractReviewRepository):
    """Implémentation SQLAlchemy du repository des avis."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD[Review, ReviewCreate, ReviewUpdate, ReviewUpdate, ReviewUpdate, ReviewRead](Review)

    async def get_by_id(self, review_id: int) -> Optional[Review]:
        logger.debug(f"[ReviewRepository] Récupération avis ID: {review_id}")
        return await self.db.get(Review, review_id)

    async def exists_for_user(self, user_id: int, product_id: int) -> bool:
        return await self.crud.exists(db=self.db, user_id=user_id, product_id=product_id)

    async def list(
        self,
        offset: int,
        limit: int,
        product_id: Optional[int] = None,
        rating: Optional[int] = None,
    ) -> Tuple[List[Tuple[Review, User]], int]:
        filters = {"is_active": True}
        if product_id is not None:
            filters["product_id"] = product_id
        if rating is not None:
            filters["rating"] = rating
        total = await self.crud.count(db=self.db, **filters)

        stmt = select(Review, User).join(User, User.id == Review.user_id).where(Review.is_active.is_(True))
        if product_id is not None:
            stmt = stmt.where(Review.product_id == product_id)
        if rating is not None:
            stmt = stmt.where(Review.rating == rating)
        result = await self.db.execute(
            stmt.order_by(Review.created_at.desc(), Review.id.desc()).offset(offset).limit(limit)
        )
        return [(review, user) for review, user in result.all()], total

    async def get_author(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def create(self, review_data: Dict[str, Any]) -> Review:
        review = Review(**review_data)
        self.db.add(review)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"[ReviewRepository] Avis déjà existant: user {review_data['user_id']}, produit {review_data['product_id']}")
            raise DuplicateReviewError(review_data["user_id"], review_data["product_id"])
        await self.db.refresh(review)
        logger.info(f"[ReviewRepository] Avis créé avec ID: {review.id}")
        return review

    async def update(self, review: Review, update_data: Dict[str, Any]) -> Review:
        for key, value in update_data.items():
            setattr(review, key, value)
        self.db.add(review)
        await self.db.commit()
        await self.db.refresh(review)
        return review

    async def delete(self, review: Review) -> None:
        await self.db.delete(review)
        await self.db.commit()

    async def rating_stats(self, product_id: int) -> Tuple[float, int]:
        result = await self.db.execute(
            select(func.avg(Review.rating), func.count(Review.id))
            .where(Review.product_id == product_id, Review.is_active.is_(True))
        )
        avg, count = result.one()
        return float(avg or 0), count
