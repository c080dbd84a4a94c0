import logging
from typing import Annotated

from fastapi import Depends

from src.orders.dependencies import OrderServiceDep
from src.products.dependencies import ProductServiceDep
from src.reviews.interfaces.repositories import AbstractReviewRepository
from src.reviews.repositories import SQLAlchemyReviewRepository
from src.reviews.service import ReviewService
from src.users.dependencies import DbSessionDep

logger = logging.getLogger(__name__)


def get_review_repository(session: DbSessionDep) -> AbstractReviewRepository:
    return SQLAlchemyReviewRepository(db_session=session)

ReviewRepositoryDep = Annotated[AbstractReviewRepository, Depends(get_review_repository)]


def get_review_service(
    repository: ReviewRepositoryDep,
    product_service: ProductServiceDep,
    order_service: OrderServiceDep,
) -> ReviewService:
    logger.debug("Fourniture de ReviewService")
    return ReviewService(repository=repository, product_service=product_service, order_service=order_service)

ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
