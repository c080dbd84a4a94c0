import logging
from typing import Annotated

from fastapi import Depends

from src.cart.interfaces.repositories import AbstractCartRepository
from src.cart.repositories import SQLAlchemyCartRepository
from src.cart.service import CartService
from src.products.dependencies import ProductServiceDep
from src.users.dependencies import DbSessionDep

logger = logging.getLogger(__name__)


def get_cart_repository(session: DbSessionDep) -> AbstractCartRepository:
    return SQLAlchemyCartRepository(db_session=session)

CartRepositoryDep = Annotated[AbstractCartRepository, Depends(get_cart_repository)]


def get_cart_service(repository: CartRepositoryDep, product_service: ProductServiceDep) -> CartService:
    logger.debug("Fourniture de CartService")
    return CartService(repository=repository, product_service=product_service)

CartServiceDep = Annotated[CartService, Depends(get_cart_service)]
