import logging
from typing import Annotated

from fastapi import Depends

from src.products.dependencies import ProductServiceDep
from src.sellers.interfaces.repositories import AbstractSellerRepository
from src.sellers.repositories import SQLAlchemySellerRepository
from src.sellers.service import SellerService
from src.stores.dependencies import StoreServiceDep
from src.users.dependencies import DbSessionDep

logger = logging.getLogger(__name__)


def get_seller_repository(session: DbSessionDep) -> AbstractSellerRepository:
    return SQLAlchemySellerRepository(db_session=session)

SellerRepositoryDep = Annotated[AbstractSellerRepository, Depends(get_seller_repository)]


def get_seller_service(
    repository: SellerRepositoryDep,
    store_service: StoreServiceDep,
    product_service: ProductServiceDep,
) -> SellerService:
    logger.debug("Fourniture de SellerService")
    return SellerService(repository=repository, store_service=store_service, product_service=product_service)

SellerServiceDep = Annotated[SellerService, Depends(get_seller_service)]
