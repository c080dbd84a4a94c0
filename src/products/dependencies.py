import logging
from typing import Annotated

from fastapi import Depends

from src.products.interfaces.repositories import AbstractProductRepository
from src.products.repositories import SQLAlchemyProductRepository
from src.products.service import ProductService
from src.stores.dependencies import StoreServiceDep
from src.users.dependencies import DbSessionDep

logger = logging.getLogger(__name__)


def get_product_repository(session: DbSessionDep) -> AbstractProductRepository:
    """Dependency function to get the product repository instance."""
    return SQLAlchemyProductRepository(db=session)

ProductRepositoryDep = Annotated[AbstractProductRepository, Depends(get_product_repository)]


def get_product_service(
    product_repo: ProductRepositoryDep,
    store_service: StoreServiceDep,
) -> ProductService:
    """Dependency function to get the product service instance."""
    logger.debug("Providing ProductService with repository and StoreService")
    return ProductService(product_repo=product_repo, store_service=store_service)

ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
