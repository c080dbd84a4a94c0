import logging
from typing import Annotated

from fastapi import Depends

from src.stores.interfaces.repositories import AbstractStoreRepository
from src.stores.repositories import SQLAlchemyStoreRepository
from src.stores.service import StoreService
from src.users.dependencies import DbSessionDep

logger = logging.getLogger(__name__)


def get_store_repository(session: DbSessionDep) -> AbstractStoreRepository:
    logger.debug("Fourniture de SQLAlchemyStoreRepository")
    return SQLAlchemyStoreRepository(db_session=session)

StoreRepositoryDep = Annotated[AbstractStoreRepository, Depends(get_store_repository)]


def get_store_service(repository: StoreRepositoryDep) -> StoreService:
    logger.debug("Fourniture de StoreService")
    return StoreService(repository=repository)

StoreServiceDep = Annotated[StoreService, Depends(get_store_service)]
