import logging
from typing import Annotated

from fastapi import Depends

from src.categories.service import CategoryService
from src.categories.interfaces.repositories import AbstractCategoryRepository
from src.categories.repositories import SQLAlchemyCategoryRepository
from src.users.dependencies import DbSessionDep

logger = logging.getLogger(__name__)


def get_category_repository(session: DbSessionDep) -> AbstractCategoryRepository:
    """Fournit une instance du repository de catégories."""
    logger.debug("Providing SQLAlchemyCategoryRepository")
    return SQLAlchemyCategoryRepository(db_session=session)

CategoryRepositoryDep = Annotated[AbstractCategoryRepository, Depends(get_category_repository)]


def get_category_service(repository: CategoryRepositoryDep) -> CategoryService:
    """Fournit une instance du service de gestion des catégories."""
    logger.debug("Providing CategoryService with injected repository")
    return CategoryService(repository=repository)

CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
