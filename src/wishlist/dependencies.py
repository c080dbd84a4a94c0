from typing import Annotated

from fastapi import Depends

from src.products.dependencies import ProductServiceDep
from src.users.dependencies import DbSessionDep
from src.wishlist.interfaces.repositories import AbstractWishlistRepository
from src.wishlist.repositories import SQLAlchemyWishlistRepository
from src.wishlist.service import WishlistService


def get_wishlist_repository(session: DbSessionDep) -> AbstractWishlistRepository:
    return SQLAlchemyWishlistRepository(db_session=session)

WishlistRepositoryDep = Annotated[AbstractWishlistRepository, Depends(get_wishlist_repository)]


def get_wishlist_service(repository: WishlistRepositoryDep, product_service: ProductServiceDep) -> WishlistService:
    return WishlistService(repository=repository, product_service=product_service)

WishlistServiceDep = Annotated[WishlistService, Depends(get_wishlist_service)]
