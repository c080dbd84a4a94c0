import logging

from src.products.service import ProductService
from src.wishlist.exceptions import WishlistItemNotFoundError
from src.wishlist.interfaces.repositories import AbstractWishlistRepository
from src.wishlist.models import WishlistExistsResponse, WishlistItemRead, WishlistRead

logger = logging.getLogger(__name__)


class WishlistService:
    """Liste de souhaits de l'utilisateur connecté. L'ajout est idempotent."""

    def __init__(self, repository: AbstractWishlistRepository, product_service: ProductService):
        self.repository = repository
        self.product_service = product_service

    async def get_wishlist(self, user_id: int) -> WishlistRead:
        items = [
            WishlistItemRead(
                product_id=product.id,
                name=product.name,
                slug=product.slug,
                price=product.price,
                original_price=product.original_price,
                image=product.images[0] if product.images else None,
                in_stock=product.stock > 0,
                is_active=product.is_active,
                added_at=item.created_at,
            )
            for item, product in await self.repository.list_with_products(user_id)
        ]
        return WishlistRead(items=items, count=len(items))

    async def add_product(self, user_id: int, product_id: int) -> WishlistRead:
        await self.product_service.get_active_product(product_id)
        if await self.repository.get(user_id, product_id) is None:
            await self.repository.add(user_id, product_id)
        else:
            logger.debug(f"[WishlistService] Produit {product_id} déjà présent pour user {user_id}")
        return await self.get_wishlist(user_id)

    async def remove_product(self, user_id: int, product_id: int) -> WishlistRead:
        item = await self.repository.get(user_id, product_id)
        if item is None:
            raise WishlistItemNotFoundError(product_id)
        await self.repository.remove(item)
        return await self.get_wishlist(user_id)

    async def clear(self, user_id: int) -> WishlistRead:
        removed = await self.repository.clear(user_id)
        logger.info(f"[WishlistService] Liste vidée pour user {user_id} ({removed} produits)")
        return WishlistRead()

    async def contains(self, user_id: int, product_id: int) -> WishlistExistsResponse:
        item = await self.repository.get(user_id, product_id)
        return WishlistExistsResponse(product_id=product_id, in_wishlist=item is not None)
