"""
Logique métier du panier.

Chaque mutation recalcule total et item_count à partir des lignes. Le stock
est vérifié mais pas réservé : la vérification définitive a lieu à la commande.
"""
import logging
from typing import Optional

from src.cart.exceptions import CartNotFoundError, CartItemNotFoundError
from src.cart.interfaces.repositories import AbstractCartRepository
from src.cart.models import CartItemAdd, CartItemUpdate, CartItemRead, CartRead
from src.cart.utils import line_subtotal
from src.products.exceptions import InsufficientStockException
from src.products.service import ProductService

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, repository: AbstractCartRepository, product_service: ProductService):
        self.repository = repository
        self.product_service = product_service

    async def get_cart(self, user_id: int) -> CartRead:
        """Panier de l'utilisateur, ou représentation vide s'il n'en a pas."""
        cart = await self.repository.get_by_user(user_id)
        if cart is None:
            return CartRead(user_id=user_id)

        items = [
            CartItemRead(
                id=item.id,
                product_id=item.product_id,
                variant_id=item.variant_id,
                product_name=product.name,
                product_image=product.images[0] if product.images else None,
                store_id=product.store_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=line_subtotal(item.unit_price, item.quantity),
            )
            for item, product in await self.repository.list_lines(cart.id)
        ]
        return CartRead(id=cart.id, user_id=user_id, items=items, total=cart.total, item_count=cart.item_count)

    async def _price_and_stock(self, product_id: int, variant_id: Optional[int]):
        """Prix courant et stock disponible (ceux de la variante si elle est sélectionnée)."""
        product = await self.product_service.get_active_product(product_id)
        if variant_id is None:
            return product.price, product.stock
        variant = await self.product_service.get_product_variant(product_id, variant_id)
        price = variant.price if variant.price is not None else product.price
        return price, variant.stock

    async def add_item(self, user_id: int, item_in: CartItemAdd) -> CartRead:
        logger.debug(f"[CartService] Ajout produit {item_in.product_id} (variante {item_in.variant_id}) x{item_in.quantity} pour user {user_id}")
        price, available = await self._price_and_stock(item_in.product_id, item_in.variant_id)

        cart = await self.repository.get_or_create(user_id)
        item = await self.repository.find_item(cart.id, item_in.product_id, item_in.variant_id)
        new_quantity = item_in.quantity + (item.quantity if item else 0)
        if new_quantity > available:
            logger.warning(f"[CartService] Stock insuffisant pour produit {item_in.product_id}: {new_quantity} > {available}")
            raise InsufficientStockException(item_in.product_id, new_quantity, available, item_in.variant_id)

        if item:
            item.quantity = new_quantity
            item.unit_price = price
        else:
            await self.repository.add_item({
                "cart_id": cart.id,
                "product_id": item_in.product_id,
                "variant_id": item_in.variant_id,
                "quantity": item_in.quantity,
                "unit_price": price,
            })
        await self.repository.save(cart)
        return await self.get_cart(user_id)

    async def update_item(self, user_id: int, item_in: CartItemUpdate) -> CartRead:
        cart = await self.repository.get_by_user(user_id)
        if cart is None:
            raise CartNotFoundError(user_id)
        item = await self.repository.find_item(cart.id, item_in.product_id, item_in.variant_id)
        if item is None:
            raise CartItemNotFoundError(item_in.product_id, item_in.variant_id)

        if item_in.quantity <= 0:
            logger.debug(f"[CartService] Quantité {item_in.quantity}: retrait de la ligne produit {item_in.product_id}")
            await self.repository.delete_item(item)
        else:
            _, available = await self._price_and_stock(item_in.product_id, item_in.variant_id)
            if item_in.quantity > available:
                raise InsufficientStockException(item_in.product_id, item_in.quantity, available, item_in.variant_id)
            item.quantity = item_in.quantity
        await self.repository.save(cart)
        return await self.get_cart(user_id)

    async def remove_item(self, user_id: int, product_id: int, variant_id: Optional[int] = None) -> CartRead:
        cart = await self.repository.get_by_user(user_id)
        if cart is None:
            raise CartNotFoundError(user_id)
        item = await self.repository.find_item(cart.id, product_id, variant_id)
        if item is None:
            raise CartItemNotFoundError(product_id, variant_id)
        await self.repository.delete_item(item)
        await self.repository.save(cart)
        return await self.get_cart(user_id)

    async def clear_cart(self, user_id: int) -> CartRead:
        cart = await self.repository.get_by_user(user_id)
        if cart is None:
            raise CartNotFoundError(user_id)
        await self.repository.clear(cart)
        return CartRead(id=cart.id, user_id=user_id)

    async def get_lines_for_checkout(self, user_id: int):
        """Panier et lignes (avec produit) utilisés pour passer commande."""
        cart = await self.repository.get_by_user(user_id)
        if cart is None:
            return None, []
        return cart, await self.repository.list_lines(cart.id)
