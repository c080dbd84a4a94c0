"""
Tests du repository des commandes : écriture transactionnelle et décrément conditionnel du stock.
"""
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.addresses.models import Address
from src.cart.models import Cart, CartItem
from src.orders.models import Order, OrderItem
from src.orders.repositories import SQLAlchemyOrderRepository
from src.products.exceptions import InsufficientStockException
from src.products.models import Product
from src.users.models import User

pytestmark = pytest.mark.asyncio


def _order_data(user: User, address: Address, number: str) -> dict:
    return {
        "order_number": number,
        "user_id": user.id,
        "payment_method": "cod",
        "subtotal": Decimal("40.00"),
        "tax": Decimal("5.20"),
        "delivery_fee": Decimal("5.00"),
        "total": Decimal("50.20"),
        "delivery_address_id": address.id,
    }

def _line(product: Product, quantity: int) -> dict:
    return {
        "product_id": product.id,
        "variant_id": None,
        "store_id": product.store_id,
        "product_name": product.name,
        "variant_label": None,
        "quantity": quantity,
        "unit_price": product.price,
        "total": product.price * quantity,
    }


async def test_place_order_clears_cart_in_same_transaction(
    db_session: AsyncSession, customer_user: User, customer_address: Address, test_product: Product
):
    cart = Cart(user_id=customer_user.id, total=Decimal("40.00"), item_count=2)
    db_session.add(cart)
    await db_session.flush()
    db_session.add(CartItem(cart_id=cart.id, product_id=test_product.id, quantity=2, unit_price=Decimal("20.00")))
    await db_session.commit()
    cart_id = cart.id

    repository = SQLAlchemyOrderRepository(db_session)
    order = await repository.place_order(
        _order_data(customer_user, customer_address, "ORD-1-AAAAAAAAA"),
        [_line(test_product, 2)],
        cart_id_to_clear=cart_id,
    )
    assert order.id is not None

    items = await repository.list_items([order.id])
    assert len(items[order.id]) == 1
    await db_session.refresh(test_product)
    assert test_product.stock == 8
    remaining = (await db_session.execute(select(func.count(CartItem.id)))).scalar_one()
    assert remaining == 0

async def test_guarded_decrement_rolls_back_everything(
    db_session: AsyncSession,
    customer_user: User,
    customer_address: Address,
    test_product: Product,
    test_product_2: Product,
):
    product_id, product_2_id = test_product.id, test_product_2.id
    lines = [_line(test_product, 2), _line(test_product_2, 5)]  # test_product_2 n'a que 3 unités

    repository = SQLAlchemyOrderRepository(db_session)
    with pytest.raises(InsufficientStockException) as exc_info:
        await repository.place_order(_order_data(customer_user, customer_address, "ORD-2-BBBBBBBBB"), lines)
    assert exc_info.value.product_id == product_2_id

    assert (await db_session.execute(select(func.count(Order.id)))).scalar_one() == 0
    assert (await db_session.execute(select(func.count(OrderItem.id)))).scalar_one() == 0
    first = await db_session.get(Product, product_id)
    await db_session.refresh(first)
    assert first.stock == 10

async def test_has_delivered_purchase(
    db_session: AsyncSession, customer_user: User, customer_address: Address, test_product: Product
):
    repository = SQLAlchemyOrderRepository(db_session)
    order = await repository.place_order(
        _order_data(customer_user, customer_address, "ORD-3-CCCCCCCCC"), [_line(test_product, 1)]
    )
    assert await repository.has_delivered_purchase(customer_user.id, test_product.id) is None

    await repository.update(order, {"status": "delivered"})
    assert await repository.has_delivered_purchase(customer_user.id, test_product.id) == order.id
