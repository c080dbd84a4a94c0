"""
Tests d'intégration du passage de commande et du cycle de vie des commandes.
"""
from decimal import Decimal

import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.addresses.models import Address
from src.orders.models import Order
from src.products.models import Product, ProductVariant
from tests.conftest import API_PREFIX

pytestmark = pytest.mark.asyncio


async def add_to_cart(client: AsyncClient, headers: dict[str, str], product_id: int, quantity: int, variant_id=None):
    payload = {"product_id": product_id, "quantity": quantity}
    if variant_id is not None:
        payload["variant_id"] = variant_id
    response = await client.post(f"{API_PREFIX}/cart/items", json=payload, headers=headers)
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()

async def place_order(client: AsyncClient, headers: dict[str, str], address_id: int, **extra):
    payload = {"delivery_address_id": address_id, "payment_method": "cod", **extra}
    return await client.post(f"{API_PREFIX}/orders/", json=payload, headers=headers)

async def count_orders(db_session: AsyncSession) -> int:
    return (await db_session.execute(select(func.count(Order.id)))).scalar_one()


# --- Passage de commande ---

async def test_place_order_success(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_customer: dict[str, str],
    customer_address: Address,
    test_product: Product,
    test_product_2: Product,
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 2)
    await add_to_cart(test_client, auth_headers_customer, test_product_2.id, 1)

    response = await place_order(test_client, auth_headers_customer, customer_address.id, notes="Sonner deux fois")
    assert response.status_code == status.HTTP_201_CREATED, response.text
    order = response.json()

    assert order["order_number"].startswith("ORD-")
    assert order["status"] == "pending"
    assert order["payment_status"] == "pending"
    assert order["notes"] == "Sonner deux fois"
    assert order["estimated_delivery"] is not None
    # 2 x 20.00 + 7.50 = 47.50 ; taxe 6.175 -> 6.18 ; livraison 5.00
    assert Decimal(order["subtotal"]) == Decimal("47.50")
    assert Decimal(order["tax"]) == Decimal("6.18")
    assert Decimal(order["delivery_fee"]) == Decimal("5.00")
    assert Decimal(order["total"]) == Decimal("58.68")
    assert len(order["items"]) == 2
    first = order["items"][0]
    assert first["product_name"] == "Pommes Bio"
    assert first["store_id"] == test_product.store_id
    assert Decimal(first["total"]) == Decimal("40.00")

    # Stock décrémenté exactement de la quantité commandée
    await db_session.refresh(test_product)
    await db_session.refresh(test_product_2)
    assert test_product.stock == 8
    assert test_product_2.stock == 2

    cart = await test_client.get(f"{API_PREFIX}/cart/", headers=auth_headers_customer)
    assert cart.json()["items"] == []
    assert cart.json()["item_count"] == 0

async def test_free_delivery_above_threshold(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], customer_address: Address, test_product: Product
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 3)
    response = await place_order(test_client, auth_headers_customer, customer_address.id)
    order = response.json()
    assert Decimal(order["delivery_fee"]) == Decimal("0.00")
    assert Decimal(order["total"]) == Decimal("67.80")

async def test_keep_cart_when_requested(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], customer_address: Address, test_product: Product
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 1)
    response = await place_order(test_client, auth_headers_customer, customer_address.id, clear_cart=False)
    assert response.status_code == status.HTTP_201_CREATED
    cart = await test_client.get(f"{API_PREFIX}/cart/", headers=auth_headers_customer)
    assert len(cart.json()["items"]) == 1

async def test_variant_order_uses_variant_price_and_stock(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_customer: dict[str, str],
    customer_address: Address,
    test_product: Product,
    test_variant: ProductVariant,
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 2, variant_id=test_variant.id)
    response = await place_order(test_client, auth_headers_customer, customer_address.id)
    assert response.status_code == status.HTTP_201_CREATED
    item = response.json()["items"][0]
    assert Decimal(item["unit_price"]) == Decimal("35.00")
    assert item["variant_id"] == test_variant.id
    assert item["variant_label"] == "Poids: 2kg"

    await db_session.refresh(test_variant)
    await db_session.refresh(test_product)
    assert test_variant.stock == 2
    assert test_product.stock == 10

async def test_empty_cart_rejected(
    test_client: AsyncClient, db_session: AsyncSession, auth_headers_customer: dict[str, str], customer_address: Address
):
    response = await place_order(test_client, auth_headers_customer, customer_address.id)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert await count_orders(db_session) == 0

async def test_address_of_other_user_rejected(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_customer_2: dict[str, str],
    customer_address: Address,
    test_product: Product,
):
    await add_to_cart(test_client, auth_headers_customer_2, test_product.id, 1)
    response = await place_order(test_client, auth_headers_customer_2, customer_address.id)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert await count_orders(db_session) == 0

async def test_inactive_product_rejected(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_customer: dict[str, str],
    customer_address: Address,
    test_product: Product,
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 1)
    test_product.is_active = False
    db_session.add(test_product)
    await db_session.commit()

    response = await place_order(test_client, auth_headers_customer, customer_address.id)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert await count_orders(db_session) == 0

async def test_stock_shortage_writes_nothing(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_customer: dict[str, str],
    customer_address: Address,
    test_product: Product,
    test_product_2: Product,
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 2)
    await add_to_cart(test_client, auth_headers_customer, test_product_2.id, 3)
    # Le stock baisse entre l'ajout au panier et la commande
    test_product_2.stock = 1
    db_session.add(test_product_2)
    await db_session.commit()

    response = await place_order(test_client, auth_headers_customer, customer_address.id)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert await count_orders(db_session) == 0

    await db_session.refresh(test_product)
    assert test_product.stock == 10
    cart = await test_client.get(f"{API_PREFIX}/cart/", headers=auth_headers_customer)
    assert len(cart.json()["items"]) == 2

async def test_competing_checkouts_cannot_oversell(
    test_client: AsyncClient,
    db_session: AsyncSession,
    customer_user_2,
    auth_headers_customer: dict[str, str],
    auth_headers_customer_2: dict[str, str],
    customer_address: Address,
    test_product_2: Product,
):
    other_address = Address(
        user_id=customer_user_2.id, name="Client Deux", phone="0600000000",
        address="1 quai Saint-Antoine", city="Lyon", state="Rhône", pincode="69002", is_default=True,
    )
    db_session.add(other_address)
    await db_session.commit()

    await add_to_cart(test_client, auth_headers_customer, test_product_2.id, 2)
    await add_to_cart(test_client, auth_headers_customer_2, test_product_2.id, 2)

    first = await place_order(test_client, auth_headers_customer, customer_address.id)
    second = await place_order(test_client, auth_headers_customer_2, other_address.id)
    assert first.status_code == status.HTTP_201_CREATED
    assert second.status_code == status.HTTP_400_BAD_REQUEST

    await db_session.refresh(test_product_2)
    assert test_product_2.stock == 1

async def test_prices_frozen_after_order(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    auth_headers_seller: dict[str, str],
    customer_address: Address,
    test_product: Product,
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 1)
    order = (await place_order(test_client, auth_headers_customer, customer_address.id)).json()

    updated = await test_client.patch(
        f"{API_PREFIX}/products/{test_product.id}", json={"price": "99.00", "name": "Pommes Premium"},
        headers=auth_headers_seller,
    )
    assert updated.status_code == status.HTTP_200_OK

    response = await test_client.get(f"{API_PREFIX}/orders/{order['id']}", headers=auth_headers_customer)
    data = response.json()
    assert Decimal(data["items"][0]["unit_price"]) == Decimal("20.00")
    assert data["items"][0]["product_name"] == "Pommes Bio"
    assert Decimal(data["total"]) == Decimal(order["total"])

async def test_invalid_payment_method(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], customer_address: Address
):
    response = await test_client.post(
        f"{API_PREFIX}/orders/",
        json={"delivery_address_id": customer_address.id, "payment_method": "bitcoin"},
        headers=auth_headers_customer,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


# --- Consultation et annulation ---

async def test_list_and_get_own_orders(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    auth_headers_customer_2: dict[str, str],
    customer_address: Address,
    test_product: Product,
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 1)
    order = (await place_order(test_client, auth_headers_customer, customer_address.id)).json()

    listing = await test_client.get(f"{API_PREFIX}/orders/", headers=auth_headers_customer)
    assert listing.json()["total"] == 1
    assert listing.json()["items"][0]["id"] == order["id"]

    other = await test_client.get(f"{API_PREFIX}/orders/", headers=auth_headers_customer_2)
    assert other.json()["total"] == 0
    hidden = await test_client.get(f"{API_PREFIX}/orders/{order['id']}", headers=auth_headers_customer_2)
    assert hidden.status_code == status.HTTP_404_NOT_FOUND

async def test_cancel_restocks(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_customer: dict[str, str],
    customer_address: Address,
    test_product: Product,
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 4)
    order = (await place_order(test_client, auth_headers_customer, customer_address.id)).json()
    await db_session.refresh(test_product)
    assert test_product.stock == 6

    response = await test_client.post(f"{API_PREFIX}/orders/{order['id']}/cancel", headers=auth_headers_customer)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "cancelled"
    await db_session.refresh(test_product)
    assert test_product.stock == 10

    again = await test_client.post(f"{API_PREFIX}/orders/{order['id']}/cancel", headers=auth_headers_customer)
    assert again.status_code == status.HTTP_400_BAD_REQUEST


# --- Administration ---

async def test_admin_status_workflow(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    auth_headers_admin: dict[str, str],
    customer_address: Address,
    test_product: Product,
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 1)
    order = (await place_order(test_client, auth_headers_customer, customer_address.id)).json()
    url = f"{API_PREFIX}/orders/{order['id']}/status"

    skipped = await test_client.patch(url, json={"status": "delivered"}, headers=auth_headers_admin)
    assert skipped.status_code == status.HTTP_400_BAD_REQUEST
    assert "'En attente' à 'Livrée'" in skipped.json()["detail"]
    assert "Confirmée, Annulée" in skipped.json()["detail"]

    for next_status in ("confirmed", "packed"):
        response = await test_client.patch(url, json={"status": next_status}, headers=auth_headers_admin)
        assert response.status_code == status.HTTP_200_OK
    response = await test_client.patch(
        url, json={"status": "shipped", "tracking_number": "TRK123"}, headers=auth_headers_admin
    )
    assert response.json()["tracking_number"] == "TRK123"

    # Une commande préparée ne peut plus être annulée par le client
    cancel = await test_client.post(f"{API_PREFIX}/orders/{order['id']}/cancel", headers=auth_headers_customer)
    assert cancel.status_code == status.HTTP_400_BAD_REQUEST

    delivered = await test_client.patch(url, json={"status": "delivered"}, headers=auth_headers_admin)
    assert delivered.json()["status"] == "delivered"
    assert delivered.json()["actual_delivery"] is not None

async def test_admin_cancel_restocks(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_customer: dict[str, str],
    auth_headers_admin: dict[str, str],
    customer_address: Address,
    test_product: Product,
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 2)
    order = (await place_order(test_client, auth_headers_customer, customer_address.id)).json()
    response = await test_client.patch(
        f"{API_PREFIX}/orders/{order['id']}/status", json={"status": "cancelled"}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_200_OK
    await db_session.refresh(test_product)
    assert test_product.stock == 10

async def test_admin_updates_payment(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    auth_headers_admin: dict[str, str],
    customer_address: Address,
    test_product: Product,
):
    await add_to_cart(test_client, auth_headers_customer, test_product.id, 1)
    order = (await place_order(test_client, auth_headers_customer, customer_address.id)).json()
    response = await test_client.patch(
        f"{API_PREFIX}/orders/{order['id']}/payment", json={"payment_status": "paid"}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["payment_status"] == "paid"

    invalid = await test_client.patch(
        f"{API_PREFIX}/orders/{order['id']}/payment", json={"payment_status": "refunded"}, headers=auth_headers_admin
    )
    assert invalid.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

async def test_admin_surfaces_reject_customers(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], auth_headers_admin: dict[str, str]
):
    forbidden = await test_client.get(f"{API_PREFIX}/orders/admin/all", headers=auth_headers_customer)
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN
    forbidden = await test_client.patch(
        f"{API_PREFIX}/orders/1/status", json={"status": "confirmed"}, headers=auth_headers_customer
    )
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN

    allowed = await test_client.get(f"{API_PREFIX}/orders/admin/all?status=pending", headers=auth_headers_admin)
    assert allowed.status_code == status.HTTP_200_OK
