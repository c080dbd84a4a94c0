"""
Tests d'intégration du tableau de bord vendeur.
"""
from decimal import Decimal

import pytest
from httpx import AsyncClient
from fastapi import status

from src.addresses.models import Address
from src.products.models import Product
from tests.conftest import API_PREFIX

pytestmark = pytest.mark.asyncio


async def place_order(client: AsyncClient, headers: dict[str, str], address: Address, product: Product, quantity: int) -> dict:
    await client.post(f"{API_PREFIX}/cart/items", json={"product_id": product.id, "quantity": quantity}, headers=headers)
    response = await client.post(
        f"{API_PREFIX}/orders/",
        json={"delivery_address_id": address.id, "payment_method": "cod"},
        headers=headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


async def test_stats_count_revenue_only_once_shipped(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    auth_headers_seller: dict[str, str],
    auth_headers_admin: dict[str, str],
    customer_address: Address,
    test_product: Product,
    test_product_2: Product,
):
    order = await place_order(test_client, auth_headers_customer, customer_address, test_product, 2)

    stats = (await test_client.get(f"{API_PREFIX}/sellers/me/stats", headers=auth_headers_seller)).json()
    assert stats["active_products"] == 2
    assert stats["total_orders"] == 1
    assert stats["pending_orders"] == 1
    assert Decimal(stats["revenue"]) == Decimal("0.00")
    # Miel de Lavande (stock 3)
    assert stats["low_stock_products"] == 1

    for next_status in ("confirmed", "packed", "shipped"):
        await test_client.patch(
            f"{API_PREFIX}/orders/{order['id']}/status", json={"status": next_status}, headers=auth_headers_admin
        )

    stats = (await test_client.get(f"{API_PREFIX}/sellers/me/stats", headers=auth_headers_seller)).json()
    assert stats["pending_orders"] == 0
    assert Decimal(stats["revenue"]) == Decimal("40.00")

async def test_recent_orders_show_store_lines(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    auth_headers_seller: dict[str, str],
    customer_address: Address,
    test_product: Product,
):
    order = await place_order(test_client, auth_headers_customer, customer_address, test_product, 3)

    response = await test_client.get(f"{API_PREFIX}/sellers/me/orders?limit=5", headers=auth_headers_seller)
    assert response.status_code == status.HTTP_200_OK
    orders = response.json()
    assert len(orders) == 1
    assert orders[0]["order_number"] == order["order_number"]
    assert orders[0]["items"][0]["quantity"] == 3
    assert Decimal(orders[0]["store_total"]) == Decimal("60.00")

async def test_low_stock_products(
    test_client: AsyncClient, auth_headers_seller: dict[str, str], test_product: Product, test_product_2: Product
):
    response = await test_client.get(f"{API_PREFIX}/sellers/me/products?low_stock=true", headers=auth_headers_seller)
    assert response.status_code == status.HTTP_200_OK
    names = [p["name"] for p in response.json()["items"]]
    assert names == ["Miel de Lavande"]

    every = await test_client.get(f"{API_PREFIX}/sellers/me/products", headers=auth_headers_seller)
    assert every.json()["total"] == 2

async def test_seller_without_store(test_client: AsyncClient, auth_headers_seller_2: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/sellers/me/stats", headers=auth_headers_seller_2)
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_customer_forbidden(test_client: AsyncClient, auth_headers_customer: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/sellers/me/stats", headers=auth_headers_customer)
    assert response.status_code == status.HTTP_403_FORBIDDEN
