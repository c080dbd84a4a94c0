"""
Tests d'intégration des statistiques d'administration.
"""
from decimal import Decimal

import pytest
from httpx import AsyncClient
from fastapi import status

from src.addresses.models import Address
from src.products.models import Product
from tests.conftest import API_PREFIX

pytestmark = pytest.mark.asyncio


async def test_platform_stats(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    auth_headers_customer_2: dict[str, str],
    auth_headers_admin: dict[str, str],
    customer_address: Address,
    test_product: Product,
):
    await test_client.post(
        f"{API_PREFIX}/cart/items", json={"product_id": test_product.id, "quantity": 2}, headers=auth_headers_customer
    )
    order = (await test_client.post(
        f"{API_PREFIX}/orders/",
        json={"delivery_address_id": customer_address.id, "payment_method": "cod"},
        headers=auth_headers_customer,
    )).json()

    stats = (await test_client.get(f"{API_PREFIX}/admin/stats", headers=auth_headers_admin)).json()
    assert stats["total_customers"] == 2
    assert stats["active_products"] == 1
    assert stats["active_stores"] == 1
    assert stats["total_orders"] == 1
    assert stats["pending_orders"] == 1
    assert Decimal(stats["revenue"]) == Decimal("0.00")

    for next_status in ("confirmed", "packed", "shipped", "delivered"):
        await test_client.patch(
            f"{API_PREFIX}/orders/{order['id']}/status", json={"status": next_status}, headers=auth_headers_admin
        )

    stats = (await test_client.get(f"{API_PREFIX}/admin/stats", headers=auth_headers_admin)).json()
    assert stats["pending_orders"] == 0
    # 40.00 + TVA 5.20 + livraison 5.00
    assert Decimal(stats["revenue"]) == Decimal("50.20")

async def test_stats_require_admin(test_client: AsyncClient, auth_headers_customer: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/admin/stats", headers=auth_headers_customer)
    assert response.status_code == status.HTTP_403_FORBIDDEN
