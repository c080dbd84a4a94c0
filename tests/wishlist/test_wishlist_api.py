"""
Tests d'intégration de la liste de souhaits.
"""
import pytest
from httpx import AsyncClient
from fastapi import status

from src.products.models import Product
from tests.conftest import API_PREFIX

pytestmark = pytest.mark.asyncio


async def test_add_is_idempotent(test_client: AsyncClient, auth_headers_customer: dict[str, str], test_product: Product):
    for _ in range(2):
        response = await test_client.post(f"{API_PREFIX}/wishlist/{test_product.id}", headers=auth_headers_customer)
        assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["count"] == 1
    assert data["items"][0]["name"] == "Pommes Bio"
    assert data["items"][0]["in_stock"] is True

async def test_exists_and_remove(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], test_product: Product
):
    exists = await test_client.get(f"{API_PREFIX}/wishlist/{test_product.id}/exists", headers=auth_headers_customer)
    assert exists.json() == {"product_id": test_product.id, "in_wishlist": False}

    await test_client.post(f"{API_PREFIX}/wishlist/{test_product.id}", headers=auth_headers_customer)
    exists = await test_client.get(f"{API_PREFIX}/wishlist/{test_product.id}/exists", headers=auth_headers_customer)
    assert exists.json()["in_wishlist"] is True

    removed = await test_client.delete(f"{API_PREFIX}/wishlist/{test_product.id}", headers=auth_headers_customer)
    assert removed.status_code == status.HTTP_200_OK
    assert removed.json()["count"] == 0

    again = await test_client.delete(f"{API_PREFIX}/wishlist/{test_product.id}", headers=auth_headers_customer)
    assert again.status_code == status.HTTP_404_NOT_FOUND

async def test_wishlists_are_per_user(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    auth_headers_customer_2: dict[str, str],
    test_product: Product,
):
    await test_client.post(f"{API_PREFIX}/wishlist/{test_product.id}", headers=auth_headers_customer)
    other = await test_client.get(f"{API_PREFIX}/wishlist/", headers=auth_headers_customer_2)
    assert other.json()["count"] == 0

async def test_clear(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], test_product: Product, test_product_2: Product
):
    for product in (test_product, test_product_2):
        await test_client.post(f"{API_PREFIX}/wishlist/{product.id}", headers=auth_headers_customer)
    cleared = await test_client.delete(f"{API_PREFIX}/wishlist/", headers=auth_headers_customer)
    assert cleared.json() == {"items": [], "count": 0}

async def test_unknown_product(test_client: AsyncClient, auth_headers_customer: dict[str, str]):
    response = await test_client.post(f"{API_PREFIX}/wishlist/999", headers=auth_headers_customer)
    assert response.status_code == status.HTTP_404_NOT_FOUND
