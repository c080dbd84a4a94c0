"""
Tests d'intégration du panier.

Après chaque mutation, le total doit être égal à la somme des sous-totaux
des lignes et item_count à la somme des quantités.
"""
from decimal import Decimal

import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession

from src.products.models import Product, ProductVariant
from tests.conftest import API_PREFIX

pytestmark = pytest.mark.asyncio


def assert_totals_consistent(cart: dict):
    lines_total = sum((Decimal(i["subtotal"]) for i in cart["items"]), Decimal("0.00"))
    assert Decimal(cart["total"]) == lines_total
    assert cart["item_count"] == sum(i["quantity"] for i in cart["items"])
    for item in cart["items"]:
        assert Decimal(item["subtotal"]) == Decimal(item["unit_price"]) * item["quantity"]


async def test_empty_cart(test_client: AsyncClient, auth_headers_customer: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/cart/", headers=auth_headers_customer)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["items"] == []
    assert Decimal(data["total"]) == Decimal("0")
    assert data["item_count"] == 0

async def test_cart_requires_auth(test_client: AsyncClient):
    response = await test_client.get(f"{API_PREFIX}/cart/")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

async def test_totals_follow_every_mutation(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    test_product: Product,
    test_product_2: Product,
    test_variant: ProductVariant,
):
    steps = [
        ("post", {"product_id": test_product.id, "quantity": 2}),
        ("post", {"product_id": test_product_2.id, "quantity": 1}),
        ("post", {"product_id": test_product.id, "quantity": 1, "variant_id": test_variant.id}),
        ("post", {"product_id": test_product.id, "quantity": 3}),
        ("put", {"product_id": test_product_2.id, "quantity": 3}),
        ("put", {"product_id": test_product.id, "quantity": 1}),
    ]
    for method, payload in steps:
        response = await getattr(test_client, method)(
            f"{API_PREFIX}/cart/items", json=payload, headers=auth_headers_customer
        )
        assert response.status_code == status.HTTP_200_OK, response.text
        assert_totals_consistent(response.json())

    cart = response.json()
    # 1 x 20.00 + 3 x 7.50 + 1 x 35.00 (prix de la variante)
    assert Decimal(cart["total"]) == Decimal("77.50")
    assert cart["item_count"] == 5
    assert len(cart["items"]) == 3

async def test_adding_same_product_merges_line(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], test_product: Product
):
    for _ in range(2):
        response = await test_client.post(
            f"{API_PREFIX}/cart/items", json={"product_id": test_product.id, "quantity": 2}, headers=auth_headers_customer
        )
    data = response.json()
    assert len(data["items"]) == 1
    assert data["items"][0]["quantity"] == 4
    assert data["items"][0]["product_name"] == "Pommes Bio"
    assert data["items"][0]["product_image"] == "https://img.example.com/pommes.jpg"

async def test_add_more_than_stock(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], test_product_2: Product
):
    response = await test_client.post(
        f"{API_PREFIX}/cart/items", json={"product_id": test_product_2.id, "quantity": 4}, headers=auth_headers_customer
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_variant_stock_is_checked(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    test_product: Product,
    test_variant: ProductVariant,
):
    # Le produit a 10 unités mais la variante seulement 4
    response = await test_client.post(
        f"{API_PREFIX}/cart/items",
        json={"product_id": test_product.id, "variant_id": test_variant.id, "quantity": 5},
        headers=auth_headers_customer,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_add_unknown_or_inactive_product(
    test_client: AsyncClient, db_session: AsyncSession, auth_headers_customer: dict[str, str], test_product: Product
):
    response = await test_client.post(
        f"{API_PREFIX}/cart/items", json={"product_id": 999, "quantity": 1}, headers=auth_headers_customer
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND

    test_product.is_active = False
    db_session.add(test_product)
    await db_session.commit()
    response = await test_client.post(
        f"{API_PREFIX}/cart/items", json={"product_id": test_product.id, "quantity": 1}, headers=auth_headers_customer
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_quantity_zero_removes_line(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], test_product: Product
):
    await test_client.post(
        f"{API_PREFIX}/cart/items", json={"product_id": test_product.id, "quantity": 2}, headers=auth_headers_customer
    )
    response = await test_client.put(
        f"{API_PREFIX}/cart/items", json={"product_id": test_product.id, "quantity": 0}, headers=auth_headers_customer
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["items"] == []
    assert Decimal(data["total"]) == Decimal("0")
    assert data["item_count"] == 0

async def test_negative_quantity_removes_line(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], test_product: Product
):
    await test_client.post(
        f"{API_PREFIX}/cart/items", json={"product_id": test_product.id, "quantity": 1}, headers=auth_headers_customer
    )
    response = await test_client.put(
        f"{API_PREFIX}/cart/items", json={"product_id": test_product.id, "quantity": -3}, headers=auth_headers_customer
    )
    assert response.json()["items"] == []

async def test_update_without_cart(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], test_product: Product
):
    response = await test_client.put(
        f"{API_PREFIX}/cart/items", json={"product_id": test_product.id, "quantity": 1}, headers=auth_headers_customer
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_remove_line(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], test_product: Product, test_product_2: Product
):
    for product in (test_product, test_product_2):
        await test_client.post(
            f"{API_PREFIX}/cart/items", json={"product_id": product.id, "quantity": 1}, headers=auth_headers_customer
        )
    response = await test_client.delete(
        f"{API_PREFIX}/cart/items?product_id={test_product.id}", headers=auth_headers_customer
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [i["product_id"] for i in data["items"]] == [test_product_2.id]
    assert_totals_consistent(data)

    missing = await test_client.delete(
        f"{API_PREFIX}/cart/items?product_id={test_product.id}", headers=auth_headers_customer
    )
    assert missing.status_code == status.HTTP_404_NOT_FOUND

async def test_clear_cart(test_client: AsyncClient, auth_headers_customer: dict[str, str], test_product: Product):
    no_cart = await test_client.delete(f"{API_PREFIX}/cart/", headers=auth_headers_customer)
    assert no_cart.status_code == status.HTTP_404_NOT_FOUND

    await test_client.post(
        f"{API_PREFIX}/cart/items", json={"product_id": test_product.id, "quantity": 3}, headers=auth_headers_customer
    )
    response = await test_client.delete(f"{API_PREFIX}/cart/", headers=auth_headers_customer)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["items"] == []

    cart = await test_client.get(f"{API_PREFIX}/cart/", headers=auth_headers_customer)
    assert cart.json()["item_count"] == 0
