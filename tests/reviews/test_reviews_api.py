"""
Tests d'intégration des avis produits.
"""
import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession

from src.addresses.models import Address
from src.products.models import Product
from tests.conftest import API_PREFIX

pytestmark = pytest.mark.asyncio


async def post_review(client: AsyncClient, headers: dict[str, str], product_id: int, rating: int, **extra):
    payload = {"product_id": product_id, "rating": rating, **extra}
    return await client.post(f"{API_PREFIX}/reviews/", json=payload, headers=headers)


async def test_create_review_updates_product_rating(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_customer: dict[str, str],
    auth_headers_customer_2: dict[str, str],
    test_product: Product,
):
    first = await post_review(test_client, auth_headers_customer, test_product.id, 5, title="Excellent", comment="Très frais")
    assert first.status_code == status.HTTP_201_CREATED
    data = first.json()
    assert data["is_verified"] is False
    assert data["user_name"] == "Client Test"

    second = await post_review(test_client, auth_headers_customer_2, test_product.id, 2)
    assert second.status_code == status.HTTP_201_CREATED

    await db_session.refresh(test_product)
    assert test_product.review_count == 2
    assert test_product.rating == pytest.approx(3.5)

async def test_duplicate_review_conflict(
    test_client: AsyncClient, db_session: AsyncSession, auth_headers_customer: dict[str, str], test_product: Product
):
    await post_review(test_client, auth_headers_customer, test_product.id, 4)
    duplicate = await post_review(test_client, auth_headers_customer, test_product.id, 1)
    assert duplicate.status_code == status.HTTP_409_CONFLICT

    await db_session.refresh(test_product)
    assert test_product.review_count == 1
    assert test_product.rating == pytest.approx(4.0)

async def test_review_unknown_product(test_client: AsyncClient, auth_headers_customer: dict[str, str]):
    response = await post_review(test_client, auth_headers_customer, 999, 4)
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_rating_out_of_range(
    test_client: AsyncClient, auth_headers_customer: dict[str, str], test_product: Product
):
    response = await post_review(test_client, auth_headers_customer, test_product.id, 6)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

async def test_review_requires_auth(test_client: AsyncClient, test_product: Product):
    response = await test_client.post(f"{API_PREFIX}/reviews/", json={"product_id": test_product.id, "rating": 3})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

async def test_verified_after_delivered_order(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    auth_headers_admin: dict[str, str],
    customer_address: Address,
    test_product: Product,
):
    await test_client.post(
        f"{API_PREFIX}/cart/items", json={"product_id": test_product.id, "quantity": 1}, headers=auth_headers_customer
    )
    order = (await test_client.post(
        f"{API_PREFIX}/orders/",
        json={"delivery_address_id": customer_address.id, "payment_method": "card"},
        headers=auth_headers_customer,
    )).json()
    for next_status in ("confirmed", "packed", "shipped", "delivered"):
        await test_client.patch(
            f"{API_PREFIX}/orders/{order['id']}/status", json={"status": next_status}, headers=auth_headers_admin
        )

    response = await post_review(test_client, auth_headers_customer, test_product.id, 5)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["is_verified"] is True
    assert response.json()["order_id"] == order["id"]

async def test_list_reviews_filters(
    test_client: AsyncClient,
    auth_headers_customer: dict[str, str],
    auth_headers_customer_2: dict[str, str],
    test_product: Product,
    test_product_2: Product,
):
    await post_review(test_client, auth_headers_customer, test_product.id, 5)
    await post_review(test_client, auth_headers_customer_2, test_product.id, 3)
    await post_review(test_client, auth_headers_customer, test_product_2.id, 5)

    by_product = await test_client.get(f"{API_PREFIX}/reviews/?product_id={test_product.id}")
    assert by_product.status_code == status.HTTP_200_OK
    assert by_product.json()["total"] == 2

    by_rating = await test_client.get(f"{API_PREFIX}/reviews/?rating=5")
    assert by_rating.json()["total"] == 2
    assert all(r["rating"] == 5 for r in by_rating.json()["items"])

async def test_only_author_can_update(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_customer: dict[str, str],
    auth_headers_customer_2: dict[str, str],
    test_product: Product,
):
    review = (await post_review(test_client, auth_headers_customer, test_product.id, 2)).json()

    foreign = await test_client.put(
        f"{API_PREFIX}/reviews/{review['id']}", json={"rating": 5}, headers=auth_headers_customer_2
    )
    assert foreign.status_code == status.HTTP_404_NOT_FOUND

    own = await test_client.put(
        f"{API_PREFIX}/reviews/{review['id']}", json={"rating": 4, "comment": "Finalement bien"},
        headers=auth_headers_customer,
    )
    assert own.status_code == status.HTTP_200_OK
    assert own.json()["rating"] == 4
    await db_session.refresh(test_product)
    assert test_product.rating == pytest.approx(4.0)

async def test_delete_by_author_and_admin(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_customer: dict[str, str],
    auth_headers_customer_2: dict[str, str],
    auth_headers_admin: dict[str, str],
    test_product: Product,
):
    mine = (await post_review(test_client, auth_headers_customer, test_product.id, 5)).json()
    theirs = (await post_review(test_client, auth_headers_customer_2, test_product.id, 1)).json()

    forbidden = await test_client.delete(f"{API_PREFIX}/reviews/{theirs['id']}", headers=auth_headers_customer)
    assert forbidden.status_code == status.HTTP_404_NOT_FOUND

    deleted = await test_client.delete(f"{API_PREFIX}/reviews/{mine['id']}", headers=auth_headers_customer)
    assert deleted.status_code == status.HTTP_204_NO_CONTENT
    moderated = await test_client.delete(f"{API_PREFIX}/reviews/{theirs['id']}", headers=auth_headers_admin)
    assert moderated.status_code == status.HTTP_204_NO_CONTENT

    await db_session.refresh(test_product)
    assert test_product.review_count == 0
    assert test_product.rating == 0.0
