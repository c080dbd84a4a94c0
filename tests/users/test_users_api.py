"""
Tests d'intégration pour les endpoints de l'API du module Utilisateur.
"""
import pytest
from httpx import AsyncClient
from fastapi import status

from src.users.models import User
from tests.conftest import API_PREFIX

pytestmark = pytest.mark.asyncio

# --- Profil (/users/me) ---

async def test_read_my_profile(test_client: AsyncClient, auth_headers_customer: dict[str, str], customer_user: User):
    response = await test_client.get(f"{API_PREFIX}/users/me", headers=auth_headers_customer)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["email"] == customer_user.email

async def test_update_my_profile(test_client: AsyncClient, auth_headers_customer: dict[str, str]):
    response = await test_client.patch(
        f"{API_PREFIX}/users/me",
        json={"name": "Nom Modifié", "phone": "+33 6 11 22 33 44"},
        headers=auth_headers_customer,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Nom Modifié"
    assert data["phone"] == "+33 6 11 22 33 44"
    # Le rôle n'est pas modifiable par l'utilisateur
    assert data["role"] == "customer"

async def test_update_my_profile_invalid_phone(test_client: AsyncClient, auth_headers_customer: dict[str, str]):
    response = await test_client.patch(
        f"{API_PREFIX}/users/me", json={"phone": "appelez-moi"}, headers=auth_headers_customer
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

async def test_update_my_profile_null_name(test_client: AsyncClient, auth_headers_customer: dict[str, str]):
    response = await test_client.patch(
        f"{API_PREFIX}/users/me", json={"name": None}, headers=auth_headers_customer
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    # Le téléphone reste effaçable
    cleared = await test_client.patch(
        f"{API_PREFIX}/users/me", json={"phone": None}, headers=auth_headers_customer
    )
    assert cleared.status_code == status.HTTP_200_OK
    assert cleared.json()["phone"] is None

# --- Administration ---

async def test_list_users_admin(
    test_client: AsyncClient,
    auth_headers_admin: dict[str, str],
    customer_user: User,
    seller_user: User,
):
    response = await test_client.get(f"{API_PREFIX}/users/", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 3
    emails = [u["email"] for u in data["items"]]
    assert customer_user.email in emails
    assert "password_hash" not in data["items"][0]

    filtered = await test_client.get(f"{API_PREFIX}/users/?role=seller", headers=auth_headers_admin)
    assert [u["email"] for u in filtered.json()["items"]] == [seller_user.email]

async def test_list_users_forbidden_for_customer(test_client: AsyncClient, auth_headers_customer: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/users/", headers=auth_headers_customer)
    assert response.status_code == status.HTTP_403_FORBIDDEN

async def test_list_users_forbidden_for_seller(test_client: AsyncClient, auth_headers_seller: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/users/", headers=auth_headers_seller)
    assert response.status_code == status.HTTP_403_FORBIDDEN

async def test_admin_creates_user(test_client: AsyncClient, auth_headers_admin: dict[str, str]):
    payload = {"email": "second.admin@example.com", "password": "secret123", "name": "Second", "role": "admin"}
    response = await test_client.post(f"{API_PREFIX}/users/", json=payload, headers=auth_headers_admin)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["role"] == "admin"

async def test_admin_create_duplicate_email(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], customer_user: User
):
    payload = {"email": customer_user.email, "password": "secret123", "name": "Doublon"}
    response = await test_client.post(f"{API_PREFIX}/users/", json=payload, headers=auth_headers_admin)
    assert response.status_code == status.HTTP_409_CONFLICT

async def test_admin_updates_role(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], customer_user: User
):
    response = await test_client.patch(
        f"{API_PREFIX}/users/{customer_user.id}", json={"role": "seller"}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["role"] == "seller"

async def test_admin_cannot_change_own_role(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], admin_user: User
):
    response = await test_client.patch(
        f"{API_PREFIX}/users/{admin_user.id}", json={"role": "customer"}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_admin_deactivation_blocks_access(
    test_client: AsyncClient,
    auth_headers_admin: dict[str, str],
    auth_headers_customer: dict[str, str],
    customer_user: User,
):
    response = await test_client.patch(
        f"{API_PREFIX}/users/{customer_user.id}", json={"is_active": False}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_200_OK

    me = await test_client.get(f"{API_PREFIX}/users/me", headers=auth_headers_customer)
    assert me.status_code == status.HTTP_403_FORBIDDEN

async def test_admin_deletes_user(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], customer_user_2: User
):
    response = await test_client.delete(f"{API_PREFIX}/users/{customer_user_2.id}", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    missing = await test_client.get(f"{API_PREFIX}/users/{customer_user_2.id}", headers=auth_headers_admin)
    assert missing.status_code == status.HTTP_404_NOT_FOUND

async def test_admin_cannot_delete_self(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], admin_user: User
):
    response = await test_client.delete(f"{API_PREFIX}/users/{admin_user.id}", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
