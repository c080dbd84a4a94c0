# Standard Library
from decimal import Decimal
from typing import AsyncGenerator

# Third-Party Libraries
import pytest_asyncio

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

# First-Party Libraries
from src.main import app
from src.config import settings
from src.database import get_db_session
from src.auth.security import get_password_hash, create_access_token
from src.users.config import ROLE_ADMIN, ROLE_SELLER, ROLE_CUSTOMER
from src.users.models import User
from src.addresses.models import Address
from src.categories.models import Category
from src.stores.models import Store
from src.products.models import Product, ProductVariant
# Enregistrement des tables restantes dans SQLModel.metadata
from src.cart.models import Cart, CartItem  # noqa: F401
from src.orders.models import Order, OrderItem  # noqa: F401
from src.reviews.models import Review  # noqa: F401
from src.wishlist.models import WishlistItem  # noqa: F401

# URL de base pour la DB en mémoire
TEST_DATABASE_BASE_URL = "sqlite+aiosqlite:///:memory:"

API_PREFIX = settings.API_V1_PREFIX

# --- Fixtures de Base ---

@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Crée un engine, des tables, et fournit une session DB en mémoire pour chaque test."""
    engine: AsyncEngine = create_async_engine(TEST_DATABASE_BASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with TestingSessionLocal() as session:
        yield session

    await engine.dispose()

@pytest_asyncio.fixture(scope="function")
async def test_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Fournit un AsyncClient httpx qui utilise la session DB de test isolée."""
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    del app.dependency_overrides[get_db_session]

# --- Fixtures Utilisateur et Authentification ---

async def _create_user(db_session: AsyncSession, email: str, password: str, name: str, role: str) -> User:
    user = User(
        email=email,
        password_hash=get_password_hash(password),
        name=name,
        role=role,
        is_verified=True,
    )
    db_session.add(user)
    await db_session.commit()  # Commit pour obtenir l'ID
    await db_session.refresh(user)
    return user

def _headers(user: User) -> dict[str, str]:
    access_token = create_access_token(user_id=user.id, email=user.email, role=user.role)
    return {"Authorization": f"Bearer {access_token}"}

@pytest_asyncio.fixture(scope="function")
async def customer_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "client@example.com", "clientpassword", "Client Test", ROLE_CUSTOMER)

@pytest_asyncio.fixture(scope="function")
async def customer_user_2(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "client2@example.com", "clientpassword2", "Client Deux", ROLE_CUSTOMER)

@pytest_asyncio.fixture(scope="function")
async def seller_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "vendeur@example.com", "sellerpassword", "Vendeur Test", ROLE_SELLER)

@pytest_asyncio.fixture(scope="function")
async def seller_user_2(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "vendeur2@example.com", "sellerpassword2", "Vendeur Deux", ROLE_SELLER)

@pytest_asyncio.fixture(scope="function")
async def admin_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "admin@example.com", "adminpassword", "Admin Test", ROLE_ADMIN)

@pytest_asyncio.fixture(scope="function")
async def auth_headers_customer(customer_user: User) -> dict[str, str]:
    return _headers(customer_user)

@pytest_asyncio.fixture(scope="function")
async def auth_headers_customer_2(customer_user_2: User) -> dict[str, str]:
    return _headers(customer_user_2)

@pytest_asyncio.fixture(scope="function")
async def auth_headers_seller(seller_user: User) -> dict[str, str]:
    return _headers(seller_user)

@pytest_asyncio.fixture(scope="function")
async def auth_headers_seller_2(seller_user_2: User) -> dict[str, str]:
    return _headers(seller_user_2)

@pytest_asyncio.fixture(scope="function")
async def auth_headers_admin(admin_user: User) -> dict[str, str]:
    return _headers(admin_user)

# --- Fixtures Catalogue ---

@pytest_asyncio.fixture(scope="function")
async def test_category(db_session: AsyncSession) -> Category:
    category = Category(name="Fruits et Légumes", slug="fruits-et-legumes", level=0)
    db_session.add(category)
    await db_session.commit()
    await db_session.refresh(category)
    return category

@pytest_asyncio.fixture(scope="function")
async def test_store(db_session: AsyncSession, seller_user: User, test_category: Category) -> Store:
    store = Store(
        name="Épicerie du Coin",
        slug="epicerie-du-coin",
        seller_id=seller_user.id,
        contact_email="contact@epicerie.example.com",
        category_id=test_category.id,
        is_verified=True,
    )
    db_session.add(store)
    await db_session.commit()
    await db_session.refresh(store)
    return store

@pytest_asyncio.fixture(scope="function")
async def test_product(db_session: AsyncSession, test_store: Store, test_category: Category) -> Product:
    """Produit à 20.00 avec 10 unités en stock."""
    product = Product(
        name="Pommes Bio",
        slug="pommes-bio",
        price=Decimal("20.00"),
        stock=10,
        store_id=test_store.id,
        category_id=test_category.id,
        images=["https://img.example.com/pommes.jpg"],
    )
    db_session.add(product)
    await db_session.commit()
    await db_session.refresh(product)
    return product

@pytest_asyncio.fixture(scope="function")
async def test_product_2(db_session: AsyncSession, test_store: Store, test_category: Category) -> Product:
    """Produit à 7.50 avec 3 unités en stock."""
    product = Product(
        name="Miel de Lavande",
        slug="miel-de-lavande",
        price=Decimal("7.50"),
        stock=3,
        store_id=test_store.id,
        category_id=test_category.id,
    )
    db_session.add(product)
    await db_session.commit()
    await db_session.refresh(product)
    return product

@pytest_asyncio.fixture(scope="function")
async def test_variant(db_session: AsyncSession, test_product: Product) -> ProductVariant:
    """Variante 'Poids: 2kg' à 35.00 avec 4 unités en stock."""
    variant = ProductVariant(
        product_id=test_product.id,
        name="Poids",
        value="2kg",
        price=Decimal("35.00"),
        stock=4,
    )
    db_session.add(variant)
    await db_session.commit()
    await db_session.refresh(variant)
    return variant

@pytest_asyncio.fixture(scope="function")
async def customer_address(db_session: AsyncSession, customer_user: User) -> Address:
    address = Address(
        user_id=customer_user.id,
        name="Client Test",
        phone="+33612345678",
        address="12 rue des Lilas",
        city="Lyon",
        state="Rhône",
        pincode="69001",
        is_default=True,
    )
    db_session.add(address)
    await db_session.commit()
    await db_session.refresh(address)
    return address
