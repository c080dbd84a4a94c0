"""
Module définissant les modèles SQLModel pour les boutiques (multi-vendeurs).

Chaque vendeur possède au plus une boutique.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, field_validator
from sqlmodel import SQLModel, Field

from src.core.schemas import reject_null
from src.stores.config import MAX_NAME_LENGTH, MAX_DESCRIPTION_LENGTH


class StoreBase(SQLModel):
    name: str = Field(max_length=MAX_NAME_LENGTH, index=True)
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    logo: Optional[str] = Field(default=None, max_length=500)
    banner: Optional[str] = Field(default=None, max_length=500)
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    contact_email: EmailStr = Field(max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=30)
    # Adresse de la boutique
    street: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    pincode: Optional[str] = Field(default=None, max_length=10)
    country: Optional[str] = Field(default=None, max_length=100)
    # Paramètres
    allow_reviews: bool = Field(default=True)
    auto_accept_orders: bool = Field(default=False)
    minimum_order_amount: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)


class Store(StoreBase, table=True):
    __tablename__ = "stores"

    id: Optional[int] = Field(default=None, primary_key=True)
    seller_id: int = Field(foreign_key="users.id", unique=True, index=True)
    slug: str = Field(unique=True, index=True, max_length=120)
    rating: float = Field(default=0.0)
    review_count: int = Field(default=0)
    is_verified: bool = Field(default=False)
    is_active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False,
                                 sa_column_kwargs={"onupdate": datetime.utcnow})


# --- Schémas API ---
class StoreCreate(StoreBase):
    pass

class StoreRead(StoreBase):
    id: int
    seller_id: int
    slug: str
    rating: float
    review_count: int
    is_verified: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

class StoreUpdate(SQLModel):
    """Champs modifiables par le vendeur (pas de vérification ni de note)."""
    name: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    logo: Optional[str] = None
    banner: Optional[str] = None
    category_id: Optional[int] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    country: Optional[str] = None
    allow_reviews: Optional[bool] = None
    auto_accept_orders: Optional[bool] = None
    minimum_order_amount: Optional[Decimal] = Field(default=None, ge=0)

    non_nullable = field_validator(
        "name", "contact_email", "allow_reviews", "auto_accept_orders", "minimum_order_amount"
    )(reject_null)

class StoreAdminUpdate(StoreUpdate):
    is_verified: Optional[bool] = None
    is_active: Optional[bool] = None

    admin_non_nullable = field_validator("is_verified", "is_active")(reject_null)
