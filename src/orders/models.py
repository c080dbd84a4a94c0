"""
Modèles SQLModel des commandes.

Les lignes de commande figent le nom et le prix du produit au moment de
l'achat : une modification ultérieure du catalogue ne les affecte pas.
Les commandes ne sont jamais supprimées.
"""
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from pydantic import field_validator
from sqlmodel import SQLModel, Field

from src.orders.config import (
    ALLOWED_ORDER_STATUS,
    ALLOWED_PAYMENT_STATUS,
    ALLOWED_PAYMENT_METHODS,
    ORDER_STATUS_PENDING,
    PAYMENT_STATUS_PENDING,
)

# --- Modèles de base pour OrderItem ---

class OrderItemBase(SQLModel):
    """Base pour les champs de la table OrderItem."""
    product_id: int = Field(foreign_key="products.id", index=True)
    variant_id: Optional[int] = Field(default=None, index=True)
    store_id: int = Field(foreign_key="stores.id", index=True)
    product_name: str = Field(max_length=255)
    variant_label: Optional[str] = Field(default=None, max_length=160)
    quantity: int = Field(gt=0)
    # Prix figé au moment de la commande
    unit_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    total: Decimal = Field(ge=0, max_digits=12, decimal_places=2)

class OrderItem(OrderItemBase, table=True):
    """Modèle de table pour les lignes de commande."""
    __tablename__ = "order_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)

# --- Modèles de base pour Order ---

class OrderBase(SQLModel):
    """Base pour les champs de la table Order."""
    status: str = Field(default=ORDER_STATUS_PENDING, max_length=20, index=True)
    payment_status: str = Field(default=PAYMENT_STATUS_PENDING, max_length=20)
    payment_method: str = Field(max_length=20)
    subtotal: Decimal = Field(max_digits=12, decimal_places=2)
    tax: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    delivery_fee: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    discount: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    total: Decimal = Field(max_digits=12, decimal_places=2)
    delivery_address_id: int = Field(foreign_key="addresses.id", index=True)
    notes: Optional[str] = Field(default=None, max_length=500)
    estimated_delivery: Optional[datetime] = None
    actual_delivery: Optional[datetime] = None
    tracking_number: Optional[str] = Field(default=None, max_length=100)
    tracking_url: Optional[str] = Field(default=None, max_length=500)

class Order(OrderBase, table=True):
    """Modèle de table pour les commandes."""
    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_number: str = Field(unique=True, index=True, max_length=40)
    user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False,
                                 sa_column_kwargs={"onupdate": datetime.utcnow})

# --- Schémas API ---

class OrderItemRead(OrderItemBase):
    id: int
    order_id: int

class OrderCreate(SQLModel):
    """Schéma pour passer commande à partir du panier."""
    delivery_address_id: int
    payment_method: str
    notes: Optional[str] = Field(default=None, max_length=500)
    clear_cart: bool = True

    @field_validator('payment_method')
    @classmethod
    def validate_payment_method(cls, v: str) -> str:
        if v not in ALLOWED_PAYMENT_METHODS:
            raise ValueError(f"Moyen de paiement invalide. Valeurs possibles: {', '.join(ALLOWED_PAYMENT_METHODS)}")
        return v

class OrderRead(OrderBase):
    id: int
    order_number: str
    user_id: int
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemRead] = []

class OrderStatusUpdate(SQLModel):
    status: str
    tracking_number: Optional[str] = Field(default=None, max_length=100)
    tracking_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator('status')
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in ALLOWED_ORDER_STATUS:
            raise ValueError(f"Statut invalide. Valeurs possibles: {', '.join(ALLOWED_ORDER_STATUS)}")
        return v

class OrderPaymentUpdate(SQLModel):
    payment_status: Optional[str] = None
    tracking_number: Optional[str] = Field(default=None, max_length=100)
    tracking_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator('payment_status')
    @classmethod
    def validate_payment_status(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in ALLOWED_PAYMENT_STATUS:
            raise ValueError(f"Statut de paiement invalide. Valeurs possibles: {', '.join(ALLOWED_PAYMENT_STATUS)}")
        return v
