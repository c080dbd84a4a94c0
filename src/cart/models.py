"""
Modèles SQLModel du panier.

Un utilisateur possède au plus un panier. Après chaque mutation :
total == somme(unit_price * quantity) et item_count == somme(quantity).
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import SQLModel, Field

from src.cart.config import MAX_LINE_QUANTITY


class Cart(SQLModel, table=True):
    __tablename__ = "carts"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True, index=True)
    total: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    item_count: int = Field(default=0)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False,
                                 sa_column_kwargs={"onupdate": datetime.utcnow})


class CartItem(SQLModel, table=True):
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", "variant_id", name="uq_cart_product_variant"),
        CheckConstraint("quantity > 0", name="ck_cart_items_positive_quantity"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    cart_id: int = Field(foreign_key="carts.id", index=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    variant_id: Optional[int] = Field(default=None, foreign_key="product_variants.id")
    quantity: int = Field(default=1)
    # Prix unitaire copié au moment de l'ajout
    unit_price: Decimal = Field(max_digits=10, decimal_places=2)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)


# --- Schémas API ---

class CartItemAdd(SQLModel):
    product_id: int
    quantity: int = Field(default=1, ge=1, le=MAX_LINE_QUANTITY)
    variant_id: Optional[int] = None

class CartItemUpdate(SQLModel):
    """Une quantité nulle ou négative retire la ligne."""
    product_id: int
    variant_id: Optional[int] = None
    quantity: int = Field(le=MAX_LINE_QUANTITY)

class CartItemRead(SQLModel):
    id: int
    product_id: int
    variant_id: Optional[int] = None
    product_name: str
    product_image: Optional[str] = None
    store_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

class CartRead(SQLModel):
    id: Optional[int] = None
    user_id: int
    items: List[CartItemRead] = []
    total: Decimal = Decimal("0.00")
    item_count: int = 0
