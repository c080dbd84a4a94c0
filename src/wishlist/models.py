"""
Modèles SQLModel de la liste de souhaits (copie serveur de la liste tenue par le client).
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class WishlistItem(SQLModel, table=True):
    __tablename__ = "wishlist_items"
    __table_args__ = (UniqueConstraint("user_id", "product_id", name="uq_wishlist_user_product"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)


class WishlistItemRead(SQLModel):
    product_id: int
    name: str
    slug: str
    price: Decimal
    original_price: Optional[Decimal] = None
    image: Optional[str] = None
    in_stock: bool
    is_active: bool
    added_at: datetime


class WishlistRead(SQLModel):
    items: List[WishlistItemRead] = []
    count: int = 0


class WishlistExistsResponse(SQLModel):
    product_id: int
    in_wishlist: bool
