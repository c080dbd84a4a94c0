"""
Modèles SQLModel du catalogue : produits et variantes.

Le prix d'une variante, s'il est renseigné, remplace celui du produit.
Les stocks ne peuvent jamais devenir négatifs (contrainte CHECK).
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import field_validator
from sqlalchemy import JSON, CheckConstraint
from sqlmodel import SQLModel, Field

from src.core.schemas import reject_null
from src.products.config import MAX_NAME_LENGTH, MAX_SHORT_DESCRIPTION_LENGTH


# --- Modèle ProductVariant SQLModel ---

class ProductVariantBase(SQLModel):
    name: str = Field(max_length=50)       # ex: "Taille", "Poids"
    value: str = Field(max_length=100)     # ex: "XL", "500g"
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(default=0, ge=0)
    sku: Optional[str] = Field(default=None, max_length=100)

class ProductVariant(ProductVariantBase, table=True):
    __tablename__ = "product_variants"
    __table_args__ = (CheckConstraint("stock >= 0", name="ck_product_variants_stock_non_negative"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

class ProductVariantCreate(ProductVariantBase):
    pass

class ProductVariantRead(ProductVariantBase):
    id: int
    product_id: int


# --- Modèle Product SQLModel ---

class ProductBase(SQLModel):
    name: str = Field(index=True, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None)
    short_description: Optional[str] = Field(default=None, max_length=MAX_SHORT_DESCRIPTION_LENGTH)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    original_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    brand: Optional[str] = Field(default=None, max_length=100)
    stock: int = Field(default=0, ge=0)
    sku: Optional[str] = Field(default=None, max_length=100)
    weight: Optional[float] = Field(default=None, ge=0)
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    is_active: bool = Field(default=True, index=True)
    is_featured: bool = Field(default=False, index=True)

class Product(ProductBase, table=True):
    __tablename__ = "products"
    __table_args__ = (CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = Field(foreign_key="stores.id", index=True)
    slug: str = Field(index=True, max_length=300)
    images: List[str] = Field(default_factory=list, sa_type=JSON)
    tags: List[str] = Field(default_factory=list, sa_type=JSON)
    rating: float = Field(default=0.0)
    review_count: int = Field(default=0)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False,
                                 sa_column_kwargs={"onupdate": datetime.utcnow})


# Schémas API pour Product
class ProductCreate(ProductBase):
    # Obligatoire pour un administrateur, ignoré pour un vendeur (sa boutique est utilisée)
    store_id: Optional[int] = None
    images: List[str] = []
    tags: List[str] = []
    variants: List[ProductVariantCreate] = []

class ProductRead(ProductBase):
    id: int
    store_id: int
    slug: str
    images: List[str] = []
    tags: List[str] = []
    rating: float
    review_count: int
    created_at: datetime
    updated_at: datetime
    variants: List[ProductVariantRead] = []

class ProductUpdate(SQLModel):
    name: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = None
    short_description: Optional[str] = Field(default=None, max_length=MAX_SHORT_DESCRIPTION_LENGTH)
    price: Optional[Decimal] = Field(default=None, ge=0)
    original_price: Optional[Decimal] = Field(default=None, ge=0)
    brand: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    sku: Optional[str] = None
    weight: Optional[float] = Field(default=None, ge=0)
    category_id: Optional[int] = None
    images: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None

    non_nullable = field_validator("name", "price", "stock", "images", "tags", "is_active", "is_featured")(reject_null)
