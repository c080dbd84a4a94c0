from typing import Optional
from datetime import datetime

from pydantic import field_validator
from sqlmodel import SQLModel, Field

from src.core.schemas import reject_null
from src.categories.config import MAX_NAME_LENGTH, MAX_DESCRIPTION_LENGTH

# --- Modèle de base pour les catégories ---
class CategoryBase(SQLModel):
    """Modèle de base pour les catégories."""
    name: str = Field(index=True, unique=True, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    image: Optional[str] = Field(default=None, max_length=500)
    icon: Optional[str] = Field(default=None, max_length=100)
    parent_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    is_active: bool = Field(default=True)
    sort_order: int = Field(default=0)

# --- Modèle Category (Table) ---
class Category(CategoryBase, table=True):
    """
    Modèle de table pour les catégories.

    Le slug est dérivé du nom et le niveau du parent (0 pour une racine).
    """
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    slug: str = Field(index=True, max_length=120)
    level: int = Field(default=0, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False,
                                 sa_column_kwargs={"onupdate": datetime.utcnow})

# --- Schémas API ---
class CategoryCreate(CategoryBase):
    """Schéma pour la création d'une catégorie."""
    pass

class CategoryRead(CategoryBase):
    """Schéma pour la lecture d'une catégorie."""
    id: int
    slug: str
    level: int
    created_at: datetime
    updated_at: datetime

class CategoryUpdate(SQLModel):
    """Schéma pour la mise à jour d'une catégorie."""
    name: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    image: Optional[str] = None
    icon: Optional[str] = None
    parent_id: Optional[int] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None

    non_nullable = field_validator("name", "is_active", "sort_order")(reject_null)
