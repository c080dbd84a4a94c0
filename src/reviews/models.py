"""
Modèles SQLModel des avis produits.

Un utilisateur ne peut laisser qu'un seul avis par produit.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field

from src.reviews.config import MIN_RATING, MAX_RATING, MAX_TITLE_LENGTH, MAX_COMMENT_LENGTH


class ReviewBase(SQLModel):
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    title: str = Field(default="", max_length=MAX_TITLE_LENGTH)
    comment: str = Field(default="", max_length=MAX_COMMENT_LENGTH)


class Review(ReviewBase, table=True):
    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("user_id", "product_id", name="uq_review_user_product"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    # Commande livrée ayant servi à vérifier l'achat
    order_id: Optional[int] = Field(default=None, foreign_key="orders.id")
    is_verified: bool = Field(default=False)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False,
                                 sa_column_kwargs={"onupdate": datetime.utcnow})


class ReviewCreate(ReviewBase):
    product_id: int


class ReviewUpdate(SQLModel):
    rating: Optional[int] = Field(default=None, ge=MIN_RATING, le=MAX_RATING)
    title: Optional[str] = Field(default=None, max_length=MAX_TITLE_LENGTH)
    comment: Optional[str] = Field(default=None, max_length=MAX_COMMENT_LENGTH)


class ReviewRead(ReviewBase):
    id: int
    user_id: int
    product_id: int
    order_id: Optional[int] = None
    is_verified: bool
    created_at: datetime
    updated_at: datetime
    # Renseigné à partir de l'auteur
    user_name: Optional[str] = None
    user_avatar: Optional[str] = None
