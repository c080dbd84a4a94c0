# src/users/models.py
"""
Module définissant les modèles SQLModel pour l'entité User.

Ce module contient :
- UserBase : Classe SQLModel de base avec les champs communs.
- User : Modèle de table SQLModel (table=True) héritant de UserBase.
- UserCreate, UserRegister, UserRead, UserUpdate, UserAdminUpdate : Schémas API.
"""
import re
from typing import Optional
from datetime import datetime

from pydantic import EmailStr, field_validator
from sqlmodel import SQLModel, Field

from src.core.schemas import reject_null
from src.users.config import (
    ALLOWED_ROLES,
    SELF_REGISTRATION_ROLES,
    ROLE_CUSTOMER,
    MIN_PASSWORD_LENGTH,
    MAX_NAME_LENGTH,
    PHONE_REGEX,
)


def _validate_phone(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not re.match(PHONE_REGEX, v):
        raise ValueError("Numéro de téléphone invalide")
    return v


# =====================================================
# Schémas: Utilisateurs (SQLModel approach)
# =====================================================

class UserBase(SQLModel):
    """Modèle SQLModel de base pour un utilisateur (données communes, Pydantic)."""
    email: EmailStr = Field(unique=True, index=True, max_length=255, nullable=False)
    name: str = Field(max_length=MAX_NAME_LENGTH)
    role: str = Field(default=ROLE_CUSTOMER, max_length=20, index=True)
    phone: Optional[str] = Field(default=None, max_length=30)
    avatar: Optional[str] = Field(default=None, max_length=500)

    @field_validator('email')
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


# ----- Modèle de Table -----
class User(UserBase, table=True):
    """Modèle de table SQLModel pour les utilisateurs."""
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True, index=True)
    password_hash: str = Field(nullable=False, max_length=255)
    is_verified: bool = Field(default=False)
    is_active: bool = Field(default=True, index=True)
    last_login: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False,
                                 sa_column_kwargs={"onupdate": datetime.utcnow})


# ----- Schémas API -----
class UserCreate(UserBase):
    """Schéma de création d'un utilisateur par un administrateur (tous rôles)."""
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    is_verified: bool = False

    @field_validator('role')
    @classmethod
    def validate_role(cls, v: str) -> str:
        if v not in ALLOWED_ROLES:
            raise ValueError(f"Rôle invalide. Valeurs possibles: {', '.join(ALLOWED_ROLES)}")
        return v

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return _validate_phone(v)


class UserRegister(UserBase):
    """Schéma d'inscription publique (client ou vendeur uniquement)."""
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)

    @field_validator('role')
    @classmethod
    def validate_role(cls, v: str) -> str:
        if v not in SELF_REGISTRATION_ROLES:
            raise ValueError("Rôle invalide. Doit être customer ou seller")
        return v

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return _validate_phone(v)


class UserRead(UserBase):
    """Schéma Pydantic/SQLModel pour lire les données d'un utilisateur."""
    id: int
    is_verified: bool
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserUpdate(SQLModel):
    """Mise à jour du profil par l'utilisateur lui-même."""
    name: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    phone: Optional[str] = None
    avatar: Optional[str] = None

    non_nullable = field_validator("name")(reject_null)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return _validate_phone(v)


class UserAdminUpdate(UserUpdate):
    """Mise à jour d'un compte par un administrateur."""
    role: Optional[str] = None
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = None

    admin_non_nullable = field_validator("role", "is_active", "is_verified")(reject_null)

    @field_validator('role')
    @classmethod
    def validate_role(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in ALLOWED_ROLES:
            raise ValueError(f"Rôle invalide. Valeurs possibles: {', '.join(ALLOWED_ROLES)}")
        return v
