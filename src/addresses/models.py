"""
Module définissant les modèles SQLModel pour les adresses de livraison.
"""
import re
from datetime import datetime
from typing import Optional

from pydantic import field_validator
from sqlmodel import SQLModel, Field

from src.core.schemas import reject_null
from src.addresses.config import ALLOWED_ADDRESS_TYPES, ADDRESS_TYPE_HOME
from src.addresses.constants import (
    ERROR_INVALID_PINCODE,
    MAX_NAME_LENGTH,
    MAX_ADDRESS_LENGTH,
    MAX_CITY_LENGTH,
    MAX_STATE_LENGTH,
    PINCODE_REGEX,
)


def _validate_type(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in ALLOWED_ADDRESS_TYPES:
        raise ValueError(f"Type d'adresse invalide. Valeurs possibles: {', '.join(ALLOWED_ADDRESS_TYPES)}")
    return v

def _validate_pincode(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not re.match(PINCODE_REGEX, v):
        raise ValueError(ERROR_INVALID_PINCODE)
    return v


# --- Modèle de base pour les adresses ---
class AddressBase(SQLModel):
    """
    Schéma de base pour les adresses, contenant les champs communs.

    Attributes:
        type: home, work ou other
        name: Nom du destinataire
        phone: Téléphone du destinataire
        address: Rue et numéro
        city: Ville
        state: Région / état
        pincode: Code postal
        is_default: Adresse utilisée par défaut au paiement
    """
    type: str = Field(default=ADDRESS_TYPE_HOME, max_length=20)
    name: str = Field(max_length=MAX_NAME_LENGTH)
    phone: str = Field(max_length=30)
    address: str = Field(max_length=MAX_ADDRESS_LENGTH)
    city: str = Field(max_length=MAX_CITY_LENGTH)
    state: str = Field(max_length=MAX_STATE_LENGTH)
    pincode: str = Field(max_length=10)
    is_default: bool = Field(default=False)

    validate_type = field_validator('type')(_validate_type)
    validate_pincode = field_validator('pincode')(_validate_pincode)

    @field_validator('name', 'address', 'city', 'state')
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or v.strip() == "":
            raise ValueError("Ce champ ne peut pas être vide")
        return v.strip()


# --- Modèle de table pour les adresses ---
class Address(AddressBase, table=True):
    __tablename__ = "addresses"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False,
                                 sa_column_kwargs={"onupdate": datetime.utcnow})


# --- Schémas API pour les adresses ---
class AddressCreate(AddressBase):
    """L'ID utilisateur est fourni par le contexte d'authentification."""
    pass

class AddressRead(AddressBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

class AddressUpdate(SQLModel):
    """Tous les champs sont optionnels (mise à jour partielle)."""
    type: Optional[str] = None
    name: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=MAX_ADDRESS_LENGTH)
    city: Optional[str] = Field(default=None, max_length=MAX_CITY_LENGTH)
    state: Optional[str] = Field(default=None, max_length=MAX_STATE_LENGTH)
    pincode: Optional[str] = None
    is_default: Optional[bool] = None

    validate_type = field_validator('type')(_validate_type)
    validate_pincode = field_validator('pincode')(_validate_pincode)
    non_nullable = field_validator(
        "type", "name", "phone", "address", "city", "state", "pincode", "is_default"
    )(reject_null)
