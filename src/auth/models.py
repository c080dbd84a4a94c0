"""
Module définissant les modèles SQLModel pour l'authentification.

Ce module contient :
- TokenData : Schéma pour les données contenues dans le token JWT.
- Token : Schéma pour la réponse du token d'accès.
- RegisterResponse : Réponse de l'inscription (utilisateur + token).
"""
from typing import Optional

from sqlmodel import SQLModel

from src.users.models import UserRead

# =====================================================
# Schémas: Authentification (Token)
# =====================================================

class TokenData(SQLModel):
    """Schéma pour les données contenues dans le token JWT."""
    user_id: int
    email: Optional[str] = None
    role: Optional[str] = None

class Token(SQLModel):
    """Schéma pour la réponse du token d'accès."""
    access_token: str
    token_type: str = "bearer"

class RegisterResponse(Token):
    user: UserRead
