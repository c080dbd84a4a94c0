"""
Service d'authentification pour l'API.

Contient la logique métier pour:
- L'authentification des utilisateurs
- La vérification des tokens JWT
- L'obtention de l'utilisateur à partir d'un token
"""
import logging
from typing import Optional

from src.auth.security import verify_password, decode_access_token
from src.users.interfaces.repositories import AbstractUserRepository
from src.users.models import User

logger = logging.getLogger(__name__)

class AuthService:
    """Service pour gérer l'authentification des utilisateurs."""

    def __init__(self, user_repository: AbstractUserRepository):
        self.user_repository = user_repository

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authentifie un utilisateur par email et mot de passe.
        Retourne le modèle User (table) si succès, sinon None.
        L'état actif/inactif est vérifié par l'appelant.
        """
        logger.debug(f"[AuthService] Tentative d'authentification pour: {email}")

        user = await self.user_repository.get_by_email(email)
        if user is None:
            logger.warning(f"[AuthService] Utilisateur non trouvé: {email}")
            return None

        if not verify_password(password, user.password_hash):
            logger.warning(f"[AuthService] Mot de passe incorrect pour: {email}")
            return None

        logger.info(f"[AuthService] Authentification réussie pour: {email} (ID: {user.id})")
        return user

    async def get_user_from_token(self, token: str) -> Optional[User]:
        """
        Récupère un utilisateur à partir d'un token JWT.
        Le rôle est relu en base : un changement de rôle prend effet immédiatement.
        """
        token_data = decode_access_token(token)
        if token_data is None:
            logger.warning("[AuthService] Token invalide ou expiré")
            return None

        user = await self.user_repository.get_by_id(token_data.user_id)
        if user is None:
            logger.warning(f"[AuthService] Utilisateur ID {token_data.user_id} du token non trouvé en base")
            return None

        logger.debug(f"[AuthService] Utilisateur récupéré depuis token: ID {user.id}")
        return user
