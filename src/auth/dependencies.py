"""
Module définissant les dépendances FastAPI pour l'authentification.

Fournit des dépendances pour:
- Le service d'authentification (AuthService)
- L'obtention de l'utilisateur courant à partir du token JWT
- La vérification des rôles (admin, vendeur, liste de rôles)
"""
import logging
from typing import Annotated, Callable, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from src.auth.service import AuthService
from src.auth.config import OAUTH2_TOKEN_URL
from src.auth.constants import ERROR_ADMIN_REQUIRED, ERROR_SELLER_REQUIRED
from src.auth.exceptions import (
    TokenMissingException,
    TokenInvalidException,
    InactiveUserException,
    PermissionDeniedException,
)
from src.users.config import ROLE_ADMIN, ROLE_SELLER
from src.users.dependencies import UserRepositoryDep
from src.users.models import UserRead

logger = logging.getLogger(__name__)

# --- Dépendances OAuth2 ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=OAUTH2_TOKEN_URL, auto_error=False)


def get_auth_service(user_repository: UserRepositoryDep) -> AuthService:
    """Fournit une instance du service d'authentification."""
    logger.debug("Fourniture de AuthService avec UserRepository injecté")
    return AuthService(user_repository=user_repository)

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_current_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    auth_service: AuthServiceDep,
) -> UserRead:
    """
    Vérifie le token JWT et retourne l'utilisateur courant.

    Raises:
        TokenMissingException: Si le token est manquant
        TokenInvalidException: Si le token est invalide ou l'utilisateur introuvable
    """
    if token is None:
        logger.warning("Token manquant dans la requête.")
        raise TokenMissingException()

    user = await auth_service.get_user_from_token(token)
    if user is None:
        logger.warning("Token invalide ou utilisateur non trouvé.")
        raise TokenInvalidException()

    return UserRead.model_validate(user)

async def get_current_active_user(
    current_user: Annotated[UserRead, Depends(get_current_user)]
) -> UserRead:
    """
    Vérifie que l'utilisateur courant est actif.

    Raises:
        InactiveUserException: Si l'utilisateur est désactivé
    """
    if not current_user.is_active:
        logger.warning(f"Tentative d'accès par un utilisateur inactif: ID {current_user.id}")
        raise InactiveUserException()
    return current_user

CurrentUserDep = Annotated[UserRead, Depends(get_current_active_user)]


async def get_current_admin_user(current_user: CurrentUserDep) -> UserRead:
    """Vérifie que l'utilisateur courant est un administrateur."""
    if current_user.role != ROLE_ADMIN:
        logger.warning(f"Tentative d'accès à une ressource admin par un utilisateur non-admin: ID {current_user.id}")
        raise PermissionDeniedException(ERROR_ADMIN_REQUIRED)
    return current_user

AdminUserDep = Annotated[UserRead, Depends(get_current_admin_user)]


async def get_current_seller_user(current_user: CurrentUserDep) -> UserRead:
    """Vérifie que l'utilisateur courant est un vendeur."""
    if current_user.role != ROLE_SELLER:
        logger.warning(f"Tentative d'accès à une ressource vendeur par: ID {current_user.id} ({current_user.role})")
        raise PermissionDeniedException(ERROR_SELLER_REQUIRED)
    return current_user

SellerUserDep = Annotated[UserRead, Depends(get_current_seller_user)]


def require_roles(*roles: str) -> Callable:
    """Construit une dépendance qui n'accepte que les rôles fournis."""
    async def _check_role(current_user: CurrentUserDep) -> UserRead:
        if current_user.role not in roles:
            logger.warning(f"Rôle '{current_user.role}' refusé (attendu: {roles}) pour user ID {current_user.id}")
            raise PermissionDeniedException()
        return current_user
    return _check_role
