"""
Module définissant les routes API FastAPI pour les utilisateurs.

Contient les endpoints pour:
- /users/me : Consultation et mise à jour du profil de l'utilisateur connecté.
- /users/ : Gestion des comptes par un administrateur.
"""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from src.auth.dependencies import AdminUserDep, CurrentUserDep
from src.core.schemas import PaginatedResponse, PaginationParams
from src.users.dependencies import UserServiceDep
from src.users.exceptions import (
    UserError,
    UserNotFoundError,
    UserAlreadyExistsError,
    SelfModificationForbiddenError,
    UserInUseError,
)
from src.users.models import UserCreate, UserRead, UserUpdate, UserAdminUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_user_service_errors(e: Exception):
    """Traduit les exceptions du service utilisateur en HTTPException."""
    if isinstance(e, UserNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, (UserAlreadyExistsError, UserInUseError)):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    if isinstance(e, SelfModificationForbiddenError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    if isinstance(e, UserError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    logger.error(f"[Router] Erreur inattendue dans le module utilisateur: {e}", exc_info=True)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")


# --- Profil de l'utilisateur connecté ---

@router.get("/me", response_model=UserRead, tags=["Users"])
async def read_my_profile(current_user: CurrentUserDep):
    """Récupère le profil de l'utilisateur connecté."""
    return current_user

@router.patch("/me", response_model=UserRead, tags=["Users"])
async def update_my_profile(
    user_update: UserUpdate,
    current_user: CurrentUserDep,
    user_service: UserServiceDep,
):
    """Met à jour le nom, le téléphone ou l'avatar de l'utilisateur connecté."""
    logger.info("[Router] Mise à jour profil pour user ID: %s", current_user.id)
    try:
        return await user_service.update_profile(current_user.id, user_update)
    except Exception as e:
        handle_user_service_errors(e)


# --- Administration ---

@router.get("/", response_model=PaginatedResponse[UserRead], tags=["Users - Admin"])
async def list_users(
    admin: AdminUserDep,
    user_service: UserServiceDep,
    pagination: PaginationParams,
    role: Optional[str] = Query(None, description="Filtrer par rôle"),
    is_active: Optional[bool] = Query(None, description="Filtrer par statut actif"),
):
    page, limit = pagination
    logger.info(f"[Router] Admin {admin.id} liste les utilisateurs (page={page}, role={role})")
    return await user_service.list_users(page=page, limit=limit, role=role, is_active=is_active)

@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED, tags=["Users - Admin"])
async def create_user(
    user_in: UserCreate,
    admin: AdminUserDep,
    user_service: UserServiceDep,
):
    """Crée un compte utilisateur de n'importe quel rôle."""
    logger.info(f"[Router] Admin {admin.id} crée l'utilisateur {user_in.email}")
    try:
        return await user_service.create_user(user_in)
    except Exception as e:
        handle_user_service_errors(e)

@router.get("/{user_id}", response_model=UserRead, tags=["Users - Admin"])
async def get_user(user_id: int, admin: AdminUserDep, user_service: UserServiceDep):
    try:
        return await user_service.get_user_by_id(user_id)
    except Exception as e:
        handle_user_service_errors(e)

@router.patch("/{user_id}", response_model=UserRead, tags=["Users - Admin"])
async def update_user(
    user_id: int,
    user_update: UserAdminUpdate,
    admin: AdminUserDep,
    user_service: UserServiceDep,
):
    """Met à jour un utilisateur (rôle, activation, vérification, profil)."""
    try:
        return await user_service.admin_update_user(user_id, user_update, admin_id=admin.id)
    except Exception as e:
        handle_user_service_errors(e)

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["Users - Admin"])
async def delete_user(user_id: int, admin: AdminUserDep, user_service: UserServiceDep):
    try:
        await user_service.delete_user(user_id, admin_id=admin.id)
    except Exception as e:
        handle_user_service_errors(e)

user_router = router
