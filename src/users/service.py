"""
Module contenant la logique métier (services) pour les utilisateurs.
"""
import logging
from datetime import datetime
from typing import List, Optional

from src.auth.security import get_password_hash
from src.core.schemas import PaginatedResponse, page_to_offset
from src.users.config import ROLE_CUSTOMER
from src.users.exceptions import (
    UserAlreadyExistsError,
    UserNotFoundError,
    SelfModificationForbiddenError,
)
from src.users.interfaces.repositories import AbstractUserRepository
from src.users.models import (
    User, UserCreate, UserRegister, UserRead, UserUpdate, UserAdminUpdate
)

logger = logging.getLogger(__name__)


class UserService:
    """Service pour gérer les opérations sur les utilisateurs via le repository."""

    def __init__(self, repository: AbstractUserRepository):
        self.repository = repository

    async def _create(self, data: dict, password: str) -> UserRead:
        if await self.repository.email_exists(data["email"]):
            logger.warning(f"[UserService] Email déjà existant: {data['email']}")
            raise UserAlreadyExistsError(data["email"])

        data["password_hash"] = get_password_hash(password)
        created = await self.repository.create(data)
        logger.info(f"[UserService] Utilisateur créé avec ID: {created.id} (rôle {created.role})")
        return UserRead.model_validate(created)

    async def register_user(self, user_data: UserRegister) -> UserRead:
        """Inscription publique. Les clients sont vérifiés d'office, les vendeurs attendent une validation."""
        logger.debug(f"[UserService] Inscription: {user_data.email} ({user_data.role})")
        data = user_data.model_dump(exclude={"password"})
        data["is_verified"] = user_data.role == ROLE_CUSTOMER
        data["is_active"] = True
        return await self._create(data, user_data.password)

    async def create_user(self, user_data: UserCreate) -> UserRead:
        """Création d'un compte (tous rôles) par un administrateur."""
        logger.debug(f"[UserService] Création admin: {user_data.email} ({user_data.role})")
        data = user_data.model_dump(exclude={"password"})
        return await self._create(data, user_data.password)

    async def get_user_by_id(self, user_id: int) -> UserRead:
        user = await self.repository.get_by_id_as_read_schema(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def list_users(
        self,
        page: int,
        limit: int,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> PaginatedResponse[UserRead]:
        users, total = await self.repository.list(
            offset=page_to_offset(page, limit), limit=limit, role=role, is_active=is_active
        )
        return PaginatedResponse[UserRead].build(items=users, total=total, page=page, limit=limit)

    async def update_profile(self, user_id: int, user_update: UserUpdate) -> UserRead:
        """Mise à jour du profil par l'utilisateur lui-même (nom, téléphone, avatar)."""
        user = await self._get_orm(user_id)
        update_data = user_update.model_dump(exclude_unset=True)
        updated = await self.repository.update(user, update_data)
        logger.info(f"[UserService] Profil mis à jour pour user ID {user_id}")
        return UserRead.model_validate(updated)

    async def admin_update_user(self, user_id: int, user_update: UserAdminUpdate, admin_id: int) -> UserRead:
        update_data = user_update.model_dump(exclude_unset=True)
        if user_id == admin_id and "role" in update_data:
            logger.warning(f"[UserService] L'admin {admin_id} tente de modifier son propre rôle.")
            raise SelfModificationForbiddenError("Impossible de modifier votre propre rôle.")

        user = await self._get_orm(user_id)
        updated = await self.repository.update(user, update_data)
        logger.info(f"[UserService] User ID {user_id} mis à jour par admin {admin_id}: {list(update_data)}")
        return UserRead.model_validate(updated)

    async def delete_user(self, user_id: int, admin_id: int) -> None:
        if user_id == admin_id:
            logger.warning(f"[UserService] L'admin {admin_id} tente de supprimer son propre compte.")
            raise SelfModificationForbiddenError("Impossible de supprimer votre propre compte.")
        user = await self._get_orm(user_id)
        await self.repository.delete(user)
        logger.info(f"[UserService] User ID {user_id} supprimé par admin {admin_id}")

    async def record_login(self, user: User) -> None:
        await self.repository.update(user, {"last_login": datetime.utcnow()})

    async def _get_orm(self, user_id: int) -> User:
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user
