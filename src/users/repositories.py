# src/users/repositories.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from fastcrud import FastCRUD
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.users.exceptions import UserAlreadyExistsError, UserInUseError
from src.users.interfaces.repositories import AbstractUserRepository
from src.users.models import User, UserCreate, UserAdminUpdate, UserRead

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository(AbstractUserRepository):
    """Implémentation SQLAlchemy du repository des utilisateurs avec FastCRUD."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD[User, UserCreate, UserAdminUpdate, UserAdminUpdate, UserAdminUpdate, UserRead](User)

    async def get_by_id(self, user_id: int) -> Optional[User]:
        logger.debug(f"[UserRepository] Récupération User (ORM) ID: {user_id}")
        return await self.db.get(User, user_id)

    async def get_by_id_as_read_schema(self, user_id: int) -> Optional[UserRead]:
        logger.debug(f"[UserRepository] Récupération User (Read) ID: {user_id}")
        user = await self.crud.get(db=self.db, schema_to_select=UserRead, return_as_model=True, id=user_id)
        if not user:
            logger.warning(f"[UserRepository] User ID {user_id} non trouvé.")
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        logger.debug(f"[UserRepository] Récupération User par email: {email}")
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalars().first()

    async def email_exists(self, email: str) -> bool:
        return await self.crud.exists(db=self.db, email=email.lower())

    async def list(
        self,
        offset: int,
        limit: int,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[UserRead], int]:
        logger.debug(f"[UserRepository] Listage users: offset={offset}, limit={limit}, role={role}, is_active={is_active}")
        filters: Dict[str, Any] = {}
        if role:
            filters["role"] = role
        if is_active is not None:
            filters["is_active"] = is_active
        result = await self.crud.get_multi(
            db=self.db,
            offset=offset,
            limit=limit,
            schema_to_select=UserRead,
            return_as_model=True,
            sort_columns="created_at",
            sort_orders="desc",
            **filters,
        )
        return result.get("data", []), result.get("total_count", 0)

    async def create(self, user_data: Dict[str, Any]) -> User:
        logger.debug(f"[UserRepository] Création utilisateur: {user_data.get('email')}")
        user = User(**user_data)
        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[UserRepository] Erreur d'intégrité (email déjà existant?): {user_data.get('email')} - {e}")
            raise UserAlreadyExistsError(user_data.get("email"))
        logger.info(f"[UserRepository] Utilisateur ajouté ID: {user.id} ({user.role})")
        return user

    async def update(self, user: User, update_data: Dict[str, Any]) -> User:
        logger.debug(f"[UserRepository] Mise à jour User ID: {user.id} avec {list(update_data)}")
        for key, value in update_data.items():
            setattr(user, key, value)
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        logger.debug(f"[UserRepository] Suppression User ID: {user.id}")
        user_id = user.id
        try:
            await self.db.delete(user)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[UserRepository] Suppression impossible pour User ID {user_id}: {e}")
            raise UserInUseError(user_id)
