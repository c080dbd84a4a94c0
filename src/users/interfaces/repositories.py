from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from src.users.models import User, UserRead


class AbstractUserRepository(ABC):
    """Interface abstraite pour le repository des utilisateurs."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Récupère un utilisateur par son ID. Retourne le modèle de table."""
        pass

    @abstractmethod
    async def get_by_id_as_read_schema(self, user_id: int) -> Optional[UserRead]:
        """Récupère un utilisateur par son ID. Retourne le schéma de lecture UserRead."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Récupère un utilisateur par son email. Retourne le modèle de table."""
        pass

    @abstractmethod
    async def email_exists(self, email: str) -> bool:
        pass

    @abstractmethod
    async def list(
        self,
        offset: int,
        limit: int,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[UserRead], int]:
        """Liste les utilisateurs (plus récents d'abord) avec filtres optionnels."""
        pass

    @abstractmethod
    async def create(self, user_data: Dict[str, Any]) -> User:
        pass

    @abstractmethod
    async def update(self, user: User, update_data: Dict[str, Any]) -> User:
        pass

    @abstractmethod
    async def delete(self, user: User) -> None:
        pass
