# src/addresses/interfaces/repositories.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from src.addresses.models import Address, AddressRead


class AbstractAddressRepository(ABC):
    """Interface abstraite pour le repository des adresses."""

    @abstractmethod
    async def get_by_id(self, address_id: int) -> Optional[Address]:
        """Récupère une adresse par son ID (modèle Table)."""
        pass

    @abstractmethod
    async def list_for_user(self, user_id: int) -> List[AddressRead]:
        """Liste les adresses d'un utilisateur, adresse par défaut en premier."""
        pass

    @abstractmethod
    async def count_for_user(self, user_id: int) -> int:
        pass

    @abstractmethod
    async def create(self, address_data: Dict[str, Any]) -> Address:
        pass

    @abstractmethod
    async def update(self, address: Address, update_data: Dict[str, Any]) -> Address:
        pass

    @abstractmethod
    async def delete(self, address: Address) -> None:
        pass

    @abstractmethod
    async def unset_default(self, user_id: int, exclude_id: Optional[int] = None) -> None:
        """Retire le drapeau par défaut de toutes les adresses de l'utilisateur (sauf exclude_id)."""
        pass
