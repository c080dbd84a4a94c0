"""
Module définissant le service pour la gestion des adresses.
"""
import logging
from typing import List

from src.addresses.config import MAX_ADDRESSES_PER_USER
from src.addresses.exceptions import AddressNotFoundException, TooManyAddressesException
from src.addresses.interfaces.repositories import AbstractAddressRepository
from src.addresses.models import Address, AddressCreate, AddressRead, AddressUpdate

logger = logging.getLogger(__name__)

class AddressService:
    """
    Service pour gérer la logique métier des adresses.

    Une adresse n'est visible que par son propriétaire : l'adresse d'un autre
    utilisateur est traitée comme inexistante.
    """

    def __init__(self, repository: AbstractAddressRepository):
        self.repository = repository

    async def _get_owned(self, address_id: int, user_id: int) -> Address:
        address = await self.repository.get_by_id(address_id)
        if not address or address.user_id != user_id:
            logger.warning(f"[AddrService] Adresse {address_id} introuvable pour user {user_id}.")
            raise AddressNotFoundException(address_id)
        return address

    async def validate_address_ownership(self, address_id: int, user_id: int) -> AddressRead:
        """
        Vérifie qu'une adresse existe et appartient à l'utilisateur.

        Raises:
            AddressNotFoundException: Si l'adresse n'existe pas ou appartient à un autre utilisateur
        """
        address = await self._get_owned(address_id, user_id)
        return AddressRead.model_validate(address)

    async def list_user_addresses(self, user_id: int) -> List[AddressRead]:
        return await self.repository.list_for_user(user_id)

    async def get_user_address(self, address_id: int, user_id: int) -> AddressRead:
        return await self.validate_address_ownership(address_id, user_id)

    async def add_address_for_user(self, user_id: int, address_data: AddressCreate) -> AddressRead:
        """Ajoute une adresse. La première adresse devient l'adresse par défaut."""
        count = await self.repository.count_for_user(user_id)
        if count >= MAX_ADDRESSES_PER_USER:
            raise TooManyAddressesException(user_id)

        data = address_data.model_dump()
        data["user_id"] = user_id
        if count == 0:
            data["is_default"] = True
        elif data.get("is_default"):
            await self.repository.unset_default(user_id)

        created = await self.repository.create(data)
        logger.info(f"[AddrService] Adresse {created.id} ajoutée pour user {user_id} (défaut: {created.is_default})")
        return AddressRead.model_validate(created)

    async def update_user_address(self, address_id: int, user_id: int, address_update: AddressUpdate) -> AddressRead:
        address = await self._get_owned(address_id, user_id)
        update_data = address_update.model_dump(exclude_unset=True)
        if update_data.get("is_default"):
            await self.repository.unset_default(user_id, exclude_id=address_id)
        updated = await self.repository.update(address, update_data)
        return AddressRead.model_validate(updated)

    async def delete_user_address(self, address_id: int, user_id: int) -> None:
        """Supprime une adresse. Si c'était l'adresse par défaut, la plus récente restante la remplace."""
        address = await self._get_owned(address_id, user_id)
        was_default = address.is_default
        await self.repository.delete(address)
        logger.info(f"[AddrService] Adresse {address_id} supprimée pour user {user_id}")

        if was_default:
            remaining = await self.repository.list_for_user(user_id)
            if remaining:
                replacement = await self.repository.get_by_id(remaining[0].id)
                await self.repository.update(replacement, {"is_default": True})
