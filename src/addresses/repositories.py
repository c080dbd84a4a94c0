# src/addresses/repositories.py
import logging
from typing import Any, Dict, List, Optional

from fastcrud import FastCRUD
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.addresses.interfaces.repositories import AbstractAddressRepository
from src.addresses.models import Address, AddressCreate, AddressRead, AddressUpdate

logger = logging.getLogger(__name__)


class SQLAlchemyAddressRepository(AbstractAddressRepository):
    """Implémentation SQLAlchemy du repository des adresses."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD[Address, AddressCreate, AddressUpdate, AddressUpdate, AddressUpdate, AddressRead](Address)

    async def get_by_id(self, address_id: int) -> Optional[Address]:
        logger.debug(f"[AddressRepository] Récupération adresse ID: {address_id}")
        return await self.db.get(Address, address_id)

    async def list_for_user(self, user_id: int) -> List[AddressRead]:
        logger.debug(f"[AddressRepository] Listage adresses pour user ID: {user_id}")
        stmt = (
            select(Address)
            .where(Address.user_id == user_id)
            .order_by(Address.is_default.desc(), Address.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return [AddressRead.model_validate(a) for a in result.scalars().all()]

    async def count_for_user(self, user_id: int) -> int:
        return await self.crud.count(db=self.db, user_id=user_id)

    async def create(self, address_data: Dict[str, Any]) -> Address:
        address = Address(**address_data)
        self.db.add(address)
        await self.db.commit()
        await self.db.refresh(address)
        logger.info(f"[AddressRepository] Adresse créée ID: {address.id} pour user {address.user_id}")
        return address

    async def update(self, address: Address, update_data: Dict[str, Any]) -> Address:
        logger.debug(f"[AddressRepository] Mise à jour adresse ID: {address.id} avec {list(update_data)}")
        for key, value in update_data.items():
            setattr(address, key, value)
        self.db.add(address)
        await self.db.commit()
        await self.db.refresh(address)
        return address

    async def delete(self, address: Address) -> None:
        logger.debug(f"[AddressRepository] Suppression adresse ID: {address.id}")
        await self.db.delete(address)
        await self.db.commit()

    async def unset_default(self, user_id: int, exclude_id: Optional[int] = None) -> None:
        stmt = update(Address).where(Address.user_id == user_id, Address.is_default.is_(True))
        if exclude_id is not None:
            stmt = stmt.where(Address.id != exclude_id)
        # Pas de commit ici : l'appelant commit avec la modification principale
        await self.db.execute(stmt.values(is_default=False).execution_options(synchronize_session="fetch"))
