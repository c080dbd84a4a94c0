import logging
from typing import Annotated

from fastapi import Depends

from src.addresses.interfaces.repositories import AbstractAddressRepository
from src.addresses.repositories import SQLAlchemyAddressRepository
from src.addresses.service import AddressService
from src.users.dependencies import DbSessionDep

logger = logging.getLogger(__name__)


def get_address_repository(session: DbSessionDep) -> AbstractAddressRepository:
    return SQLAlchemyAddressRepository(db_session=session)

AddressRepositoryDep = Annotated[AbstractAddressRepository, Depends(get_address_repository)]


def get_address_service(repository: AddressRepositoryDep) -> AddressService:
    """
    Fournit une instance du service d'adresses.

    Utilisée par le routeur d'adresses et par le service de commandes
    (validation de l'adresse de livraison).
    """
    logger.debug("Fourniture de AddressService")
    return AddressService(repository=repository)

AddressServiceDep = Annotated[AddressService, Depends(get_address_service)]
