import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from src.auth.dependencies import CurrentUserDep
from src.addresses.models import AddressCreate, AddressRead, AddressUpdate
from src.addresses.dependencies import AddressServiceDep
from src.addresses.exceptions import AddressError, AddressNotFoundException

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_address_errors(e: Exception):
    if isinstance(e, AddressNotFoundException):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, AddressError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    logger.error(f"[AddrRouter] Erreur inattendue: {e}", exc_info=True)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")


@router.get("/", response_model=List[AddressRead])
async def list_addresses(current_user: CurrentUserDep, address_service: AddressServiceDep):
    """Récupère les adresses de l'utilisateur connecté (adresse par défaut en premier)."""
    logger.info(f"[AddrRouter] Listage adresses pour user {current_user.id}")
    return await address_service.list_user_addresses(user_id=current_user.id)

@router.post("/", response_model=AddressRead, status_code=status.HTTP_201_CREATED)
async def create_address(
    address_data: AddressCreate,
    current_user: CurrentUserDep,
    address_service: AddressServiceDep,
):
    """Crée une nouvelle adresse pour l'utilisateur connecté."""
    logger.info(f"[AddrRouter] Tentative ajout adresse pour user {current_user.id}")
    try:
        return await address_service.add_address_for_user(user_id=current_user.id, address_data=address_data)
    except Exception as e:
        handle_address_errors(e)

@router.get("/{address_id}", response_model=AddressRead)
async def get_address(address_id: int, current_user: CurrentUserDep, address_service: AddressServiceDep):
    try:
        return await address_service.get_user_address(address_id, current_user.id)
    except Exception as e:
        handle_address_errors(e)

@router.patch("/{address_id}", response_model=AddressRead)
async def update_address(
    address_id: int,
    address_update: AddressUpdate,
    current_user: CurrentUserDep,
    address_service: AddressServiceDep,
):
    try:
        return await address_service.update_user_address(address_id, current_user.id, address_update)
    except Exception as e:
        handle_address_errors(e)

@router.delete("/{address_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_address(address_id: int, current_user: CurrentUserDep, address_service: AddressServiceDep):
    logger.info(f"[AddrRouter] Suppression adresse {address_id} pour user {current_user.id}")
    try:
        await address_service.delete_user_address(address_id, current_user.id)
    except Exception as e:
        handle_address_errors(e)
