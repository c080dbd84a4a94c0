"""Exceptions spécifiques au domaine Address."""
from src.addresses.constants import ERROR_ADDRESS_NOT_FOUND, ERROR_TOO_MANY_ADDRESSES

class AddressError(Exception):
    """Classe de base pour les exceptions du domaine Address."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class AddressNotFoundException(AddressError):
    """Levée lorsqu'une adresse n'existe pas ou n'appartient pas à l'utilisateur."""
    def __init__(self, address_id: int):
        self.address_id = address_id
        super().__init__(f"{ERROR_ADDRESS_NOT_FOUND} (ID: {address_id}).")

class TooManyAddressesException(AddressError):
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"{ERROR_TOO_MANY_ADDRESSES} pour l'utilisateur ID {user_id}.")
