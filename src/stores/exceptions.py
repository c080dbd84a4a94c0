"""Exceptions personnalisées pour le module stores."""
from src.stores.constants import (
    ERROR_STORE_NOT_FOUND,
    ERROR_STORE_ALREADY_EXISTS,
    ERROR_STORE_IN_USE,
    ERROR_NO_STORE_FOR_SELLER,
)

class StoreError(Exception):
    """Classe de base pour les exceptions liées aux boutiques."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class StoreNotFoundError(StoreError):
    def __init__(self, store_id: int):
        self.store_id = store_id
        super().__init__(f"{ERROR_STORE_NOT_FOUND} (ID: {store_id}).")

class SellerStoreNotFoundError(StoreError):
    """Levée lorsqu'un vendeur n'a pas encore créé sa boutique."""
    def __init__(self, seller_id: int):
        self.seller_id = seller_id
        super().__init__(f"{ERROR_NO_STORE_FOR_SELLER} (vendeur ID: {seller_id}).")

class StoreAlreadyExistsError(StoreError):
    def __init__(self, seller_id: int):
        self.seller_id = seller_id
        super().__init__(f"{ERROR_STORE_ALREADY_EXISTS} (vendeur ID: {seller_id}).")

class StoreInUseError(StoreError):
    def __init__(self, store_id: int):
        self.store_id = store_id
        super().__init__(f"{ERROR_STORE_IN_USE} (ID: {store_id}).")
