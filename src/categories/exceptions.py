"""Exceptions personnalisées pour le module categories."""
from typing import Optional

from src.categories.constants import (
    ERROR_CATEGORY_NOT_FOUND,
    ERROR_CATEGORY_NAME_EXISTS,
    ERROR_INVALID_PARENT,
    ERROR_CATEGORY_IN_USE,
)

class CategoryError(Exception):
    """Classe de base pour les exceptions liées aux catégories."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class CategoryNotFoundException(CategoryError):
    """Exception levée lorsqu'une catégorie n'est pas trouvée."""
    def __init__(self, category_id: Optional[int] = None):
        self.category_id = category_id
        super().__init__(f"{ERROR_CATEGORY_NOT_FOUND}{f' (ID: {category_id})' if category_id else ''}.")

class DuplicateCategoryNameException(CategoryError):
    """Exception levée lorsqu'une catégorie avec le même nom existe déjà."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{ERROR_CATEGORY_NAME_EXISTS}: '{name}'.")

class InvalidParentCategoryException(CategoryError):
    def __init__(self, parent_id: Optional[int], reason: str = ERROR_INVALID_PARENT):
        self.parent_id = parent_id
        super().__init__(f"{reason} (parent ID: {parent_id}).")

class CategoryInUseException(CategoryError):
    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__(f"{ERROR_CATEGORY_IN_USE} (ID: {category_id}).")
