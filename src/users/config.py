"""
Configuration pour le module de gestion des utilisateurs.
"""
from typing import List

# Rôles applicatifs
ROLE_ADMIN = "admin"
ROLE_SELLER = "seller"
ROLE_CUSTOMER = "customer"

ALLOWED_ROLES: List[str] = [ROLE_ADMIN, ROLE_SELLER, ROLE_CUSTOMER]

# Rôles pouvant être choisis lors de l'inscription publique
SELF_REGISTRATION_ROLES: List[str] = [ROLE_CUSTOMER, ROLE_SELLER]

# Paramètres de validation
MIN_PASSWORD_LENGTH: int = 6
MAX_NAME_LENGTH: int = 100
PHONE_REGEX = r"^\+?[\d\s\-()]+$"
