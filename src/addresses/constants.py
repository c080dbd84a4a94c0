"""
Constantes du domaine pour le module addresses.
"""

# Messages d'erreur
ERROR_ADDRESS_NOT_FOUND = "Adresse non trouvée"
ERROR_INVALID_PINCODE = "Code postal invalide"
ERROR_TOO_MANY_ADDRESSES = "Nombre maximum d'adresses atteint"

# Limites et contraintes
MAX_NAME_LENGTH = 100
MAX_ADDRESS_LENGTH = 255
MAX_CITY_LENGTH = 100
MAX_STATE_LENGTH = 100

# Formats
PINCODE_REGEX = r"^[0-9A-Za-z\- ]{3,10}$"
