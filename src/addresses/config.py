"""
Configuration du module addresses.
"""

# Types d'adresse acceptés
ADDRESS_TYPE_HOME = "home"
ADDRESS_TYPE_WORK = "work"
ADDRESS_TYPE_OTHER = "other"
ALLOWED_ADDRESS_TYPES = [ADDRESS_TYPE_HOME, ADDRESS_TYPE_WORK, ADDRESS_TYPE_OTHER]

# Limite du nombre d'adresses par utilisateur
MAX_ADDRESSES_PER_USER = 20
