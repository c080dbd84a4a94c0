"""Configuration locale du module categories."""

# Profondeur maximale de la hiérarchie (0 = racine)
MAX_CATEGORY_LEVEL = 3

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
