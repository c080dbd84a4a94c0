"""Configuration locale du module products."""

MAX_NAME_LENGTH = 255
MAX_SHORT_DESCRIPTION_LENGTH = 200

# Colonnes de tri autorisées pour le catalogue
ALLOWED_SORT_FIELDS = ["created_at", "price", "rating", "name"]
DEFAULT_SORT_FIELD = "created_at"
