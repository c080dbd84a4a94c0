"""Configuration locale du module stores."""

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 1000

# Colonnes de tri autorisées pour la liste publique
ALLOWED_SORT_FIELDS = ["rating", "created_at", "name"]
DEFAULT_SORT_FIELD = "rating"

# Filtre de statut pour la vue administrateur
STATUS_ALL = "all"
STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"
ALLOWED_STATUS_FILTERS = [STATUS_ALL, STATUS_ACTIVE, STATUS_INACTIVE]
