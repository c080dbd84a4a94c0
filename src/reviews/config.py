"""
Configuration spécifique au module reviews.
"""
MIN_RATING: int = 1
MAX_RATING: int = 5
MAX_TITLE_LENGTH: int = 100
MAX_COMMENT_LENGTH: int = 1000

# Précision de la note moyenne enregistrée sur le produit
RATING_DECIMALS: int = 2
