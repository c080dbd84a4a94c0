"""Constantes du module categories."""

# Messages d'erreur
ERROR_CATEGORY_NOT_FOUND = "Catégorie non trouvée"
ERROR_CATEGORY_NAME_EXISTS = "Une catégorie avec ce nom existe déjà"
ERROR_INVALID_PARENT = "Catégorie parente invalide"
ERROR_CATEGORY_IN_USE = "La catégorie possède des sous-catégories ou des produits"
ERROR_MAX_LEVEL = "Profondeur maximale de catégorie atteinte"
