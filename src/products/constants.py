"""Constantes du module products."""

ERROR_PRODUCT_NOT_FOUND = "Produit non trouvé"
ERROR_VARIANT_NOT_FOUND = "Variante non trouvée"
ERROR_PRODUCT_FORBIDDEN = "Ce produit n'appartient pas à votre boutique"
ERROR_STORE_REQUIRED = "store_id est requis pour un administrateur"
ERROR_VARIANT_IN_USE = "La variante est référencée par un panier ou une commande"
