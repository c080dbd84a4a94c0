"""Constantes du module cart."""

ERROR_CART_NOT_FOUND = "Panier non trouvé"
ERROR_CART_ITEM_NOT_FOUND = "Article non trouvé dans le panier"
