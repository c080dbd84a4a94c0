"""Constantes (messages d'erreur) du module orders."""

ERROR_ORDER_NOT_FOUND = "Commande non trouvée"
ERROR_EMPTY_CART = "Le panier est vide"
ERROR_INVALID_ADDRESS = "Adresse de livraison invalide"
ERROR_PRODUCT_UNAVAILABLE = "Produit indisponible"
ERROR_TOO_MANY_ITEMS = "Trop d'articles dans la commande"
