"""Constantes (messages d'erreur) du module wishlist."""

ERROR_WISHLIST_ITEM_NOT_FOUND = "Produit absent de la liste de souhaits"
