"""Constantes du module stores."""

ERROR_STORE_NOT_FOUND = "Boutique non trouvée"
ERROR_STORE_ALREADY_EXISTS = "Ce vendeur possède déjà une boutique"
ERROR_STORE_IN_USE = "La boutique possède encore des produits"
ERROR_NO_STORE_FOR_SELLER = "Aucune boutique associée à ce vendeur"
