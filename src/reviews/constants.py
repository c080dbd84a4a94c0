"""Constantes (messages d'erreur) du module reviews."""

ERROR_REVIEW_NOT_FOUND = "Avis non trouvé"
ERROR_REVIEW_ALREADY_EXISTS = "Vous avez déjà donné votre avis sur ce produit"
