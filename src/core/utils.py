"""Fonctions utilitaires partagées entre les modules."""
import re
import unicodedata


def slugify(value: str) -> str:
    """
    Construit un slug ASCII en minuscules à partir d'un libellé.

    Exemple: "Fruits & Légumes frais" -> "fruits-legumes-frais"
    """
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    normalized = re.sub(r"[^a-zA-Z0-9\s-]", "", normalized).strip().lower()
    return re.sub(r"[\s_-]+", "-", normalized)
