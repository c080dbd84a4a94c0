"""Configuration locale du module cart."""

# Quantité maximale d'un article par ligne de panier
MAX_LINE_QUANTITY = 99
