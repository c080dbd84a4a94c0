"""
Configuration spécifique au module Orders.
Contient les constantes et paramètres de configuration pour le module de gestion des commandes.
"""
from typing import Dict, List

# Statuts de commande
ORDER_STATUS_PENDING = "pending"
ORDER_STATUS_CONFIRMED = "confirmed"
ORDER_STATUS_PACKED = "packed"
ORDER_STATUS_SHIPPED = "shipped"
ORDER_STATUS_DELIVERED = "delivered"
ORDER_STATUS_CANCELLED = "cancelled"

ALLOWED_ORDER_STATUS: List[str] = [
    ORDER_STATUS_PENDING,
    ORDER_STATUS_CONFIRMED,
    ORDER_STATUS_PACKED,
    ORDER_STATUS_SHIPPED,
    ORDER_STATUS_DELIVERED,
    ORDER_STATUS_CANCELLED,
]

# Mapping des statuts pour l'affichage en français
ORDER_STATUS_DISPLAY: Dict[str, str] = {
    ORDER_STATUS_PENDING: "En attente",
    ORDER_STATUS_CONFIRMED: "Confirmée",
    ORDER_STATUS_PACKED: "Préparée",
    ORDER_STATUS_SHIPPED: "Expédiée",
    ORDER_STATUS_DELIVERED: "Livrée",
    ORDER_STATUS_CANCELLED: "Annulée",
}

# Transitions autorisées (statut courant -> statuts suivants possibles)
ORDER_STATUS_TRANSITIONS: Dict[str, List[str]] = {
    ORDER_STATUS_PENDING: [ORDER_STATUS_CONFIRMED, ORDER_STATUS_CANCELLED],
    ORDER_STATUS_CONFIRMED: [ORDER_STATUS_PACKED, ORDER_STATUS_CANCELLED],
    ORDER_STATUS_PACKED: [ORDER_STATUS_SHIPPED, ORDER_STATUS_CANCELLED],
    ORDER_STATUS_SHIPPED: [ORDER_STATUS_DELIVERED],
    ORDER_STATUS_DELIVERED: [],
    ORDER_STATUS_CANCELLED: [],
}

# Statuts depuis lesquels le client peut annuler lui-même
CUSTOMER_CANCELLABLE_STATUS: List[str] = [ORDER_STATUS_PENDING, ORDER_STATUS_CONFIRMED]

# Statuts comptés dans le chiffre d'affaires
REVENUE_STATUS: List[str] = [ORDER_STATUS_SHIPPED, ORDER_STATUS_DELIVERED]

# Paiement
PAYMENT_STATUS_PENDING = "pending"
PAYMENT_STATUS_PAID = "paid"
PAYMENT_STATUS_FAILED = "failed"
ALLOWED_PAYMENT_STATUS: List[str] = [PAYMENT_STATUS_PENDING, PAYMENT_STATUS_PAID, PAYMENT_STATUS_FAILED]

ALLOWED_PAYMENT_METHODS: List[str] = ["cod", "khalti", "esewa", "card", "bank_transfer"]

# Numéro de commande : ORD-<epoch ms>-<9 caractères alphanumériques majuscules>
ORDER_NUMBER_PREFIX = "ORD"
ORDER_NUMBER_SUFFIX_LENGTH = 9

# Configuration des limites
MAX_ITEMS_PER_ORDER: int = 50
