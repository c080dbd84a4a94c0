"""
Schémas de réponse du tableau de bord vendeur.
"""
from datetime import datetime
from decimal import Decimal
from typing import List

from sqlmodel import SQLModel

from src.orders.models import OrderItemRead


class SellerStats(SQLModel):
    store_id: int
    active_products: int
    total_orders: int
    # Somme des lignes de la boutique dans les commandes expédiées ou livrées
    revenue: Decimal
    pending_orders: int
    low_stock_products: int
    store_rating: float


class SellerOrderRead(SQLModel):
    """Commande vue par une boutique : seules ses propres lignes sont exposées."""
    id: int
    order_number: str
    user_id: int
    status: str
    payment_status: str
    created_at: datetime
    items: List[OrderItemRead] = []
    store_total: Decimal
