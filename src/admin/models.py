from decimal import Decimal

from sqlmodel import SQLModel


class PlatformStats(SQLModel):
    """Compteurs globaux de la plateforme."""
    total_customers: int
    active_products: int
    total_orders: int
    active_stores: int
    # Somme des totaux des commandes expédiées ou livrées
    revenue: Decimal
    pending_orders: int
