from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from src.orders.models import Order, OrderItem


class AbstractOrderRepository(ABC):
    """Interface abstraite pour le repository des commandes."""

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Optional[Order]:
        pass

    @abstractmethod
    async def list_items(self, order_ids: List[int]) -> Dict[int, List[OrderItem]]:
        """Lignes de commande groupées par ID de commande."""
        pass

    @abstractmethod
    async def list(
        self,
        offset: int,
        limit: int,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[Order], int]:
        """Commandes triées de la plus récente à la plus ancienne (items, total)."""
        pass

    @abstractmethod
    async def place_order(
        self,
        order_data: Dict[str, Any],
        lines: List[Dict[str, Any]],
        cart_id_to_clear: Optional[int] = None,
    ) -> Order:
        """
        Insère la commande et ses lignes, décrémente le stock et vide le panier
        dans une seule transaction.
        """
        pass

    @abstractmethod
    async def update(self, order: Order, update_data: Dict[str, Any], restock: bool = False) -> Order:
        """Met à jour la commande ; remet les quantités en stock si restock est vrai (même transaction)."""
        pass

    @abstractmethod
    async def has_delivered_purchase(self, user_id: int, product_id: int) -> Optional[int]:
        """ID d'une commande livrée de l'utilisateur contenant le produit, sinon None."""
        pass
