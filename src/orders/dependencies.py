import logging
from typing import Annotated

from fastapi import Depends

from src.addresses.dependencies import AddressServiceDep
from src.cart.dependencies import CartServiceDep
from src.orders.interfaces.repositories import AbstractOrderRepository
from src.orders.repositories import SQLAlchemyOrderRepository
from src.orders.service import OrderService
from src.products.dependencies import ProductServiceDep
from src.users.dependencies import DbSessionDep

logger = logging.getLogger(__name__)


def get_order_repository(session: DbSessionDep) -> AbstractOrderRepository:
    return SQLAlchemyOrderRepository(db_session=session)

OrderRepositoryDep = Annotated[AbstractOrderRepository, Depends(get_order_repository)]


def get_order_service(
    repository: OrderRepositoryDep,
    cart_service: CartServiceDep,
    address_service: AddressServiceDep,
    product_service: ProductServiceDep,
) -> OrderService:
    """
    Fournit une instance du service de commandes.

    Le panier, les adresses et les produits partagent la session de la requête,
    ce qui permet d'écrire la commande dans une seule transaction.
    """
    logger.debug("Fourniture de OrderService")
    return OrderService(
        repository=repository,
        cart_service=cart_service,
        address_service=address_service,
        product_service=product_service,
    )

OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
