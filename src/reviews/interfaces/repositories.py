from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from src.reviews.models import Review
from src.users.models import User


class AbstractReviewRepository(ABC):
    """Interface abstraite pour le repository des avis."""

    @abstractmethod
    async def get_by_id(self, review_id: int) -> Optional[Review]:
        pass

    @abstractmethod
    async def exists_for_user(self, user_id: int, product_id: int) -> bool:
        pass

    @abstractmethod
    async def list(
        self,
        offset: int,
        limit: int,
        product_id: Optional[int] = None,
        rating: Optional[int] = None,
    ) -> Tuple[List[Tuple[Review, User]], int]:
        """Avis actifs avec leur auteur, du plus récent au plus ancien (items, total)."""
        pass

    @abstractmethod
    async def get_author(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def create(self, review_data: Dict[str, Any]) -> Review:
        pass

    @abstractmethod
    async def update(self, review: Review, update_data: Dict[str, Any]) -> Review:
        pass

    @abstractmethod
    async def delete(self, review: Review) -> None:
        pass

    @abstractmethod
    async def rating_stats(self, product_id: int) -> Tuple[float, int]:
        """Note moyenne et nombre d'avis actifs du produit."""
        pass
