import math
from typing import Annotated, Any, Generic, List, Tuple, TypeVar

from fastapi import Depends, Query
from pydantic import BaseModel

from src.config import settings

# ======================================================
# Pagination
# ======================================================

T = TypeVar('T')


class PaginatedResponse(BaseModel, Generic[T]):
    """Réponse paginée commune à toutes les listes de l'API."""
    items: List[T]
    total: int
    page: int = 1
    limit: int = settings.DEFAULT_PAGE_SIZE
    total_pages: int = 0
    has_next_page: bool = False
    has_prev_page: bool = False

    @classmethod
    def build(cls, items: List[T], total: int, page: int, limit: int) -> "PaginatedResponse[T]":
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            items=items,
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


def get_pagination_params(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)
) -> Tuple[int, int]:
    return page, limit


PaginationParams = Annotated[Tuple[int, int], Depends(get_pagination_params)]


def page_to_offset(page: int, limit: int) -> int:
    """Convertit un numéro de page (1-based) en offset SQL."""
    return (page - 1) * limit


# ======================================================
# Validation des mises à jour partielles
# ======================================================

ERROR_NULL_NOT_ALLOWED = "Ce champ ne peut pas être null."


def reject_null(v: Any) -> Any:
    """
    Refuse un null explicite sur un champ dont la colonne est NOT NULL.

    Les champs absents ne passent pas par le validateur (exclude_unset),
    seul un null envoyé par le client est rejeté (422).
    """
    if v is None:
        raise ValueError(ERROR_NULL_NOT_ALLOWED)
    return v
