import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Query, Path, Body, HTTPException, status

from src.auth.dependencies import AdminUserDep
from src.categories.dependencies import CategoryServiceDep
from src.categories.models import CategoryRead, CategoryCreate, CategoryUpdate
from src.categories.exceptions import (
    CategoryError,
    CategoryNotFoundException,
    DuplicateCategoryNameException,
    CategoryInUseException,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# --- Error Handling Helper ---
def handle_category_service_errors(e: Exception):
    if isinstance(e, CategoryNotFoundException):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    elif isinstance(e, (DuplicateCategoryNameException, CategoryInUseException)):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    elif isinstance(e, CategoryError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    else:
        logger.error(f"[Category API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")

# --- Category Endpoints --- #

@router.get("/", response_model=List[CategoryRead])
async def read_categories(
    service: CategoryServiceDep,
    level: Optional[int] = Query(None, ge=0),
    parent_id: Optional[int] = Query(None, ge=1),
    root: bool = Query(False, description="Uniquement les catégories racines"),
    active: Optional[bool] = Query(True, description="Filtrer par statut actif"),
):
    """Liste les catégories, triées par ordre d'affichage puis par nom."""
    logger.info(f"API read_categories: level={level}, parent_id={parent_id}, root={root}, active={active}")
    return await service.list_categories(level=level, parent_id=parent_id, root_only=root, active=active)

@router.get("/by-level", response_model=Dict[int, List[CategoryRead]])
async def read_categories_by_level(service: CategoryServiceDep):
    """Catégories actives regroupées par niveau (0 = racines)."""
    return await service.list_by_level()

@router.get("/{category_id}", response_model=CategoryRead)
async def read_category(service: CategoryServiceDep, category_id: int = Path(..., ge=1)):
    """Récupère une catégorie par son ID."""
    try:
        return await service.get_category(category_id=category_id)
    except Exception as e:
        handle_category_service_errors(e)

@router.post("/", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_new_category(
    category: CategoryCreate,
    service: CategoryServiceDep,
    current_admin_user: AdminUserDep,
):
    """Crée une nouvelle catégorie (Admin requis)."""
    logger.info(f"API create_category by admin {current_admin_user.email}: name={category.name}")
    try:
        return await service.create_category(category_data=category)
    except Exception as e:
        handle_category_service_errors(e)

@router.put("/{category_id}", response_model=CategoryRead)
async def update_existing_category(
    service: CategoryServiceDep,
    current_admin_user: AdminUserDep,
    category_id: int = Path(..., ge=1),
    category: CategoryUpdate = Body(...),
):
    """Met à jour une catégorie existante (Admin requis)."""
    logger.info(f"API update_category by admin {current_admin_user.email}: ID={category_id}")
    try:
        return await service.update_category(category_id=category_id, category_data=category)
    except Exception as e:
        handle_category_service_errors(e)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_existing_category(
    service: CategoryServiceDep,
    current_admin_user: AdminUserDep,
    category_id: int = Path(..., ge=1),
):
    """Supprime une catégorie sans sous-catégories ni produits (Admin requis)."""
    logger.info(f"API delete_category by admin {current_admin_user.email}: ID={category_id}")
    try:
        await service.delete_category(category_id=category_id)
    except Exception as e:
        handle_category_service_errors(e)
