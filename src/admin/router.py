"""
Routes API d'administration de la plateforme.
"""
import logging

from fastapi import APIRouter

from src.admin.dependencies import AdminStatsServiceDep
from src.admin.models import PlatformStats
from src.auth.dependencies import AdminUserDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats", response_model=PlatformStats)
async def read_platform_stats(admin: AdminUserDep, stats_service: AdminStatsServiceDep):
    logger.info(f"[Router] Admin {admin.id} consulte les statistiques de la plateforme")
    return await stats_service.get_platform_stats()

admin_router = router
