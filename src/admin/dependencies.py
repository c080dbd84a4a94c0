from typing import Annotated

from fastapi import Depends

from src.admin.repositories import SQLAlchemyAdminStatsRepository
from src.admin.service import AdminStatsService
from src.users.dependencies import DbSessionDep


def get_admin_stats_service(session: DbSessionDep) -> AdminStatsService:
    return AdminStatsService(repository=SQLAlchemyAdminStatsRepository(db_session=session))

AdminStatsServiceDep = Annotated[AdminStatsService, Depends(get_admin_stats_service)]
