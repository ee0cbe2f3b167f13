"""Dashboard routes"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_auth_context, get_unit_of_work
from ...application.dtos.dashboard_dtos import DashboardQueryDto, DashboardStatsDto
from ...application.use_cases.get_dashboard_stats import GetDashboardStatsUseCase
from ...application.use_cases.session_use_cases import AuthContext
from ...domain.repositories.unit_of_work import IUnitOfWork

router = APIRouter()


@router.get("/stats", response_model=DashboardStatsDto)
async def get_dashboard_stats(
    period: Optional[str] = Query(None, description="week, month, quarter or year"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    context: AuthContext = Depends(get_auth_context),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Call statistics for the current user"""
    query = DashboardQueryDto(period=period, start_date=start_date, end_date=end_date)
    return await GetDashboardStatsUseCase(unit_of_work).execute(context.user.id, query)
