# api/dashboard/views.py
"""
Dashboard statistics endpoint.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from .models import DashboardStats
from . import db_manager

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Get dashboard statistics",
)
async def get_stats_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> DashboardStats:
    """
    Totals for the dashboard cards: all assets, assets in use, assets in
    maintenance, and active employees, with status/condition/type breakdowns.
    """
    stats = await db_manager.get_dashboard_stats(db)
    return DashboardStats(**stats)
