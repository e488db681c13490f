# File: src/bizpass/api/dashboard.py
"""Dashboard aggregate endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.api.auth import get_current_user
from bizpass.core.dashboard import compute_dashboard_stats
from bizpass.core.db import get_db
from bizpass.models import User
from bizpass.models.dashboard_schemas import DashboardStats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Revenue, document and event counts plus recent activity for all owned businesses."""
    return await compute_dashboard_stats(db, current_user)
