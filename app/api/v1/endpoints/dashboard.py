"""Dashboard overview endpoint."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_user_id
from app.db.session import get_db
from app.schemas.dashboard import DashboardOverview
from app.services.dashboard import get_dashboard_overview

router = APIRouter()


@router.get("", response_model=DashboardOverview)
async def dashboard(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Current week of the active mesocycle, next workout, PR count and latest workouts."""
    return await get_dashboard_overview(db, user_id)
