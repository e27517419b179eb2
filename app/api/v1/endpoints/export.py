"""Data export: every logged set of the caller as flat JSON rows."""

import logging
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_user_id
from app.db.session import get_db
from app.schemas.export import WorkoutExportResponse
from app.services.stats_queries import get_user_workout_data

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/workouts", response_model=WorkoutExportResponse)
async def export_workouts(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    rows = await get_user_workout_data(db, user_id)
    return WorkoutExportResponse(data=rows)
