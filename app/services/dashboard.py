"""Dashboard overview: where the user is in their program and what comes next."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.constants import DASHBOARD_NEXT_WORKOUT_EXERCISES, DASHBOARD_RECENT_WORKOUTS
from app.models.workout import Workout, WorkoutExercise
from app.services.dates import current_week_number, is_today, is_tomorrow
from app.services.stats_queries import (
    get_active_mesocycle,
    get_personal_records,
    get_recent_workouts,
    get_workout_completion_rate,
)

logger = logging.getLogger(__name__)


async def _next_workout(db: AsyncSession, mesocycle_id: uuid.UUID, today: date) -> dict[str, Any] | None:
    result = await db.execute(
        select(Workout)
        .options(selectinload(Workout.exercises).selectinload(WorkoutExercise.exercise))
        .where(Workout.mesocycle_id == mesocycle_id, Workout.scheduled_for >= today)
        .order_by(Workout.scheduled_for)
        .limit(1)
    )
    workout = result.scalar_one_or_none()
    if workout is None:
        return None
    names = [we.exercise.name for we in workout.exercises if we.exercise is not None]
    return {
        "id": workout.id,
        "label": workout.label or "Workout",
        "scheduled_for": workout.scheduled_for,
        "is_today": is_today(workout.scheduled_for, today),
        "is_tomorrow": is_tomorrow(workout.scheduled_for, today),
        "exercises": names[:DASHBOARD_NEXT_WORKOUT_EXERCISES],
    }


async def get_dashboard_overview(
    db: AsyncSession,
    user_id: uuid.UUID,
    today: date | None = None,
) -> dict[str, Any]:
    today = today or date.today()
    mesocycle = await get_active_mesocycle(db, user_id)
    overview: dict[str, Any] = {
        "mesocycle_id": None,
        "mesocycle_title": None,
        "current_week": None,
        "total_workouts": 0,
        "next_workout": None,
    }
    if mesocycle is not None:
        completion = await get_workout_completion_rate(db, user_id, mesocycle.id)
        overview.update(
            mesocycle_id=mesocycle.id,
            mesocycle_title=mesocycle.title,
            current_week=current_week_number(mesocycle.start_date, today),
            total_workouts=completion["total_workouts"],
            next_workout=await _next_workout(db, mesocycle.id, today),
        )
    else:
        logger.info("No mesocycle for user %s; dashboard is empty", user_id)

    overview["personal_records"] = len(await get_personal_records(db, user_id))
    overview["recent_workouts"] = await get_recent_workouts(db, user_id, DASHBOARD_RECENT_WORKOUTS)
    return overview
