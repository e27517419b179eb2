"""Workout endpoints: schedule views, freestyle sessions and set logging."""

from __future__ import annotations

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.constants import MAX_SETS_PER_EXERCISE_PER_SESSION
from app.core.security import get_current_user_id
from app.db.session import get_db
from app.models.mesocycle import Mesocycle
from app.models.workout import SetLogged, Workout, WorkoutExercise
from app.schemas.workout import (
    FreestyleWorkoutRead,
    SetLoggedCreate,
    SetLoggedRead,
    SetLoggedUpdate,
    WorkoutRead,
    WorkoutReadWithDetails,
)
from app.services.dates import week_end, week_start
from app.services.mesocycles import create_freestyle_workout, ensure_exercises_visible, get_owned_workout
from app.services.stats_queries import (
    get_active_mesocycle,
    get_upcoming_workouts,
    get_workouts_in_range,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[WorkoutRead])
async def list_workouts(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    start: date | None = None,
    end: date | None = None,
    mesocycle_id: uuid.UUID | None = None,
):
    """Workouts scheduled between start and end (inclusive); defaults to the current Mon-Sun week."""
    today = date.today()
    start = start or week_start(today)
    end = end or week_end(today)
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    return await get_workouts_in_range(db, user_id, start, end, mesocycle_id)


@router.get("/current-week", response_model=list[WorkoutRead])
async def current_week(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """This week's (Mon-Sun) workouts of the active mesocycle."""
    mesocycle = await get_active_mesocycle(db, user_id)
    if mesocycle is None:
        return []
    today = date.today()
    return await get_workouts_in_range(db, user_id, week_start(today), week_end(today), mesocycle.id)


@router.get("/upcoming", response_model=list[WorkoutRead])
async def upcoming(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    limit: int = Query(10, ge=1, le=100),
):
    return await get_upcoming_workouts(db, user_id, limit)


@router.post("/freestyle", response_model=FreestyleWorkoutRead, status_code=201)
async def start_freestyle(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Start an unplanned workout today."""
    workout = await create_freestyle_workout(db, user_id, date.today())
    logger.info("Started freestyle workout %s for user %s", workout.id, user_id)
    return FreestyleWorkoutRead(
        workout_id=workout.id,
        mesocycle_id=workout.mesocycle_id,
        scheduled_for=workout.scheduled_for,
    )


@router.get("/{workout_id}", response_model=WorkoutReadWithDetails)
async def get_workout(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Workout with its planned exercises and every logged set (with exercise info)."""
    result = await db.execute(
        select(Workout)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .where(Workout.id == workout_id, Mesocycle.user_id == user_id)
        .options(
            selectinload(Workout.exercises).selectinload(WorkoutExercise.exercise),
            selectinload(Workout.sets).selectinload(SetLogged.exercise),
        )
    )
    workout = result.scalar_one_or_none()
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")

    sorted_sets = sorted(workout.sets, key=lambda s: (str(s.exercise_id), s.set_number or 0))
    details = WorkoutReadWithDetails.model_validate(workout)
    details.sets = [SetLoggedRead.model_validate(s) for s in sorted_sets]
    return details


async def _load_set(db: AsyncSession, set_id: uuid.UUID) -> SetLogged:
    result = await db.execute(
        select(SetLogged)
        .where(SetLogged.id == set_id)
        .options(selectinload(SetLogged.exercise))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


@router.post("/{workout_id}/sets", response_model=SetLoggedRead, status_code=201)
async def log_set(
    workout_id: uuid.UUID,
    payload: SetLoggedCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Log a set. set_number defaults to the next number for that exercise in this workout."""
    workout = await get_owned_workout(db, user_id, workout_id)
    await ensure_exercises_visible(db, user_id, [payload.exercise_id])

    result = await db.execute(
        select(func.count(SetLogged.id), func.max(SetLogged.set_number)).where(
            SetLogged.workout_id == workout.id,
            SetLogged.exercise_id == payload.exercise_id,
        )
    )
    existing, last_number = result.one()
    existing = existing or 0
    if existing >= MAX_SETS_PER_EXERCISE_PER_SESSION:
        raise HTTPException(
            status_code=400,
            detail=f"Max {MAX_SETS_PER_EXERCISE_PER_SESSION} sets per exercise per session",
        )

    data = payload.model_dump()
    if data["set_number"] is None:
        # numbers can have gaps after deletes; continue after the highest
        data["set_number"] = (last_number or 0) + 1
    logged = SetLogged(workout_id=workout.id, **data)
    db.add(logged)
    await db.flush()
    logger.info("Logged set %s for workout %s", logged.id, workout.id)
    return await _load_set(db, logged.id)


async def _owned_set(db: AsyncSession, user_id: uuid.UUID, workout_id: uuid.UUID, set_id: uuid.UUID) -> SetLogged:
    result = await db.execute(
        select(SetLogged)
        .join(Workout, Workout.id == SetLogged.workout_id)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .where(SetLogged.id == set_id, SetLogged.workout_id == workout_id, Mesocycle.user_id == user_id)
    )
    logged = result.scalar_one_or_none()
    if not logged:
        raise HTTPException(status_code=404, detail="Set not found")
    return logged


@router.patch("/{workout_id}/sets/{set_id}", response_model=SetLoggedRead)
async def update_set(
    workout_id: uuid.UUID,
    set_id: uuid.UUID,
    payload: SetLoggedUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    logged = await _owned_set(db, user_id, workout_id, set_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(logged, k, v)
    await db.flush()
    return await _load_set(db, logged.id)


@router.delete("/{workout_id}/sets/{set_id}", status_code=204)
async def delete_set(
    workout_id: uuid.UUID,
    set_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    logged = await _owned_set(db, user_id, workout_id, set_id)
    await db.delete(logged)
