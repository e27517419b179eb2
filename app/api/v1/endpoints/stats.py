"""Training statistics: overview, records, volume, distribution, completion and progress."""

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import (
    DEFAULT_DISTRIBUTION_MONTHS,
    DEFAULT_PROGRESS_MONTHS,
    DEFAULT_VOLUME_MONTHS,
    DEFAULT_WEEKLY_COMPLETION_MONTHS,
)
from app.core.enums import ProgressGrouping
from app.core.security import get_current_user_id
from app.db.session import get_db
from app.schemas.stats import (
    CompletionRate,
    DataResponse,
    ExerciseProgressPoint,
    ExerciseProgressRequest,
    ExerciseSlice,
    MuscleGroupSlice,
    PersonalRecord,
    RecentWorkout,
    StatsOverview,
    UserExercise,
    VolumePoint,
    WeeklyCompletion,
)
from app.services.dates import months_ago
from app.services.stats import filter_personal_records
from app.services.stats_queries import (
    fetch_stats,
    get_exercise_distribution_by_muscle,
    get_exercise_progress,
    get_muscle_group_distribution,
    get_personal_records,
    get_recent_workouts,
    get_user_exercises,
    get_volume_progress,
    get_weekly_completion,
    get_workout_completion_rate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _window(date_from: date | None, date_to: date | None, months: int) -> tuple[date, date | None]:
    """Explicit from/to wins; otherwise the last `months` months (at least one) up to now."""
    if date_from is not None:
        return date_from, date_to
    return months_ago(date.today(), max(1, months)), date_to


@router.get("", response_model=StatsOverview)
async def overview(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Every stats section in one payload; sections that fail come back empty."""
    return await fetch_stats(db, user_id)


@router.get("/recent-workouts", response_model=list[RecentWorkout])
async def recent_workouts(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    limit: int = Query(10, ge=1, le=100),
):
    return await get_recent_workouts(db, user_id, limit)


@router.get("/personal-records", response_model=list[PersonalRecord])
async def personal_records(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    date_from: date | None = Query(None, alias="from"),
    date_to: date | None = Query(None, alias="to"),
    exercise_id: uuid.UUID | None = None,
    muscle: str | None = None,
):
    """PRs per exercise, optionally narrowed by exercise, primary muscle and date range."""
    records = await get_personal_records(db, user_id)
    user_exercises = await get_user_exercises(db, user_id) if muscle else []
    return filter_personal_records(
        records,
        date_from=date_from,
        date_to=date_to,
        exercise_id=exercise_id,
        muscle=muscle,
        user_exercises=user_exercises,
    )


@router.get("/volume", response_model=DataResponse)
async def volume(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    exercise_id: uuid.UUID | None = None,
    months: int = DEFAULT_VOLUME_MONTHS,
):
    points = await get_volume_progress(db, user_id, exercise_id, max(1, months))
    return DataResponse(data=[VolumePoint(**p) for p in points])


@router.get("/muscle-distribution", response_model=DataResponse)
async def muscle_distribution(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    date_from: date | None = Query(None, alias="from"),
    date_to: date | None = Query(None, alias="to"),
    months: int = DEFAULT_DISTRIBUTION_MONTHS,
):
    start, end = _window(date_from, date_to, months)
    slices = await get_muscle_group_distribution(db, user_id, start, end)
    return DataResponse(data=[MuscleGroupSlice(**s) for s in slices])


@router.get("/exercise-distribution", response_model=DataResponse)
async def exercise_distribution(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    muscle_group: str | None = None,
    date_from: date | None = Query(None, alias="from"),
    date_to: date | None = Query(None, alias="to"),
    months: int = DEFAULT_DISTRIBUTION_MONTHS,
):
    """Per-exercise split inside one muscle group (muscle_group is required)."""
    if not muscle_group:
        raise HTTPException(status_code=400, detail="muscle_group is required")
    start, end = _window(date_from, date_to, months)
    slices = await get_exercise_distribution_by_muscle(db, user_id, muscle_group, start, end)
    return DataResponse(data=[ExerciseSlice(**s) for s in slices])


@router.get("/completion", response_model=CompletionRate)
async def completion(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    mesocycle_id: uuid.UUID | None = None,
):
    return await get_workout_completion_rate(db, user_id, mesocycle_id)


@router.get("/weekly-completion", response_model=DataResponse)
async def weekly_completion(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    months: int = DEFAULT_WEEKLY_COMPLETION_MONTHS,
):
    weeks = await get_weekly_completion(db, user_id, max(1, months))
    return DataResponse(data=[WeeklyCompletion(**w) for w in weeks])


@router.post("/exercise-progress", response_model=DataResponse)
async def exercise_progress(
    payload: ExerciseProgressRequest,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    group_by: ProgressGrouping = ProgressGrouping.SET,
    months: int = DEFAULT_PROGRESS_MONTHS,
):
    """Progress for one exercise: every set, or one point per workout with group_by=workout."""
    points = await get_exercise_progress(
        db,
        user_id,
        payload.exercise_id,
        max(1, months),
        group_by_workout=group_by == ProgressGrouping.WORKOUT,
    )
    return DataResponse(data=[ExerciseProgressPoint(**p) for p in points])


@router.get("/exercises", response_model=list[UserExercise])
async def exercises(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Exercises the caller has logged sets for (progress chart picker)."""
    return await get_user_exercises(db, user_id)
