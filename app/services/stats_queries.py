"""User-scoped statistics queries.

Every query reaches sets/workouts through ``workouts -> mesocycles`` and filters on
``mesocycles.user_id``. SQL does the cheap grouping; anything order- or
calendar-sensitive is handed to the pure transforms in ``app.services.stats``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, time, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import (
    DEFAULT_DISTRIBUTION_MONTHS,
    DEFAULT_PROGRESS_MONTHS,
    DEFAULT_VOLUME_MONTHS,
    DEFAULT_WEEKLY_COMPLETION_MONTHS,
    STATS_RECENT_WORKOUTS,
)
from app.models.exercise import Exercise
from app.models.mesocycle import Mesocycle
from app.models.workout import SetLogged, Workout
from app.services.dates import months_ago
from app.services.stats import (
    aggregate_sets_by_workout,
    calculate_summary_stats,
    completion_rate,
    derive_personal_records,
    map_muscle_groups,
    volume_by_date,
    weekly_completion,
)

logger = logging.getLogger(__name__)

_VOLUME = SetLogged.weight * SetLogged.reps


def _start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min, tzinfo=timezone.utc)


async def get_recent_workouts(
    db: AsyncSession,
    user_id: uuid.UUID,
    limit: int = 10,
) -> list[dict[str, Any]]:
    """Latest scheduled workouts with set count and volume (workouts without sets included)."""
    logger.info("Fetching recent workouts for user %s (limit %d)", user_id, limit)
    result = await db.execute(
        select(
            Workout.id.label("workout_id"),
            Workout.scheduled_for.label("workout_date"),
            Workout.label.label("workout_label"),
            Workout.week_number,
            Workout.intensity_modifier,
            Mesocycle.title.label("mesocycle_title"),
            func.count(SetLogged.id).label("set_count"),
            func.coalesce(func.sum(_VOLUME), 0).label("total_volume"),
        )
        .select_from(Workout)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .outerjoin(SetLogged, SetLogged.workout_id == Workout.id)
        .where(Mesocycle.user_id == user_id)
        .group_by(Workout.id, Mesocycle.title)
        .order_by(Workout.scheduled_for.desc())
        .limit(limit)
    )
    rows = []
    for row in result.all():
        data = row._asdict()
        data["set_count"] = int(data["set_count"] or 0)
        data["total_volume"] = float(data["total_volume"] or 0)
        rows.append(data)
    logger.info("Found %d recent workouts", len(rows))
    return rows


async def get_personal_records(db: AsyncSession, user_id: uuid.UUID) -> list[dict[str, Any]]:
    """Max weight / best workout volume / best workout reps per exercise."""
    logger.info("Fetching personal records for user %s", user_id)
    result = await db.execute(
        select(
            SetLogged.exercise_id,
            Exercise.name.label("exercise_name"),
            SetLogged.workout_id,
            SetLogged.weight,
            SetLogged.reps,
            SetLogged.logged_at,
        )
        .select_from(SetLogged)
        .join(Exercise, Exercise.id == SetLogged.exercise_id)
        .join(Workout, Workout.id == SetLogged.workout_id)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .where(Mesocycle.user_id == user_id)
        .order_by(SetLogged.logged_at, SetLogged.id)
    )
    records = derive_personal_records(row._asdict() for row in result.all())
    logger.info("Found %d personal records", len(records))
    return records


async def get_volume_progress(
    db: AsyncSession,
    user_id: uuid.UUID,
    exercise_id: uuid.UUID | None = None,
    months: int = DEFAULT_VOLUME_MONTHS,
    today: date | None = None,
) -> list[dict[str, Any]]:
    """Volume, set count and average load per scheduled date over the last `months` months."""
    start = months_ago(today or date.today(), months)
    logger.info(
        "Fetching volume progress for user %s, exercise %s, since %s",
        user_id,
        exercise_id or "all",
        start,
    )
    conditions = [Mesocycle.user_id == user_id, Workout.scheduled_for >= start]
    if exercise_id:
        conditions.append(SetLogged.exercise_id == exercise_id)
    result = await db.execute(
        select(Workout.scheduled_for, SetLogged.weight, SetLogged.reps)
        .select_from(SetLogged)
        .join(Workout, Workout.id == SetLogged.workout_id)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .where(*conditions)
    )
    points = volume_by_date(row._asdict() for row in result.all())
    logger.info("Found %d volume data points", len(points))
    return points


async def get_muscle_group_distribution(
    db: AsyncSession,
    user_id: uuid.UUID,
    date_from: date,
    date_to: date | None = None,
) -> list[dict[str, Any]]:
    """Sets and volume per primary muscle for workouts scheduled in [date_from, date_to]."""
    logger.info("Fetching muscle distribution for user %s, %s -> %s", user_id, date_from, date_to or "now")
    conditions = [Mesocycle.user_id == user_id, Workout.scheduled_for >= date_from]
    if date_to:
        conditions.append(Workout.scheduled_for <= date_to)
    result = await db.execute(
        select(
            Exercise.primary_muscle,
            func.count(SetLogged.id).label("set_count"),
            func.coalesce(func.sum(_VOLUME), 0).label("total_volume"),
        )
        .select_from(SetLogged)
        .join(Exercise, Exercise.id == SetLogged.exercise_id)
        .join(Workout, Workout.id == SetLogged.workout_id)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .where(*conditions)
        .group_by(Exercise.primary_muscle)
        .order_by(func.count(SetLogged.id).desc())
    )
    distribution = map_muscle_groups(row._asdict() for row in result.all())
    logger.info("Found distribution for %d muscle groups", len(distribution))
    return distribution


async def get_exercise_distribution_by_muscle(
    db: AsyncSession,
    user_id: uuid.UUID,
    muscle_group: str,
    date_from: date,
    date_to: date | None = None,
) -> list[dict[str, Any]]:
    """Sets and volume per exercise within one primary muscle."""
    logger.info(
        "Fetching exercise distribution for user %s, muscle %s, %s -> %s",
        user_id,
        muscle_group,
        date_from,
        date_to or "now",
    )
    conditions = [
        Mesocycle.user_id == user_id,
        Exercise.primary_muscle == muscle_group,
        Workout.scheduled_for >= date_from,
    ]
    if date_to:
        conditions.append(Workout.scheduled_for <= date_to)
    result = await db.execute(
        select(
            Exercise.name.label("exercise_name"),
            func.count(SetLogged.id).label("set_count"),
            func.coalesce(func.sum(_VOLUME), 0).label("total_volume"),
        )
        .select_from(SetLogged)
        .join(Exercise, Exercise.id == SetLogged.exercise_id)
        .join(Workout, Workout.id == SetLogged.workout_id)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .where(*conditions)
        .group_by(Exercise.name)
        .order_by(Exercise.name)
    )
    return [
        {
            "exercise_name": row.exercise_name,
            "set_count": int(row.set_count or 0),
            "total_volume": float(row.total_volume or 0),
        }
        for row in result.all()
    ]


async def get_workout_completion_rate(
    db: AsyncSession,
    user_id: uuid.UUID,
    mesocycle_id: uuid.UUID | None = None,
) -> dict[str, Any]:
    """Share of scheduled workouts that have at least one logged set."""
    conditions = [Mesocycle.user_id == user_id]
    if mesocycle_id:
        conditions.append(Mesocycle.id == mesocycle_id)
    result = await db.execute(
        select(Workout.id.label("workout_id"), func.count(SetLogged.id).label("set_count"))
        .select_from(Workout)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .outerjoin(SetLogged, SetLogged.workout_id == Workout.id)
        .where(*conditions)
        .group_by(Workout.id)
    )
    rate = completion_rate(row._asdict() for row in result.all())
    logger.info(
        "Completion rate %.1f%% (%d/%d) for user %s",
        rate["completion_rate"],
        rate["completed_workouts"],
        rate["total_workouts"],
        user_id,
    )
    return rate


async def get_weekly_completion(
    db: AsyncSession,
    user_id: uuid.UUID,
    months: int = DEFAULT_WEEKLY_COMPLETION_MONTHS,
    today: date | None = None,
) -> list[dict[str, Any]]:
    """Completion rate per Monday-based week over the last `months` months."""
    start = months_ago(today or date.today(), months)
    result = await db.execute(
        select(
            Workout.id.label("workout_id"),
            Workout.scheduled_for,
            func.count(SetLogged.id).label("set_count"),
        )
        .select_from(Workout)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .outerjoin(SetLogged, SetLogged.workout_id == Workout.id)
        .where(Mesocycle.user_id == user_id, Workout.scheduled_for >= start)
        .group_by(Workout.id, Workout.scheduled_for)
    )
    return weekly_completion(row._asdict() for row in result.all())


async def get_exercise_progress(
    db: AsyncSession,
    user_id: uuid.UUID,
    exercise_id: uuid.UUID,
    months: int = DEFAULT_PROGRESS_MONTHS,
    group_by_workout: bool = False,
    today: date | None = None,
) -> list[dict[str, Any]]:
    """Logged sets for one exercise (oldest first), or one aggregated point per workout."""
    start = _start_of_day(months_ago(today or date.today(), months))
    logger.info(
        "Fetching progress for exercise %s, user %s, since %s (per workout: %s)",
        exercise_id,
        user_id,
        start.date(),
        group_by_workout,
    )
    result = await db.execute(
        select(
            SetLogged.logged_at.label("date"),
            SetLogged.workout_id,
            Workout.scheduled_for.label("workout_date"),
            SetLogged.weight,
            SetLogged.reps,
            SetLogged.rir,
            SetLogged.rpe,
        )
        .select_from(SetLogged)
        .join(Workout, Workout.id == SetLogged.workout_id)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .where(
            Mesocycle.user_id == user_id,
            SetLogged.exercise_id == exercise_id,
            SetLogged.logged_at >= start,
        )
        .order_by(SetLogged.logged_at)
    )
    points = []
    for row in result.all():
        weight = float(row.weight) if row.weight is not None else 0.0
        reps = int(row.reps or 0)
        points.append(
            {
                "date": row.date,
                "workout_id": row.workout_id,
                "workout_date": row.workout_date,
                "weight": weight,
                "reps": reps,
                "rir": row.rir,
                "rpe": row.rpe,
                "volume": weight * reps,
            }
        )
    if group_by_workout:
        points = aggregate_sets_by_workout(points)
    logger.info("Found %d progress data points", len(points))
    return points


async def get_user_exercises(db: AsyncSession, user_id: uuid.UUID) -> list[dict[str, Any]]:
    """Distinct exercises the user has logged at least one set for, by name."""
    result = await db.execute(
        select(Exercise.id, Exercise.name, Exercise.type, Exercise.primary_muscle, Exercise.is_public)
        .select_from(SetLogged)
        .join(Exercise, Exercise.id == SetLogged.exercise_id)
        .join(Workout, Workout.id == SetLogged.workout_id)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .where(Mesocycle.user_id == user_id)
        .distinct()
        .order_by(Exercise.name)
    )
    exercises = [row._asdict() for row in result.all()]
    logger.info("Found %d exercises used by user %s", len(exercises), user_id)
    return exercises


async def get_workouts_in_range(
    db: AsyncSession,
    user_id: uuid.UUID,
    start: date,
    end: date,
    mesocycle_id: uuid.UUID | None = None,
) -> list[Workout]:
    conditions = [
        Mesocycle.user_id == user_id,
        Workout.scheduled_for >= start,
        Workout.scheduled_for <= end,
    ]
    if mesocycle_id:
        conditions.append(Mesocycle.id == mesocycle_id)
    result = await db.execute(
        select(Workout)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .where(*conditions)
        .order_by(Workout.scheduled_for)
    )
    return list(result.scalars().all())


async def get_upcoming_workouts(
    db: AsyncSession,
    user_id: uuid.UUID,
    limit: int = 10,
    today: date | None = None,
) -> list[Workout]:
    """Workouts scheduled from today onward, soonest first."""
    result = await db.execute(
        select(Workout)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .where(Mesocycle.user_id == user_id, Workout.scheduled_for >= (today or date.today()))
        .order_by(Workout.scheduled_for)
        .limit(limit)
    )
    return list(result.scalars().all())


async def get_active_mesocycle(db: AsyncSession, user_id: uuid.UUID) -> Mesocycle | None:
    """The user's default mesocycle, else the one that starts latest."""
    result = await db.execute(
        select(Mesocycle)
        .where(Mesocycle.user_id == user_id, Mesocycle.is_default.is_(True))
        .order_by(Mesocycle.start_date.desc())
        .limit(1)
    )
    mesocycle = result.scalar_one_or_none()
    if mesocycle is not None:
        return mesocycle
    result = await db.execute(
        select(Mesocycle)
        .where(Mesocycle.user_id == user_id)
        .order_by(Mesocycle.start_date.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_user_workout_data(db: AsyncSession, user_id: uuid.UUID) -> list[dict[str, Any]]:
    """Flat export rows: one per logged set, plus one empty row per workout without sets."""
    result = await db.execute(
        select(
            Workout.scheduled_for.label("workout_date"),
            Workout.label.label("workout_label"),
            Workout.week_number,
            Workout.intensity_modifier,
            Exercise.name.label("exercise_name"),
            SetLogged.set_number,
            SetLogged.weight,
            SetLogged.reps,
            SetLogged.rir,
            SetLogged.rpe,
            SetLogged.logged_at,
        )
        .select_from(Workout)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .outerjoin(SetLogged, SetLogged.workout_id == Workout.id)
        .outerjoin(Exercise, Exercise.id == SetLogged.exercise_id)
        .where(Mesocycle.user_id == user_id)
        .order_by(Workout.scheduled_for, SetLogged.set_number)
    )
    rows = []
    for row in result.all():
        data = row._asdict()
        data["weight"] = float(data["weight"]) if data["weight"] is not None else None
        rows.append(data)
    logger.info("Exporting %d rows for user %s", len(rows), user_id)
    return rows


async def fetch_stats(
    db: AsyncSession,
    user_id: uuid.UUID,
    today: date | None = None,
) -> dict[str, Any]:
    """
    Everything the stats page needs in one call. A failing section is logged and
    replaced by its empty value so the rest of the page still renders.
    """
    today = today or date.today()
    sections = [
        ("recent_workouts", lambda: get_recent_workouts(db, user_id, STATS_RECENT_WORKOUTS), []),
        ("personal_records", lambda: get_personal_records(db, user_id), []),
        ("volume_data", lambda: get_volume_progress(db, user_id, today=today), []),
        (
            "muscle_distribution",
            lambda: get_muscle_group_distribution(
                db, user_id, months_ago(today, DEFAULT_DISTRIBUTION_MONTHS)
            ),
            [],
        ),
        (
            "completion_rate",
            lambda: get_workout_completion_rate(db, user_id),
            {"total_workouts": 0, "completed_workouts": 0, "completion_rate": 0.0},
        ),
        ("weekly_completion", lambda: get_weekly_completion(db, user_id, today=today), []),
        ("user_exercises", lambda: get_user_exercises(db, user_id), []),
    ]
    stats: dict[str, Any] = {}
    for name, query, fallback in sections:
        try:
            # savepoint per section: a failed statement must not abort the others
            async with db.begin_nested():
                stats[name] = await query()
        except Exception:
            logger.exception("Failed to fetch stats section %s for user %s", name, user_id)
            stats[name] = fallback
    stats["summary"] = calculate_summary_stats(stats["recent_workouts"])
    return stats
