"""Mesocycle lifecycle: ownership checks, creation from templates, default flag, freestyle."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from datetime import date

from fastapi import HTTPException
from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import FREESTYLE_MESOCYCLE_TITLE, FREESTYLE_WORKOUT_LABEL
from app.models.exercise import Exercise
from app.models.mesocycle import Mesocycle, MesocycleProgression
from app.models.workout import Workout, WorkoutExercise
from app.schemas.mesocycle import MesocycleCreate, MesocyclePlanRequest
from app.schemas.progression import MesocycleProgressionIn
from app.services.progression import (
    apply_progression_template,
    get_template_by_id,
    template_to_weekly_progressions,
)
from app.services.workout_templates import generate_workouts_from_templates

logger = logging.getLogger(__name__)


async def get_owned_mesocycle(db: AsyncSession, user_id: uuid.UUID, mesocycle_id: uuid.UUID) -> Mesocycle:
    """The mesocycle if it belongs to user_id; 404 otherwise (other users' ids look missing)."""
    result = await db.execute(
        select(Mesocycle).where(Mesocycle.id == mesocycle_id, Mesocycle.user_id == user_id)
    )
    mesocycle = result.scalar_one_or_none()
    if not mesocycle:
        raise HTTPException(status_code=404, detail="Mesocycle not found")
    return mesocycle


async def get_owned_workout(db: AsyncSession, user_id: uuid.UUID, workout_id: uuid.UUID) -> Workout:
    result = await db.execute(
        select(Workout)
        .join(Mesocycle, Mesocycle.id == Workout.mesocycle_id)
        .where(Workout.id == workout_id, Mesocycle.user_id == user_id)
    )
    workout = result.scalar_one_or_none()
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


async def ensure_exercises_visible(
    db: AsyncSession, user_id: uuid.UUID, exercise_ids: Iterable[uuid.UUID]
) -> None:
    """404 unless every id is a public exercise or one owned by user_id."""
    wanted = set(exercise_ids)
    if not wanted:
        return
    result = await db.execute(
        select(Exercise.id).where(
            Exercise.id.in_(wanted),
            or_(Exercise.is_public.is_(True), Exercise.owner_id == user_id),
        )
    )
    missing = wanted - set(result.scalars().all())
    if missing:
        raise HTTPException(
            status_code=404,
            detail=f"Exercise not found: {', '.join(sorted(str(i) for i in missing))}",
        )


def template_exercise_ids(payload: MesocycleCreate | MesocyclePlanRequest) -> set[uuid.UUID]:
    return {e.exercise_id for t in payload.templates for e in t.exercises}


async def clear_default(db: AsyncSession, user_id: uuid.UUID, keep_id: uuid.UUID | None = None) -> None:
    """Unset is_default on every mesocycle of the user except keep_id."""
    stmt = update(Mesocycle).where(Mesocycle.user_id == user_id, Mesocycle.is_default.is_(True))
    if keep_id is not None:
        stmt = stmt.where(Mesocycle.id != keep_id)
    await db.execute(stmt.values(is_default=False))


def resolve_progression(payload: MesocycleCreate | MesocyclePlanRequest) -> MesocycleProgressionIn | None:
    """Explicit progression wins; else expand the built-in template to the mesocycle length."""
    if payload.progression is not None:
        return payload.progression
    if not payload.progression_template_id:
        return None
    template = get_template_by_id(payload.progression_template_id)
    try:
        pattern = apply_progression_template(payload.progression_template_id, payload.weeks)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    weeks = template_to_weekly_progressions(pattern)
    return MesocycleProgressionIn(
        progression_type=template.type,
        baseline_week=weeks[0] if weeks else None,
        weekly_progressions=weeks,
    )


async def create_mesocycle(db: AsyncSession, user_id: uuid.UUID, payload: MesocycleCreate) -> Mesocycle:
    """Insert the mesocycle, its progression and (when templates are given) every generated workout."""
    progression = resolve_progression(payload)
    await ensure_exercises_visible(db, user_id, template_exercise_ids(payload))
    if payload.is_default:
        await clear_default(db, user_id)

    mesocycle = Mesocycle(
        user_id=user_id,
        title=payload.title,
        start_date=payload.start_date,
        weeks=payload.weeks,
        is_default=payload.is_default,
    )
    db.add(mesocycle)
    await db.flush()

    if progression is not None:
        data = progression.model_dump(mode="json")
        db.add(
            MesocycleProgression(
                mesocycle_id=mesocycle.id,
                progression_type=data["progression_type"],
                baseline_week=data["baseline_week"],
                weekly_progressions=data["weekly_progressions"],
                global_settings=data["global_settings"],
            )
        )

    if payload.templates:
        workouts, exercises = generate_workouts_from_templates(
            [t.model_dump() for t in payload.templates],
            payload.start_date,
            payload.weeks,
            mesocycle.id,
            progression.model_dump(mode="json") if progression is not None else None,
        )
        db.add_all(Workout(**w) for w in workouts)
        await db.flush()
        db.add_all(WorkoutExercise(**e) for e in exercises)

    await db.flush()
    logger.info(
        "Created mesocycle %s (%s, %d weeks) for user %s",
        mesocycle.id,
        mesocycle.title,
        mesocycle.weeks,
        user_id,
    )
    return mesocycle


async def create_freestyle_workout(db: AsyncSession, user_id: uuid.UUID, today: date) -> Workout:
    """Unplanned session for today inside the user's Freestyle mesocycle (created on first use)."""
    result = await db.execute(
        select(Mesocycle)
        .where(Mesocycle.user_id == user_id, Mesocycle.title == FREESTYLE_MESOCYCLE_TITLE)
        .limit(1)
    )
    mesocycle = result.scalar_one_or_none()
    if mesocycle is None:
        mesocycle = Mesocycle(
            user_id=user_id,
            title=FREESTYLE_MESOCYCLE_TITLE,
            start_date=today,
            weeks=1,
            is_default=False,
        )
        db.add(mesocycle)
        await db.flush()
        logger.info("Created freestyle mesocycle %s for user %s", mesocycle.id, user_id)

    workout = Workout(
        mesocycle_id=mesocycle.id,
        scheduled_for=today,
        label=FREESTYLE_WORKOUT_LABEL,
        week_number=1,
    )
    db.add(workout)
    await db.flush()
    return workout
