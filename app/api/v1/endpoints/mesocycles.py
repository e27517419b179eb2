"""Mesocycle endpoints: program CRUD, weekly templates and plan preview."""

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.security import get_current_user_id
from app.db.session import get_db
from app.models.mesocycle import Mesocycle
from app.models.workout import Workout, WorkoutExercise
from app.schemas.mesocycle import (
    MesocycleCreate,
    MesocyclePlan,
    MesocyclePlanRequest,
    MesocycleRead,
    MesocycleReadWithWorkouts,
    MesocycleUpdate,
)
from app.schemas.template import ModificationResult, TemplateExerciseAdd, WorkoutTemplate
from app.services.mesocycles import (
    clear_default,
    create_mesocycle,
    ensure_exercises_visible,
    get_owned_mesocycle,
    resolve_progression,
    template_exercise_ids,
)
from app.services.template_modifier import add_exercise_to_workouts, find_template_workouts
from app.services.workout_templates import build_mesocycle_plan, workouts_to_templates

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[MesocycleRead])
async def list_mesocycles(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """The caller's mesocycles, most recent start first."""
    result = await db.execute(
        select(Mesocycle).where(Mesocycle.user_id == user_id).order_by(Mesocycle.start_date.desc())
    )
    return list(result.scalars().all())


@router.post("", response_model=MesocycleRead, status_code=201)
async def create(
    payload: MesocycleCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """
    Create a mesocycle. With weekly templates, every workout of every week is generated;
    progression (or progression_template_id) sets each week's intensity_modifier.
    """
    return await create_mesocycle(db, user_id, payload)


@router.post("/plan", response_model=MesocyclePlan)
async def preview_plan(
    payload: MesocyclePlanRequest,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Generate the full plan without saving it (review / export)."""
    progression = resolve_progression(payload)
    await ensure_exercises_visible(db, user_id, template_exercise_ids(payload))
    return build_mesocycle_plan(
        payload.title,
        payload.start_date,
        payload.weeks,
        [t.model_dump() for t in payload.templates],
        progression.model_dump(mode="json") if progression is not None else None,
    )


@router.get("/{mesocycle_id}", response_model=MesocycleReadWithWorkouts)
async def get_mesocycle(
    mesocycle_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    result = await db.execute(
        select(Mesocycle)
        .where(Mesocycle.id == mesocycle_id, Mesocycle.user_id == user_id)
        .options(selectinload(Mesocycle.workouts), selectinload(Mesocycle.progression))
    )
    mesocycle = result.scalar_one_or_none()
    if not mesocycle:
        raise HTTPException(status_code=404, detail="Mesocycle not found")
    return mesocycle


@router.patch("/{mesocycle_id}", response_model=MesocycleRead)
async def update_mesocycle(
    mesocycle_id: uuid.UUID,
    payload: MesocycleUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Partial update. Making a mesocycle the default clears the flag on the others."""
    mesocycle = await get_owned_mesocycle(db, user_id, mesocycle_id)
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if data.get("is_default"):
        await clear_default(db, user_id, keep_id=mesocycle.id)
    for k, v in data.items():
        setattr(mesocycle, k, v)
    await db.flush()
    await db.refresh(mesocycle)
    return mesocycle


@router.delete("/{mesocycle_id}", status_code=204)
async def delete_mesocycle(
    mesocycle_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Delete a mesocycle with its workouts, planned exercises, logged sets and progression."""
    result = await db.execute(
        select(Mesocycle)
        .where(Mesocycle.id == mesocycle_id, Mesocycle.user_id == user_id)
        .options(
            selectinload(Mesocycle.workouts).selectinload(Workout.exercises),
            selectinload(Mesocycle.workouts).selectinload(Workout.sets),
            selectinload(Mesocycle.progression),
        )
    )
    mesocycle = result.scalar_one_or_none()
    if not mesocycle:
        raise HTTPException(status_code=404, detail="Mesocycle not found")
    await db.delete(mesocycle)
    logger.info("Deleted mesocycle %s for user %s", mesocycle_id, user_id)


@router.get("/{mesocycle_id}/templates", response_model=list[WorkoutTemplate])
async def get_templates(
    mesocycle_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Weekly templates recovered from the mesocycle's scheduled workouts."""
    await get_owned_mesocycle(db, user_id, mesocycle_id)
    result = await db.execute(
        select(Workout)
        .where(Workout.mesocycle_id == mesocycle_id)
        .options(selectinload(Workout.exercises).selectinload(WorkoutExercise.exercise))
        .order_by(Workout.scheduled_for)
    )
    workouts = [
        {
            "label": w.label or "Workout",
            "scheduled_for": w.scheduled_for,
            "workout_exercises": [
                {
                    "exercise_id": we.exercise_id,
                    "exercise_name": we.exercise.name if we.exercise else None,
                    "order_idx": we.order_idx,
                    "defaults": we.defaults,
                }
                for we in w.exercises
            ],
        }
        for w in result.scalars().all()
    ]
    return workouts_to_templates(workouts)


@router.post("/{mesocycle_id}/templates/exercises", response_model=ModificationResult)
async def add_template_exercise(
    mesocycle_id: uuid.UUID,
    payload: TemplateExerciseAdd,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Add an exercise to every workout of one template from from_date (default today) onward."""
    mesocycle = await get_owned_mesocycle(db, user_id, mesocycle_id)
    await ensure_exercises_visible(db, user_id, [payload.exercise_id])

    from_date = payload.from_date or date.today()
    workout_ids = await find_template_workouts(db, mesocycle.id, payload.template_label, from_date)
    return await add_exercise_to_workouts(
        db,
        workout_ids,
        payload.model_dump(include={"exercise_id", "order_idx", "defaults"}),
        mesocycle_id=mesocycle.id,
        user_id=user_id,
        from_date=from_date,
    )
