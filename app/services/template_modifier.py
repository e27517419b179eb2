"""Bulk edits to the workouts generated from one weekly template."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import TemplateChangeType
from app.models.template_change import TemplateChange
from app.models.workout import Workout, WorkoutExercise
from app.services.workout_templates import base_label

logger = logging.getLogger(__name__)


async def find_template_workouts(
    db: AsyncSession,
    mesocycle_id: uuid.UUID,
    template_label: str,
    from_date: date,
) -> list[uuid.UUID]:
    """Ids of the mesocycle's workouts for `template_label` scheduled on or after from_date."""
    result = await db.execute(
        select(Workout.id, Workout.label)
        .where(Workout.mesocycle_id == mesocycle_id, Workout.scheduled_for >= from_date)
        .order_by(Workout.scheduled_for)
    )
    return [row.id for row in result.all() if base_label(row.label) == template_label]


async def add_exercise_to_workouts(
    db: AsyncSession,
    workout_ids: Sequence[uuid.UUID],
    template: Mapping[str, Any],
    mesocycle_id: uuid.UUID | None = None,
    user_id: uuid.UUID | None = None,
    from_date: date | None = None,
) -> dict[str, Any]:
    """
    Insert the exercise described by `template` (exercise_id, order_idx, defaults) into
    every listed workout, bump each workout's template_version and record the change.
    """
    if not workout_ids:
        return {"success": True, "affected_workouts": 0, "new_exercises": 0}

    result = await db.execute(select(Workout).where(Workout.id.in_(list(workout_ids))))
    workouts = list(result.scalars().all())
    defaults = dict(template.get("defaults") or {})
    new_exercises = 0
    for workout in workouts:
        workout.template_version = (workout.template_version or 1) + 1
        db.add(
            WorkoutExercise(
                workout_id=workout.id,
                exercise_id=template["exercise_id"],
                order_idx=template.get("order_idx") or 0,
                defaults=defaults,
                template_version=workout.template_version,
                is_template_derived=True,
            )
        )
        new_exercises += 1

    db.add(
        TemplateChange(
            mesocycle_id=mesocycle_id,
            change_type=TemplateChangeType.ADD_EXERCISE.value,
            affected_workouts=[str(w.id) for w in workouts],
            old_value=None,
            new_value={
                "exercise_id": str(template["exercise_id"]),
                "order_idx": template.get("order_idx") or 0,
                "defaults": defaults,
            },
            applied_from_date=from_date,
            created_by=user_id,
        )
    )
    await db.flush()
    logger.info(
        "Added exercise %s to %d workout(s) in mesocycle %s",
        template["exercise_id"],
        len(workouts),
        mesocycle_id,
    )
    return {"success": True, "affected_workouts": len(workouts), "new_exercises": new_exercises}
