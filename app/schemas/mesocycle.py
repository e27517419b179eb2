"""Mesocycle schemas."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.progression import MesocycleProgressionIn, MesocycleProgressionRead
from app.schemas.template import WorkoutTemplate
from app.schemas.workout import WorkoutRead


class MesocycleBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    start_date: date
    weeks: int = Field(..., ge=1, le=52)


class MesocycleCreate(MesocycleBase):
    """
    Create a program. With templates, dated workouts are generated for every week.
    progression_template_id picks a built-in intensity curve; an explicit progression wins.
    """

    is_default: bool = False
    templates: list[WorkoutTemplate] = []
    progression_template_id: str | None = None
    progression: MesocycleProgressionIn | None = None


class MesocycleUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    weeks: int | None = Field(None, ge=1, le=52)
    is_default: bool | None = None


class MesocycleRead(MesocycleBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    is_default: bool = False


class MesocycleReadWithWorkouts(MesocycleRead):
    workouts: list[WorkoutRead] = []
    progression: MesocycleProgressionRead | None = None


class MesocyclePlanRequest(MesocycleBase):
    templates: list[WorkoutTemplate] = Field(..., min_length=1)
    progression_template_id: str | None = None
    progression: MesocycleProgressionIn | None = None


class PlannedWorkout(BaseModel):
    id: UUID
    mesocycle_id: UUID
    scheduled_for: date
    label: str
    week_number: int
    intensity_modifier: dict | None = None


class PlannedExercise(BaseModel):
    id: UUID
    workout_id: UUID
    exercise_id: UUID
    order_idx: int
    defaults: dict


class MesocyclePlan(BaseModel):
    """Preview/export of a program: basics, templates, progression and every generated row."""

    mesocycle_id: UUID
    basics: dict
    workout_templates: list[WorkoutTemplate]
    progression: dict | None = None
    workouts: list[PlannedWorkout]
    exercises: list[PlannedExercise]
