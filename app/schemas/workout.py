"""Workout, WorkoutExercise and SetLogged schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.exercise import ExerciseRef


class ExerciseDefaults(BaseModel):
    """Planned prescription for an exercise slot."""

    model_config = ConfigDict(extra="allow")

    sets: int = Field(3, ge=0)
    reps: str = "8-12"
    rir: float | None = None
    rpe: float | None = None
    rest: str = "2:00"


class WorkoutExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    exercise_id: UUID
    order_idx: int
    defaults: dict | None = None
    template_version: int = 1
    is_template_derived: bool = True
    exercise: ExerciseRef | None = None


class SetLoggedBase(BaseModel):
    exercise_id: UUID
    set_number: int | None = None
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    rir: int | None = Field(None, ge=0, le=10)
    rpe: int | None = Field(None, ge=0, le=10)
    rest_seconds: int | None = Field(None, ge=0)
    is_myo_rep: bool = False
    is_partial: bool = False
    myo_rep_count: int | None = None
    partial_count: int | None = None
    planned_weight: float | None = None
    planned_reps: int | None = None
    planned_rir: int | None = None


class SetLoggedCreate(SetLoggedBase):
    pass


class SetLoggedUpdate(BaseModel):
    set_number: int | None = None
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    rir: int | None = Field(None, ge=0, le=10)
    rpe: int | None = Field(None, ge=0, le=10)
    rest_seconds: int | None = Field(None, ge=0)
    is_myo_rep: bool | None = None
    is_partial: bool | None = None
    myo_rep_count: int | None = None
    partial_count: int | None = None


class SetLoggedRead(SetLoggedBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    workout_id: UUID
    logged_at: datetime | None = None
    exercise: ExerciseRef | None = None


class WorkoutRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    mesocycle_id: UUID
    scheduled_for: date
    label: str | None = None
    week_number: int | None = None
    intensity_modifier: dict | None = None
    template_version: int = 1


class WorkoutReadWithDetails(WorkoutRead):
    """Workout with planned exercises and logged sets (logger view)."""

    exercises: list[WorkoutExerciseRead] = []
    sets: list[SetLoggedRead] = []


class FreestyleWorkoutRead(BaseModel):
    workout_id: UUID
    mesocycle_id: UUID
    scheduled_for: date
