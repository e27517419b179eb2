"""Weekly workout template schemas (builder input, derived output)."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class TemplateExercise(BaseModel):
    exercise_id: UUID
    exercise_name: str | None = None
    order_idx: int = 0
    defaults: dict = {}


class WorkoutTemplate(BaseModel):
    """One weekly session; day_of_week uses 0 = Sunday ... 6 = Saturday."""

    id: str | None = None
    label: str = Field(..., min_length=1, max_length=255)
    day_of_week: list[int] = Field(..., min_length=1)
    exercises: list[TemplateExercise] = []

    @field_validator("day_of_week")
    @classmethod
    def _valid_days(cls, days: list[int]) -> list[int]:
        if any(d < 0 or d > 6 for d in days):
            raise ValueError("day_of_week values must be between 0 (Sunday) and 6 (Saturday)")
        return sorted(set(days))


class TemplateExerciseAdd(BaseModel):
    """Add one exercise to every workout of a template from a date onward."""

    template_label: str = Field(..., min_length=1)
    exercise_id: UUID
    order_idx: int = 0
    defaults: dict = {}
    from_date: date | None = None  # default: today


class ModificationResult(BaseModel):
    success: bool
    affected_workouts: int
    new_exercises: int
