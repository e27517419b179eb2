"""Workout export rows (one per logged set; workouts without sets appear once with nulls)."""

from datetime import date, datetime

from pydantic import BaseModel


class WorkoutSetExport(BaseModel):
    workout_date: date | None = None
    workout_label: str | None = None
    week_number: int | None = None
    intensity_modifier: dict | None = None
    exercise_name: str | None = None
    set_number: int | None = None
    weight: float | None = None
    reps: int | None = None
    rir: int | None = None
    rpe: int | None = None
    logged_at: datetime | None = None


class WorkoutExportResponse(BaseModel):
    data: list[WorkoutSetExport]
