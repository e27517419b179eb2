"""Statistics response schemas."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class RecentWorkout(BaseModel):
    workout_id: UUID
    workout_date: date
    workout_label: str | None = None
    week_number: int | None = None
    intensity_modifier: dict | None = None
    mesocycle_title: str
    set_count: int = 0
    total_volume: float = 0.0


class WeightRecord(BaseModel):
    weight: float
    reps: int
    date: str


class VolumeRecord(BaseModel):
    volume: float
    date: str


class RepsRecord(BaseModel):
    reps: int
    date: str


class PersonalRecord(BaseModel):
    exercise_id: UUID
    exercise_name: str
    max_weight: WeightRecord | None = None
    max_volume: VolumeRecord | None = None
    max_reps: RepsRecord | None = None


class VolumePoint(BaseModel):
    date: str
    total_volume: float
    total_sets: int
    avg_intensity: float


class MuscleGroupSlice(BaseModel):
    primary_muscle: str
    set_count: int
    total_volume: float


class ExerciseSlice(BaseModel):
    exercise_name: str
    set_count: int
    total_volume: float


class CompletionRate(BaseModel):
    total_workouts: int = 0
    completed_workouts: int = 0
    completion_rate: float = 0.0


class WeeklyCompletion(CompletionRate):
    week: str


class UserExercise(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    type: str | None = None
    primary_muscle: str | None = None
    is_public: bool | None = None


class ExerciseProgressRequest(BaseModel):
    exercise_id: UUID


class ExerciseProgressPoint(BaseModel):
    date: datetime | date | str
    weight: float = 0.0
    reps: int = 0
    rir: float | None = None
    rpe: float | None = None
    volume: float = 0.0
    sets: int | None = None


class SummaryStats(BaseModel):
    total_workouts: int
    total_volume: float
    avg_sets_per_workout: int


class StatsOverview(BaseModel):
    recent_workouts: list[RecentWorkout] = []
    personal_records: list[PersonalRecord] = []
    volume_data: list[VolumePoint] = []
    muscle_distribution: list[MuscleGroupSlice] = []
    completion_rate: CompletionRate = CompletionRate()
    weekly_completion: list[WeeklyCompletion] = []
    user_exercises: list[UserExercise] = []
    summary: SummaryStats


class DataResponse(BaseModel):
    """Envelope used by chart endpoints: {"data": [...]}."""

    data: Any
