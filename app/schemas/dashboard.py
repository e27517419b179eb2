"""Dashboard schema."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel

from app.schemas.stats import RecentWorkout


class NextWorkout(BaseModel):
    id: UUID
    label: str
    scheduled_for: date
    is_today: bool = False
    is_tomorrow: bool = False
    exercises: list[str] = []


class DashboardOverview(BaseModel):
    mesocycle_id: UUID | None = None
    mesocycle_title: str | None = None
    current_week: int | None = None
    total_workouts: int = 0
    next_workout: NextWorkout | None = None
    personal_records: int = 0
    recent_workouts: list[RecentWorkout] = []
