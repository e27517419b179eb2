"""Workout, WorkoutExercise (planned) and SetLogged (performed) models."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, Numeric, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, JSONType


class Workout(Base):
    """A scheduled session inside a mesocycle. Label is "<template> - Week <n>" when generated."""

    __tablename__ = "workouts"
    __table_args__ = (Index("ix_workouts_mesocycle_scheduled", "mesocycle_id", "scheduled_for"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    mesocycle_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("mesocycles.id", ondelete="CASCADE"), nullable=False
    )
    scheduled_for: Mapped[date] = mapped_column(Date, nullable=False)
    label: Mapped[str | None] = mapped_column(Text, nullable=True)
    week_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    intensity_modifier: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    template_version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    template_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    mesocycle: Mapped["Mesocycle"] = relationship("Mesocycle", back_populates="workouts")
    exercises: Mapped[list["WorkoutExercise"]] = relationship(
        "WorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.order_idx",
    )
    sets: Mapped[list["SetLogged"]] = relationship(
        "SetLogged", back_populates="workout", cascade="all, delete-orphan"
    )


class WorkoutExercise(Base):
    """Planned exercise slot in a workout.

    defaults: {"sets": 3, "reps": "8-12", "rir": 2, "rpe": null, "rest": "2:00"}
    """

    __tablename__ = "workout_exercises"
    __table_args__ = (Index("ix_workout_exercises_workout_id", "workout_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("exercises.id", ondelete="RESTRICT"), nullable=False
    )
    order_idx: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    defaults: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    week_overrides: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    template_version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    is_template_derived: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    workout: Mapped["Workout"] = relationship("Workout", back_populates="exercises")
    exercise: Mapped["Exercise"] = relationship("Exercise")


class SetLogged(Base):
    """One performed set: weight/reps with optional RIR/RPE, myo-reps, partials and the planned targets."""

    __tablename__ = "sets_logged"
    __table_args__ = (
        Index("ix_sets_logged_workout_id", "workout_id"),
        Index("ix_sets_logged_exercise_logged_at", "exercise_id", "logged_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("exercises.id", ondelete="RESTRICT"), nullable=False
    )
    set_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[float | None] = mapped_column(Numeric(8, 2), nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rir: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rpe: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rest_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_myo_rep: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_partial: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    myo_rep_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    partial_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    planned_weight: Mapped[float | None] = mapped_column(Numeric(8, 2), nullable=True)
    planned_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    planned_rir: Mapped[int | None] = mapped_column(Integer, nullable=True)
    logged_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    workout: Mapped["Workout"] = relationship("Workout", back_populates="sets")
    exercise: Mapped["Exercise"] = relationship("Exercise")
