"""Mesocycle (training program) and its stored progression plan."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, JSONType


class Mesocycle(Base):
    """A multi-week program owned by one user. At most one is flagged as the default."""

    __tablename__ = "mesocycles"
    __table_args__ = (Index("ix_mesocycles_user_start", "user_id", "start_date"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    weeks: Mapped[int] = mapped_column(Integer, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    workouts: Mapped[list["Workout"]] = relationship(
        "Workout",
        back_populates="mesocycle",
        cascade="all, delete-orphan",
        order_by="Workout.scheduled_for",
    )
    progression: Mapped["MesocycleProgression | None"] = relationship(
        "MesocycleProgression",
        back_populates="mesocycle",
        cascade="all, delete-orphan",
        uselist=False,
    )


class MesocycleProgression(Base):
    """Week-by-week intensity plan attached to a mesocycle.

    weekly_progressions: [{"week": 1, "intensity": {...}, "is_deload": false, "label": "..."}]
    """

    __tablename__ = "mesocycle_progressions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    mesocycle_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("mesocycles.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    progression_type: Mapped[str] = mapped_column(String(20), nullable=False)
    baseline_week: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    weekly_progressions: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    global_settings: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    mesocycle: Mapped["Mesocycle"] = relationship("Mesocycle", back_populates="progression")
