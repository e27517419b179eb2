"""Initial schema: exercises, mesocycles, workouts, planned exercises, logged sets, preferences.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "exercises",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("primary_muscle", sa.String(length=100), nullable=True),
        sa.Column("tags", postgresql.JSONB(), nullable=True),
        sa.Column("equipment_detail", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_exercises_name"), "exercises", ["name"], unique=False)
    op.create_index(op.f("ix_exercises_primary_muscle"), "exercises", ["primary_muscle"], unique=False)

    op.create_table(
        "mesocycles",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("weeks", sa.Integer(), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_mesocycles_user_id"), "mesocycles", ["user_id"], unique=False)
    op.create_index("ix_mesocycles_user_start", "mesocycles", ["user_id", "start_date"], unique=False)

    op.create_table(
        "mesocycle_progressions",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("mesocycle_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("progression_type", sa.String(length=20), nullable=False),
        sa.Column("baseline_week", postgresql.JSONB(), nullable=True),
        sa.Column("weekly_progressions", postgresql.JSONB(), nullable=True),
        sa.Column("global_settings", postgresql.JSONB(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["mesocycle_id"], ["mesocycles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("mesocycle_id"),
    )

    op.create_table(
        "workouts",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("mesocycle_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("scheduled_for", sa.Date(), nullable=False),
        sa.Column("label", sa.Text(), nullable=True),
        sa.Column("week_number", sa.Integer(), nullable=True),
        sa.Column("intensity_modifier", postgresql.JSONB(), nullable=True),
        sa.Column("template_version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("template_id", sa.Text(), nullable=True),
        sa.Column("last_modified", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["mesocycle_id"], ["mesocycles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_workouts_mesocycle_scheduled", "workouts", ["mesocycle_id", "scheduled_for"], unique=False
    )

    op.create_table(
        "workout_exercises",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("workout_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("exercise_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("order_idx", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("defaults", postgresql.JSONB(), nullable=True),
        sa.Column("week_overrides", postgresql.JSONB(), nullable=True),
        sa.Column("template_version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_template_derived", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["workout_id"], ["workouts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workout_exercises_workout_id", "workout_exercises", ["workout_id"], unique=False)

    op.create_table(
        "sets_logged",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("workout_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("exercise_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("set_number", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("rir", sa.Integer(), nullable=True),
        sa.Column("rpe", sa.Integer(), nullable=True),
        sa.Column("rest_seconds", sa.Integer(), nullable=True),
        sa.Column("is_myo_rep", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_partial", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("myo_rep_count", sa.Integer(), nullable=True),
        sa.Column("partial_count", sa.Integer(), nullable=True),
        sa.Column("planned_weight", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("planned_reps", sa.Integer(), nullable=True),
        sa.Column("planned_rir", sa.Integer(), nullable=True),
        sa.Column("logged_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["workout_id"], ["workouts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sets_logged_workout_id", "sets_logged", ["workout_id"], unique=False)
    op.create_index(
        "ix_sets_logged_exercise_logged_at", "sets_logged", ["exercise_id", "logged_at"], unique=False
    )

    op.create_table(
        "template_changes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("mesocycle_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("change_type", sa.String(length=50), nullable=False),
        sa.Column("affected_workouts", postgresql.JSONB(), nullable=True),
        sa.Column("old_value", postgresql.JSONB(), nullable=True),
        sa.Column("new_value", postgresql.JSONB(), nullable=True),
        sa.Column("applied_from_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.ForeignKeyConstraint(["mesocycle_id"], ["mesocycles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "user_preferences",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("weight_unit", sa.String(length=10), nullable=True),
        sa.Column("theme", sa.String(length=10), nullable=False, server_default="system"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )


def downgrade() -> None:
    op.drop_table("user_preferences")
    op.drop_table("template_changes")
    op.drop_index("ix_sets_logged_exercise_logged_at", table_name="sets_logged")
    op.drop_index("ix_sets_logged_workout_id", table_name="sets_logged")
    op.drop_table("sets_logged")
    op.drop_index("ix_workout_exercises_workout_id", table_name="workout_exercises")
    op.drop_table("workout_exercises")
    op.drop_index("ix_workouts_mesocycle_scheduled", table_name="workouts")
    op.drop_table("workouts")
    op.drop_table("mesocycle_progressions")
    op.drop_index("ix_mesocycles_user_start", table_name="mesocycles")
    op.drop_index(op.f("ix_mesocycles_user_id"), table_name="mesocycles")
    op.drop_table("mesocycles")
    op.drop_index(op.f("ix_exercises_primary_muscle"), table_name="exercises")
    op.drop_index(op.f("ix_exercises_name"), table_name="exercises")
    op.drop_table("exercises")
