"""Exercise catalogue endpoints: public exercises plus the caller's custom ones."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import COMMON_TAGS, EQUIPMENT_TYPES, MUSCLE_GROUPS
from app.core.security import get_current_user_id
from app.db.session import get_db
from app.models.exercise import Exercise
from app.schemas.exercise import ExerciseCreate, ExerciseRead

logger = logging.getLogger(__name__)

router = APIRouter()


def _visible_to(user_id: uuid.UUID):
    return or_(Exercise.is_public.is_(True), Exercise.owner_id == user_id)


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    q: str | None = None,
    muscle: str | None = None,
    type: str | None = None,
    tag: str | None = None,
    skip: int = 0,
    limit: int = 200,
):
    """Catalogue visible to the caller, filtered by name search, primary muscle, equipment type and tag."""
    stmt = select(Exercise).where(_visible_to(user_id))
    if q:
        stmt = stmt.where(Exercise.name.ilike(f"%{q.strip()}%"))
    if muscle:
        stmt = stmt.where(Exercise.primary_muscle == muscle)
    if type:
        stmt = stmt.where(Exercise.type == type)
    result = await db.execute(stmt.order_by(Exercise.name))
    exercises = list(result.scalars().all())
    # tags is a JSON list; filter here so the query stays portable
    if tag:
        exercises = [e for e in exercises if tag in (e.tags or [])]
    return exercises[skip : skip + limit]


@router.get("/filters")
async def filter_options():
    """Values offered by the catalogue filters."""
    return {"types": EQUIPMENT_TYPES, "muscles": MUSCLE_GROUPS, "tags": COMMON_TAGS}


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Create a custom exercise owned by (and visible only to) the caller."""
    exercise = Exercise(**payload.model_dump(), is_public=False, owner_id=user_id)
    db.add(exercise)
    await db.flush()
    await db.refresh(exercise)
    logger.info("User %s created exercise %s (%s)", user_id, exercise.id, exercise.name)
    return exercise


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    result = await db.execute(
        select(Exercise).where(Exercise.id == exercise_id, _visible_to(user_id))
    )
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise
