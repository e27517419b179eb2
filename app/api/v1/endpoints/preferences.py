"""User preferences (weight unit, theme)."""

import logging
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import Theme, WeightUnit
from app.core.security import get_current_user_id
from app.db.session import get_db
from app.models.preferences import UserPreferences
from app.schemas.preferences import PreferencesRead, PreferencesUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _read(prefs: UserPreferences | None) -> PreferencesRead:
    if prefs is None:
        return PreferencesRead()
    return PreferencesRead(
        weight_unit=prefs.weight_unit or WeightUnit.KG,
        theme=prefs.theme or Theme.SYSTEM,
    )


async def _get(db: AsyncSession, user_id: uuid.UUID) -> UserPreferences | None:
    result = await db.execute(select(UserPreferences).where(UserPreferences.user_id == user_id))
    return result.scalar_one_or_none()


@router.get("", response_model=PreferencesRead)
async def get_preferences(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Stored preferences, or the defaults (kg, system theme) when none are saved."""
    return _read(await _get(db, user_id))


@router.put("", response_model=PreferencesRead)
async def put_preferences(
    payload: PreferencesUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Create or update; fields left out keep their current value."""
    prefs = await _get(db, user_id)
    if prefs is None:
        prefs = UserPreferences(user_id=user_id, theme=Theme.SYSTEM.value)
        db.add(prefs)
    for k, v in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(prefs, k, v.value)
    await db.flush()
    logger.info("Saved preferences for user %s", user_id)
    return _read(prefs)
