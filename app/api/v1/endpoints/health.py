"""Liveness and readiness probes."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db
from app.models.exercise import Exercise

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health():
    """Liveness. built_at comes from the BUILT_AT env var when the image sets it."""
    payload: dict = {"status": "ok", "environment": get_settings().environment}
    built_at = os.environ.get("BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Database reachable, plus the size of the public catalogue (0 means it was never seeded)."""
    try:
        result = await db.execute(select(func.count(Exercise.id)).where(Exercise.is_public.is_(True)))
    except SQLAlchemyError as e:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "error", "database": str(e)})
    catalogue = result.scalar_one()
    if not catalogue:
        logger.warning("Public exercise catalogue is empty; run scripts/seed_exercises.py")
    return {"status": "ok", "database": "connected", "public_exercises": catalogue}
