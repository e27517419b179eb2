"""Request identity: the upstream identity provider authenticates, we read the user id."""

import uuid

from fastapi import HTTPException, Request

from app.core.config import get_settings


async def get_current_user_id(request: Request) -> uuid.UUID:
    """Dependency returning the authenticated user's UUID or raising 401."""
    settings = get_settings()
    raw = request.headers.get(settings.user_id_header)
    if not raw:
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return uuid.UUID(raw.strip())
    except ValueError:
        raise HTTPException(status_code=401, detail="Unauthorized") from None
