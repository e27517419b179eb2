"""Database layer. Import models via `app.models` before the first query."""

from app.db.base import Base, JSONType
from app.db.session import engine, get_db, session_scope

__all__ = ["Base", "JSONType", "engine", "get_db", "session_scope"]
