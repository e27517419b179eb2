import uuid
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db import Base, get_db
from app.main import app
from app.models.exercise import Exercise

USER_ID = uuid.UUID("11111111-1111-4111-8111-111111111111")
OTHER_USER_ID = uuid.UUID("22222222-2222-4222-8222-222222222222")


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"X-User-Id": str(USER_ID)},
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def exercises(db) -> dict[str, Exercise]:
    """Public catalogue: bench (chest), squat (quads), curl (biceps), plank (no muscle)."""
    rows = {
        "bench": Exercise(name="Bench Press", type="barbell", primary_muscle="chest", tags=["compound", "push"]),
        "squat": Exercise(name="Back Squat", type="barbell", primary_muscle="quads", tags=["compound", "legs"]),
        "curl": Exercise(name="Barbell Curl", type="barbell", primary_muscle="biceps", tags=["isolation"]),
        "plank": Exercise(name="Plank", type="bodyweight", primary_muscle=None, tags=[]),
    }
    db.add_all(rows.values())
    await db.commit()
    return rows
