"""Seed the public exercise catalogue and print table row counts.

Usage: python scripts/seed_exercises.py   (run after `alembic upgrade head`)
"""

import asyncio
import os
import sys

# Add parent directory to path so we can import app modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import func, select, text

from app import models  # noqa: F401
from app.db import engine, session_scope
from app.models.exercise import Exercise

# name, equipment type, primary muscle, tags
CATALOGUE = [
    ("Barbell Bench Press", "barbell", "chest", ["compound", "push"]),
    ("Incline Dumbbell Press", "dumbbell", "chest", ["compound", "push"]),
    ("Cable Fly", "machine", "chest", ["isolation", "push"]),
    ("Barbell Row", "barbell", "back", ["compound", "pull"]),
    ("Pull Up", "bodyweight", "back", ["compound", "pull"]),
    ("Lat Pulldown", "machine", "back", ["compound", "pull"]),
    ("Overhead Press", "barbell", "shoulders", ["compound", "push"]),
    ("Lateral Raise", "dumbbell", "shoulders", ["isolation"]),
    ("Barbell Curl", "barbell", "biceps", ["isolation", "arms", "pull"]),
    ("Triceps Pushdown", "machine", "triceps", ["isolation", "arms", "push"]),
    ("Back Squat", "barbell", "quads", ["compound", "legs"]),
    ("Leg Extension", "machine", "quads", ["isolation", "legs"]),
    ("Romanian Deadlift", "barbell", "hamstrings", ["compound", "legs"]),
    ("Leg Curl", "machine", "hamstrings", ["isolation", "legs"]),
    ("Hip Thrust", "barbell", "glutes", ["compound", "legs"]),
    ("Bulgarian Split Squat", "dumbbell", "glutes", ["compound", "legs", "unilateral"]),
    ("Standing Calf Raise", "machine", "calves", ["isolation", "legs"]),
    ("Dumbbell Shrug", "dumbbell", "traps", ["isolation", "pull"]),
]

TABLES = ["exercises", "mesocycles", "workouts", "workout_exercises", "sets_logged", "user_preferences"]


async def seed():
    async with session_scope() as session:
        result = await session.execute(select(Exercise.name).where(Exercise.is_public.is_(True)))
        existing = {name for name in result.scalars().all()}
        added = 0
        for name, type_, muscle, tags in CATALOGUE:
            if name in existing:
                continue
            session.add(Exercise(name=name, type=type_, primary_muscle=muscle, tags=tags, is_public=True))
            added += 1
        await session.commit()
        print(f"Added {added} exercise(s), {len(existing)} already present.")

        total = await session.execute(select(func.count(Exercise.id)))
        print(f"Catalogue size: {total.scalar()}")
        for table in TABLES:
            count = await session.execute(text(f"SELECT count(*) FROM {table}"))
            print(f"Table '{table}' row count: {count.scalar()}")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
