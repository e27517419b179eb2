import uuid
from datetime import date

from sqlalchemy import select

from app.models.exercise import Exercise
from app.models.mesocycle import Mesocycle

# hex made only of digits: must still come back as the same UUID
DIGITS_ONLY = uuid.UUID("12345678-1234-4123-8123-123456789012")


async def test_digit_only_uuids_round_trip(db, session_maker):
    db.add(Mesocycle(id=DIGITS_ONLY, user_id=DIGITS_ONLY, title="Digits", start_date=date(2024, 6, 3), weeks=4))
    db.add(Exercise(name="Digit Row", is_public=False, owner_id=DIGITS_ONLY))
    await db.commit()

    async with session_maker() as fresh:
        mesocycle = (await fresh.execute(select(Mesocycle).where(Mesocycle.user_id == DIGITS_ONLY))).scalar_one()
        assert mesocycle.id == DIGITS_ONLY
        assert isinstance(mesocycle.user_id, uuid.UUID)

        exercise = (await fresh.execute(select(Exercise).where(Exercise.owner_id == DIGITS_ONLY))).scalar_one()
        assert exercise.owner_id == DIGITS_ONLY
