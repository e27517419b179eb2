from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import text

from app.models.mesocycle import Mesocycle
from app.models.workout import SetLogged, Workout, WorkoutExercise
from app.services import stats_queries
from tests.conftest import OTHER_USER_ID, USER_ID

API = "/api/v1/stats"


@pytest.fixture
async def training(db, exercises):
    """
    Default mesocycle started two weeks ago:
      w1 (7 days ago):  bench 100x5, 100x5
      w2 (2 days ago):  bench 105x5, squat 140x3, plank (bodyweight) x30
      w3 (in 2 days):   planned bench + squat, nothing logged
    Another user has a heavier bench that must never show up.
    """
    today = date.today()
    now = datetime.now(timezone.utc)
    bench, squat, plank = exercises["bench"], exercises["squat"], exercises["plank"]

    mesocycle = Mesocycle(
        user_id=USER_ID, title="Block", start_date=today - timedelta(days=14), weeks=4, is_default=True
    )
    w1 = Workout(mesocycle=mesocycle, scheduled_for=today - timedelta(days=7), label="Push - Week 2", week_number=2)
    w2 = Workout(mesocycle=mesocycle, scheduled_for=today - timedelta(days=2), label="Push - Week 3", week_number=3)
    w3 = Workout(mesocycle=mesocycle, scheduled_for=today + timedelta(days=2), label="Push - Week 3", week_number=3)
    db.add_all([mesocycle, w1, w2, w3])
    await db.flush()

    earlier, later = now - timedelta(days=7), now - timedelta(days=2)
    db.add_all(
        [
            SetLogged(workout_id=w1.id, exercise_id=bench.id, set_number=1, weight=100, reps=5, logged_at=earlier),
            SetLogged(
                workout_id=w1.id, exercise_id=bench.id, set_number=2, weight=100, reps=5,
                logged_at=earlier + timedelta(minutes=3),
            ),
            SetLogged(workout_id=w2.id, exercise_id=bench.id, set_number=1, weight=105, reps=5, logged_at=later),
            SetLogged(
                workout_id=w2.id, exercise_id=squat.id, set_number=1, weight=140, reps=3,
                logged_at=later + timedelta(minutes=5),
            ),
            SetLogged(
                workout_id=w2.id, exercise_id=plank.id, set_number=1, weight=None, reps=30,
                logged_at=later + timedelta(minutes=10),
            ),
            WorkoutExercise(workout_id=w3.id, exercise_id=bench.id, order_idx=0, defaults={"sets": 3}),
            WorkoutExercise(workout_id=w3.id, exercise_id=squat.id, order_idx=1, defaults={"sets": 3}),
        ]
    )

    other = Mesocycle(user_id=OTHER_USER_ID, title="Other", start_date=today - timedelta(days=3), weeks=4)
    other_workout = Workout(mesocycle=other, scheduled_for=today - timedelta(days=1), label="Heavy - Week 1")
    db.add_all([other, other_workout])
    await db.flush()
    db.add(SetLogged(workout_id=other_workout.id, exercise_id=bench.id, weight=200, reps=1, logged_at=now))
    await db.commit()
    return {"w1": w1, "w2": w2, "w3": w3, "mesocycle": mesocycle}


async def test_recent_workouts(client, training):
    r = await client.get(f"{API}/recent-workouts")
    assert r.status_code == 200
    rows = [(w["workout_id"], w["set_count"], w["total_volume"]) for w in r.json()]
    assert rows == [
        (str(training["w3"].id), 0, 0.0),
        (str(training["w2"].id), 3, 945.0),
        (str(training["w1"].id), 2, 1000.0),
    ]
    assert r.json()[0]["mesocycle_title"] == "Block"


async def test_personal_records(client, training, exercises):
    records = (await client.get(f"{API}/personal-records")).json()
    assert [r["exercise_name"] for r in records] == ["Back Squat", "Bench Press", "Plank"]
    bench = records[1]
    assert bench["max_weight"]["weight"] == 105.0
    assert bench["max_volume"]["volume"] == 1000.0
    assert bench["max_reps"]["reps"] == 10
    assert records[2]["max_weight"] is None
    assert records[2]["max_reps"]["reps"] == 30

    chest = (await client.get(f"{API}/personal-records", params={"muscle": "chest"})).json()
    assert [r["exercise_name"] for r in chest] == ["Bench Press"]

    squat_only = (
        await client.get(f"{API}/personal-records", params={"exercise_id": str(exercises["squat"].id)})
    ).json()
    assert [r["exercise_name"] for r in squat_only] == ["Back Squat"]

    future = (date.today() + timedelta(days=1)).isoformat()
    assert (await client.get(f"{API}/personal-records", params={"from": future})).json() == []


async def test_volume(client, training, exercises):
    points = (await client.get(f"{API}/volume")).json()["data"]
    assert [(p["total_volume"], p["total_sets"], p["avg_intensity"]) for p in points] == [
        (1000.0, 2, 100.0),
        (945.0, 3, 122.5),
    ]
    bench_only = (await client.get(f"{API}/volume", params={"exercise_id": str(exercises["bench"].id)})).json()
    assert [p["total_volume"] for p in bench_only["data"]] == [1000.0, 525.0]


async def test_muscle_distribution(client, training):
    data = (await client.get(f"{API}/muscle-distribution", params={"months": 0})).json()["data"]
    by_muscle = {d["primary_muscle"]: (d["set_count"], d["total_volume"]) for d in data}
    assert by_muscle == {"chest": (3, 1525.0), "quads": (1, 420.0), "Other": (1, 0.0)}
    assert data[0]["primary_muscle"] == "chest"

    since = (date.today() - timedelta(days=3)).isoformat()
    data = (await client.get(f"{API}/muscle-distribution", params={"from": since})).json()["data"]
    assert {d["primary_muscle"]: d["set_count"] for d in data} == {"chest": 1, "quads": 1, "Other": 1}


async def test_exercise_distribution(client, training):
    r = await client.get(f"{API}/exercise-distribution", params={"muscle_group": "chest"})
    assert r.json()["data"] == [{"exercise_name": "Bench Press", "set_count": 3, "total_volume": 1525.0}]
    r = await client.get(f"{API}/exercise-distribution")
    assert r.status_code == 400


async def test_completion(client, training):
    rate = (await client.get(f"{API}/completion")).json()
    assert rate["total_workouts"] == 3
    assert rate["completed_workouts"] == 2
    assert round(rate["completion_rate"], 2) == 66.67

    by_mesocycle = (
        await client.get(f"{API}/completion", params={"mesocycle_id": str(training["mesocycle"].id)})
    ).json()
    assert by_mesocycle["total_workouts"] == 3

    weeks = (await client.get(f"{API}/weekly-completion")).json()["data"]
    assert sum(w["total_workouts"] for w in weeks) == 3
    assert sum(w["completed_workouts"] for w in weeks) == 2
    assert [w["week"] for w in weeks] == sorted(w["week"] for w in weeks)


async def test_exercise_progress(client, training, exercises):
    body = {"exercise_id": str(exercises["bench"].id)}
    per_set = (await client.post(f"{API}/exercise-progress", json=body)).json()["data"]
    assert [(p["weight"], p["reps"], p["volume"]) for p in per_set] == [
        (100.0, 5, 500.0),
        (100.0, 5, 500.0),
        (105.0, 5, 525.0),
    ]

    r = await client.post(f"{API}/exercise-progress", params={"group_by": "workout"}, json=body)
    per_workout = r.json()["data"]
    assert [(p["sets"], p["volume"], p["weight"], p["reps"]) for p in per_workout] == [
        (2, 1000.0, 100.0, 10),
        (1, 525.0, 105.0, 5),
    ]
    assert per_workout[0]["date"] == training["w1"].scheduled_for.isoformat()


async def test_user_exercises(client, training):
    names = [e["name"] for e in (await client.get(f"{API}/exercises")).json()]
    assert names == ["Back Squat", "Bench Press", "Plank"]


async def test_overview(client, training):
    r = await client.get(API)
    assert r.status_code == 200
    data = r.json()
    assert data["summary"] == {"total_workouts": 3, "total_volume": 1945.0, "avg_sets_per_workout": 2}
    assert len(data["personal_records"]) == 3
    assert data["completion_rate"]["completed_workouts"] == 2
    assert len(data["volume_data"]) == 2
    assert len(data["user_exercises"]) == 3


async def test_overview_survives_failing_section(client, training, monkeypatch):
    async def broken_records(db, user_id):
        await db.execute(text("SELECT missing_column FROM sets_logged"))

    monkeypatch.setattr(stats_queries, "get_personal_records", broken_records)
    r = await client.get(API)
    assert r.status_code == 200
    data = r.json()
    assert data["personal_records"] == []
    assert len(data["recent_workouts"]) == 3
    assert len(data["volume_data"]) == 2
    assert data["completion_rate"]["completed_workouts"] == 2
    assert len(data["user_exercises"]) == 3


async def test_overview_for_new_user(client):
    data = (await client.get(API)).json()
    assert data["recent_workouts"] == []
    assert data["summary"] == {"total_workouts": 0, "total_volume": 0.0, "avg_sets_per_workout": 0}
    assert data["completion_rate"]["completion_rate"] == 0.0


async def test_dashboard(client, training):
    data = (await client.get("/api/v1/dashboard")).json()
    assert data["mesocycle_title"] == "Block"
    assert data["current_week"] == 3
    assert data["total_workouts"] == 3
    assert data["personal_records"] == 3
    assert len(data["recent_workouts"]) == 3
    nxt = data["next_workout"]
    assert nxt["id"] == str(training["w3"].id)
    assert nxt["exercises"] == ["Bench Press", "Back Squat"]
    assert nxt["is_today"] is False
    assert nxt["is_tomorrow"] is False


async def test_dashboard_without_mesocycle(client):
    data = (await client.get("/api/v1/dashboard")).json()
    assert data["current_week"] is None
    assert data["next_workout"] is None
    assert data["personal_records"] == 0
    assert data["recent_workouts"] == []


async def test_export(client, training):
    rows = (await client.get("/api/v1/export/workouts")).json()["data"]
    assert len(rows) == 6
    assert {r["exercise_name"] for r in rows} == {"Bench Press", "Back Squat", "Plank", None}
    assert all(r["weight"] != 200 for r in rows)
    empty = [r for r in rows if r["set_number"] is None]
    assert len(empty) == 1
    assert empty[0]["workout_date"] == training["w3"].scheduled_for.isoformat()
