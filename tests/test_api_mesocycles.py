from sqlalchemy import select

from app.models.exercise import Exercise
from app.models.template_change import TemplateChange
from tests.conftest import OTHER_USER_ID, USER_ID

API = "/api/v1/mesocycles"


def _payload(exercises, **overrides):
    payload = {
        "title": "Block 1",
        "start_date": "2024-06-03",
        "weeks": 2,
        "templates": [
            {
                "label": "Push",
                "day_of_week": [3, 1],
                "exercises": [
                    {
                        "exercise_id": str(exercises["bench"].id),
                        "order_idx": 0,
                        "defaults": {"sets": 3, "reps": "8-10", "rir": 2},
                    }
                ],
            }
        ],
    }
    payload.update(overrides)
    return payload


async def test_requires_valid_user_header(client):
    r = await client.get(API, headers={"X-User-Id": "not-a-uuid"})
    assert r.status_code == 401


async def test_create_generates_workouts_and_progression(client, exercises):
    r = await client.post(API, json=_payload(exercises, progression_template_id="linear-strength"))
    assert r.status_code == 201
    mesocycle_id = r.json()["id"]

    r = await client.get(f"{API}/{mesocycle_id}")
    assert r.status_code == 200
    data = r.json()
    assert [(w["scheduled_for"], w["label"]) for w in data["workouts"]] == [
        ("2024-06-03", "Push - Week 1"),
        ("2024-06-05", "Push - Week 1"),
        ("2024-06-10", "Push - Week 2"),
        ("2024-06-12", "Push - Week 2"),
    ]
    assert data["progression"]["progression_type"] == "linear"
    assert len(data["progression"]["weekly_progressions"]) == 2
    assert data["workouts"][0]["intensity_modifier"]["weight"] == 100
    # 8-week template compressed to 2 weeks: week 2 takes the pattern's 5th week
    assert data["workouts"][2]["intensity_modifier"]["weight"] == 107.5


async def test_unknown_progression_template_is_rejected(client, exercises):
    r = await client.post(API, json=_payload(exercises, progression_template_id="nope"))
    assert r.status_code == 400


async def test_invalid_day_of_week_is_rejected(client, exercises):
    payload = _payload(exercises)
    payload["templates"][0]["day_of_week"] = [7]
    r = await client.post(API, json=payload)
    assert r.status_code == 422


async def test_templates_are_derived_from_workouts(client, exercises):
    mesocycle_id = (await client.post(API, json=_payload(exercises))).json()["id"]
    r = await client.get(f"{API}/{mesocycle_id}/templates")
    assert r.status_code == 200
    (template,) = r.json()
    assert template["label"] == "Push"
    assert template["day_of_week"] == [1, 3]
    assert [e["exercise_name"] for e in template["exercises"]] == ["Bench Press"]
    assert template["exercises"][0]["defaults"]["reps"] == "8-10"


async def test_add_exercise_from_date(client, db, exercises):
    mesocycle_id = (await client.post(API, json=_payload(exercises))).json()["id"]
    r = await client.post(
        f"{API}/{mesocycle_id}/templates/exercises",
        json={
            "template_label": "Push",
            "exercise_id": str(exercises["curl"].id),
            "order_idx": 1,
            "defaults": {"sets": 2, "reps": "12"},
            "from_date": "2024-06-10",
        },
    )
    assert r.status_code == 200
    assert r.json() == {"success": True, "affected_workouts": 2, "new_exercises": 2}

    workouts = (await client.get(f"{API}/{mesocycle_id}")).json()["workouts"]
    week1 = (await client.get(f"/api/v1/workouts/{workouts[0]['id']}")).json()
    week2 = (await client.get(f"/api/v1/workouts/{workouts[2]['id']}")).json()
    assert len(week1["exercises"]) == 1
    assert week1["template_version"] == 1
    assert [e["exercise"]["name"] for e in week2["exercises"]] == ["Bench Press", "Barbell Curl"]
    assert week2["template_version"] == 2

    changes = (await db.execute(select(TemplateChange))).scalars().all()
    assert len(changes) == 1
    assert changes[0].change_type == "add_exercise"
    assert len(changes[0].affected_workouts) == 2


async def test_add_exercise_without_matching_workouts_writes_nothing(client, db, exercises):
    mesocycle_id = (await client.post(API, json=_payload(exercises))).json()["id"]
    r = await client.post(
        f"{API}/{mesocycle_id}/templates/exercises",
        json={"template_label": "Legs", "exercise_id": str(exercises["squat"].id), "from_date": "2024-06-01"},
    )
    assert r.json() == {"success": True, "affected_workouts": 0, "new_exercises": 0}
    assert (await db.execute(select(TemplateChange))).scalars().all() == []


async def test_only_one_default_mesocycle(client, exercises):
    first = (await client.post(API, json=_payload(exercises, title="A", is_default=True))).json()
    second = (await client.post(API, json=_payload(exercises, title="B", is_default=True))).json()

    listed = {m["title"]: m["is_default"] for m in (await client.get(API)).json()}
    assert listed == {"A": False, "B": True}

    r = await client.patch(f"{API}/{first['id']}", json={"is_default": True})
    assert r.status_code == 200
    assert r.json()["is_default"] is True
    assert (await client.get(f"{API}/{second['id']}")).json()["is_default"] is False


async def test_plan_preview_does_not_save(client, exercises):
    payload = _payload(exercises, progression_template_id="wave-loading")
    r = await client.post(f"{API}/plan", json=payload)
    assert r.status_code == 200
    plan = r.json()
    assert plan["basics"] == {"title": "Block 1", "weeks": 2, "start_date": "2024-06-03"}
    assert len(plan["workouts"]) == 4
    assert len(plan["exercises"]) == 4
    assert len(plan["progression"]["weekly_progressions"]) == 2
    assert (await client.get(API)).json() == []


async def test_delete_mesocycle(client, exercises):
    mesocycle_id = (await client.post(API, json=_payload(exercises))).json()["id"]
    r = await client.delete(f"{API}/{mesocycle_id}")
    assert r.status_code == 204
    assert (await client.get(f"{API}/{mesocycle_id}")).status_code == 404


async def test_other_users_mesocycle_is_not_found(client, exercises):
    mesocycle_id = (await client.post(API, json=_payload(exercises))).json()["id"]
    r = await client.get(f"{API}/{mesocycle_id}", headers={"X-User-Id": str(OTHER_USER_ID)})
    assert r.status_code == 404
    r = await client.delete(f"{API}/{mesocycle_id}", headers={"X-User-Id": str(OTHER_USER_ID)})
    assert r.status_code == 404


async def _private_exercise(db, owner_id, name):
    exercise = Exercise(name=name, type="cable", primary_muscle="back", is_public=False, owner_id=owner_id)
    db.add(exercise)
    await db.commit()
    return exercise


def _with_exercise(exercises, exercise_id):
    payload = _payload(exercises)
    payload["templates"][0]["exercises"].append({"exercise_id": str(exercise_id), "order_idx": 1})
    return payload


async def test_templates_cannot_use_other_users_private_exercise(client, db, exercises):
    secret = await _private_exercise(db, OTHER_USER_ID, "Secret Move")

    r = await client.post(API, json=_with_exercise(exercises, secret.id))
    assert r.status_code == 404
    assert str(secret.id) in r.json()["detail"]
    assert (await client.get(API)).json() == []

    r = await client.post(f"{API}/plan", json=_with_exercise(exercises, secret.id))
    assert r.status_code == 404


async def test_templates_reject_unknown_exercise(client, exercises):
    r = await client.post(API, json=_with_exercise(exercises, "00000000-0000-4000-8000-000000000000"))
    assert r.status_code == 404


async def test_templates_accept_own_private_exercise(client, db, exercises):
    mine = await _private_exercise(db, USER_ID, "My Row")
    r = await client.post(API, json=_with_exercise(exercises, mine.id))
    assert r.status_code == 201

    templates = (await client.get(f"{API}/{r.json()['id']}/templates")).json()
    assert [e["exercise_name"] for e in templates[0]["exercises"]] == ["Bench Press", "My Row"]
