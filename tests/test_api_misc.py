from httpx import AsyncClient

from tests.conftest import OTHER_USER_ID


async def test_health(client: AsyncClient):
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


async def test_readiness_reports_catalogue(client: AsyncClient, exercises):
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": "connected", "public_exercises": 4}


async def test_preferences_default_then_update(client: AsyncClient):
    resp = await client.get("/api/v1/preferences")
    assert resp.status_code == 200
    assert resp.json() == {"weight_unit": "kg", "theme": "system"}

    resp = await client.put("/api/v1/preferences", json={"weight_unit": "lbs"})
    assert resp.status_code == 200
    assert resp.json() == {"weight_unit": "lbs", "theme": "system"}

    resp = await client.put("/api/v1/preferences", json={"theme": "dark"})
    assert resp.json() == {"weight_unit": "lbs", "theme": "dark"}

    resp = await client.get("/api/v1/preferences")
    assert resp.json() == {"weight_unit": "lbs", "theme": "dark"}


async def test_preferences_rejects_unknown_unit(client: AsyncClient):
    resp = await client.put("/api/v1/preferences", json={"weight_unit": "stone"})
    assert resp.status_code == 422


async def test_one_rm(client: AsyncClient):
    resp = await client.get("/api/v1/tools/one-rm", params={"weight": 100, "reps": 5})
    assert resp.status_code == 200
    data = resp.json()
    assert data["one_rm"] == 117
    assert data["average"] == 116
    assert set(data["all_formulas"]) == {"epley", "brzycki", "lombardi", "oconner", "mayhew"}


async def test_one_rm_percentage_and_reps(client: AsyncClient):
    resp = await client.get("/api/v1/tools/one-rm/percentage", params={"one_rm": 200, "percentage": 80})
    assert resp.json()["weight"] == 160

    resp = await client.get("/api/v1/tools/one-rm/reps-at-percentage", params={"percentage": 80})
    assert resp.json()["reps"] == 8


async def test_plate_calculator(client: AsyncClient):
    resp = await client.get("/api/v1/tools/plate-calculator", params={"target_weight": 100})
    assert resp.status_code == 200
    data = resp.json()
    assert data["bar_weight"] == 20
    assert data["per_side"] == 40
    assert data["plates_per_side"] == [20, 20]
    assert data["total_weight"] == 100

    resp = await client.get(
        "/api/v1/tools/plate-calculator", params={"target_weight": 100, "bar": "Trap Bar"}
    )
    assert resp.status_code == 400


async def test_progression_templates(client: AsyncClient):
    resp = await client.get("/api/v1/progression/templates", params={"goal": "strength"})
    assert resp.status_code == 200
    assert {t["id"] for t in resp.json()} == {"linear-strength", "wave-loading", "undulating-power"}

    resp = await client.get("/api/v1/progression/templates/nope")
    assert resp.status_code == 404

    resp = await client.post("/api/v1/progression/templates/linear-strength/apply", json={"weeks": 4})
    assert resp.status_code == 200
    data = resp.json()
    assert data["template_id"] == "linear-strength"
    assert [w["week"] for w in data["weekly_progressions"]] == [1, 2, 3, 4]


async def test_progression_strategies(client: AsyncClient):
    resp = await client.get("/api/v1/progression/strategies")
    assert set(resp.json()) == {"strength", "hypertrophy", "peaking", "conditioning"}


async def test_progression_requires_user(client: AsyncClient):
    resp = await client.get("/api/v1/progression/strategies", headers={"X-User-Id": ""})
    assert resp.status_code == 401


async def test_exercise_catalogue(client: AsyncClient, exercises):
    resp = await client.get("/api/v1/exercises")
    assert resp.status_code == 200
    assert [e["name"] for e in resp.json()] == ["Back Squat", "Barbell Curl", "Bench Press", "Plank"]

    resp = await client.get("/api/v1/exercises", params={"q": "bar"})
    assert [e["name"] for e in resp.json()] == ["Barbell Curl"]

    resp = await client.get("/api/v1/exercises", params={"tag": "compound"})
    assert [e["name"] for e in resp.json()] == ["Back Squat", "Bench Press"]

    resp = await client.get("/api/v1/exercises", params={"muscle": "chest"})
    assert [e["name"] for e in resp.json()] == ["Bench Press"]

    resp = await client.get("/api/v1/exercises/filters")
    assert "chest" in resp.json()["muscles"]


async def test_custom_exercise_is_private(client: AsyncClient, exercises):
    resp = await client.post(
        "/api/v1/exercises", json={"name": "Cable Fly", "type": "cable", "primary_muscle": "chest"}
    )
    assert resp.status_code == 201
    created = resp.json()
    assert created["is_public"] is False

    resp = await client.get(f"/api/v1/exercises/{created['id']}")
    assert resp.status_code == 200

    other = {"X-User-Id": str(OTHER_USER_ID)}
    resp = await client.get(f"/api/v1/exercises/{created['id']}", headers=other)
    assert resp.status_code == 404
    resp = await client.get("/api/v1/exercises", headers=other)
    assert "Cable Fly" not in [e["name"] for e in resp.json()]


async def test_plate_calculator_rejects_bad_plates(client: AsyncClient):
    for plates in ("20,0", "20,-5", "nan", ""):
        resp = await client.get(
            "/api/v1/tools/plate-calculator", params={"target_weight": 60, "available_plates": plates}
        )
        assert resp.status_code == 400, plates


async def test_plate_calculator_with_custom_plates(client: AsyncClient):
    resp = await client.get(
        "/api/v1/tools/plate-calculator", params={"target_weight": 62.5, "available_plates": "10,1.25"}
    )
    data = resp.json()
    assert data["plates_per_side"] == [10, 10, 1.25]
    assert data["total_weight"] == 62.5
