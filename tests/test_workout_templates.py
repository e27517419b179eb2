import uuid
from datetime import date

from app.services.workout_templates import (
    base_label,
    build_mesocycle_plan,
    generate_workouts_from_templates,
    workouts_to_templates,
)

BENCH = uuid.uuid4()
ROW = uuid.uuid4()

TEMPLATES = [
    {
        "label": "Push",
        "day_of_week": [1, 3],
        "exercises": [{"exercise_id": BENCH, "order_idx": 0, "defaults": {"sets": 3, "reps": "8-10"}}],
    },
    {
        "label": "Pull",
        "day_of_week": [5],
        "exercises": [{"exercise_id": ROW, "order_idx": 0, "defaults": {"sets": 4}}],
    },
]


def test_base_label():
    assert base_label("Push - Week 3") == "Push"
    assert base_label("Push - Week 12") == "Push"
    assert base_label("Upper - Week A") == "Upper - Week A"
    assert base_label(None) == ""


def test_generate_from_monday_start():
    workouts, exercises = generate_workouts_from_templates(TEMPLATES, date(2024, 6, 3), 2, "m1")
    assert [(w["scheduled_for"], w["label"]) for w in workouts] == [
        (date(2024, 6, 3), "Push - Week 1"),
        (date(2024, 6, 5), "Push - Week 1"),
        (date(2024, 6, 7), "Pull - Week 1"),
        (date(2024, 6, 10), "Push - Week 2"),
        (date(2024, 6, 12), "Push - Week 2"),
        (date(2024, 6, 14), "Pull - Week 2"),
    ]
    assert {w["week_number"] for w in workouts[:3]} == {1}
    assert all(w["mesocycle_id"] == "m1" for w in workouts)
    assert len(exercises) == 6
    assert {e["workout_id"] for e in exercises} == {w["id"] for w in workouts}


def test_generate_never_schedules_before_start():
    # Sunday start: Monday of the same Sunday-based week is after it
    workouts, _ = generate_workouts_from_templates(
        [{"label": "Legs", "day_of_week": [0, 1], "exercises": []}], date(2024, 6, 9), 1, "m1"
    )
    assert [w["scheduled_for"] for w in workouts] == [date(2024, 6, 9), date(2024, 6, 10)]
    assert all(w["scheduled_for"] >= date(2024, 6, 9) for w in workouts)


def test_generated_exercise_defaults_are_copies():
    _, exercises = generate_workouts_from_templates(TEMPLATES, date(2024, 6, 3), 1, "m1")
    exercises[0]["defaults"]["sets"] = 99
    assert TEMPLATES[0]["exercises"][0]["defaults"]["sets"] == 3
    assert exercises[1]["defaults"]["sets"] == 3


def test_intensity_comes_from_matching_week():
    progression = {
        "weekly_progressions": [
            {"week": 1, "intensity": {"weight": 100}},
            {"week": 2, "intensity": {"weight": 105}},
        ]
    }
    workouts, _ = generate_workouts_from_templates(TEMPLATES, date(2024, 6, 3), 3, "m1", progression)
    by_week = {w["week_number"]: w["intensity_modifier"] for w in workouts}
    assert by_week == {1: {"weight": 100}, 2: {"weight": 105}, 3: None}


def test_workouts_to_templates():
    workouts = [
        {
            "label": "Push - Week 1",
            "scheduled_for": "2024-06-03",
            "workout_exercises": [
                {"exercise_id": "b", "order_idx": 1, "exercise_name": "Dips"},
                {"exercise_id": "a", "order_idx": 0, "exercise": {"name": "Bench Press"}},
            ],
        },
        {"label": "Push - Week 1", "scheduled_for": "2024-06-05", "workout_exercises": []},
        {"label": "Pull - Week 1", "scheduled_for": date(2024, 6, 9)},
        {"label": "Push - Week 2", "scheduled_for": "2024-06-10"},
    ]
    templates = workouts_to_templates(workouts)
    assert [t["label"] for t in templates] == ["Push", "Pull"]
    push, pull = templates
    assert push["day_of_week"] == [1, 3]
    assert [e["exercise_name"] for e in push["exercises"]] == ["Bench Press", "Dips"]
    assert pull["day_of_week"] == [0]
    assert pull["exercises"] == []
    assert push["id"] != pull["id"]


def test_templates_round_trip_through_generated_workouts():
    workouts, exercises = generate_workouts_from_templates(TEMPLATES, date(2024, 6, 3), 2, "m1")
    for workout in workouts:
        workout["workout_exercises"] = [e for e in exercises if e["workout_id"] == workout["id"]]
    templates = workouts_to_templates(workouts)
    assert [(t["label"], t["day_of_week"]) for t in templates] == [("Push", [1, 3]), ("Pull", [5])]


def test_build_mesocycle_plan():
    plan = build_mesocycle_plan("Summer Block", date(2024, 6, 3), 2, TEMPLATES)
    assert plan["basics"] == {"title": "Summer Block", "weeks": 2, "start_date": "2024-06-03"}
    assert plan["progression"] is None
    assert len(plan["workouts"]) == 6
    assert all(w["mesocycle_id"] == plan["mesocycle_id"] for w in plan["workouts"])
    assert len(plan["workout_templates"]) == 2
