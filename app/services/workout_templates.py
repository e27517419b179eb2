"""Weekly workout templates <-> scheduled workouts.

A template is one weekly session ("Push") with the days of week it runs on
(0 = Sunday ... 6 = Saturday) and its ordered exercises. Generating a mesocycle
expands templates into dated workouts labelled "Push - Week 3"; reading a mesocycle
back collapses those workouts into templates again.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta
from typing import Any

from app.services.dates import js_weekday, parse_local_date, sunday_on_or_before

logger = logging.getLogger(__name__)

_WEEK_SUFFIX = re.compile(r" - Week \d+$")


def base_label(label: str | None) -> str:
    """'Push - Week 2' -> 'Push'."""
    return _WEEK_SUFFIX.sub("", label or "")


def week_label(label: str, week_number: int) -> str:
    return f"{label} - Week {week_number}"


def _template_exercise(entry: Mapping[str, Any]) -> dict[str, Any]:
    exercise = entry.get("exercise") or {}
    return {
        "exercise_id": entry["exercise_id"],
        "exercise_name": entry.get("exercise_name") or exercise.get("name"),
        "order_idx": entry.get("order_idx") or 0,
        "defaults": entry.get("defaults") or {},
    }


def workouts_to_templates(workouts: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    Collapse scheduled workouts into weekly templates keyed by base label.

    The first workout seen for a label supplies the exercise list (sorted by order_idx);
    every workout adds its day of week. Templates keep first-seen order.
    """
    templates: dict[str, dict[str, Any]] = {}
    for workout in workouts:
        label = base_label(workout.get("label"))
        day = js_weekday(parse_local_date(workout["scheduled_for"]))
        template = templates.get(label)
        if template is None:
            entries = sorted(workout.get("workout_exercises") or [], key=lambda e: e.get("order_idx") or 0)
            templates[label] = {
                "id": str(uuid.uuid4()),
                "label": label,
                "day_of_week": [day],
                "exercises": [_template_exercise(e) for e in entries],
            }
        elif day not in template["day_of_week"]:
            template["day_of_week"].append(day)
            template["day_of_week"].sort()
    return list(templates.values())


def _workout_date(mesocycle_start: date, week_index: int, day_of_week: int) -> date:
    """Date of `day_of_week` in the given week of a program starting on mesocycle_start."""
    if week_index == 0 and day_of_week == js_weekday(mesocycle_start):
        return mesocycle_start
    week_begin = mesocycle_start + timedelta(weeks=week_index)
    workout_date = sunday_on_or_before(week_begin) + timedelta(days=day_of_week)
    if workout_date < mesocycle_start:
        workout_date += timedelta(weeks=1)
    return workout_date


def _week_intensity(progression: Mapping[str, Any] | None, week_number: int) -> dict | None:
    if not progression:
        return None
    for entry in progression.get("weekly_progressions") or []:
        if entry.get("week") == week_number:
            return entry.get("intensity")
    return None


def generate_workouts_from_templates(
    templates: Sequence[Mapping[str, Any]],
    start_date: date,
    weeks: int,
    mesocycle_id: uuid.UUID | str,
    progression: Mapping[str, Any] | None = None,
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """
    Expand weekly templates into dated workouts (and their exercise rows) for `weeks` weeks.

    Returns (workouts, exercises); ids are pre-assigned so exercises can reference workouts.
    """
    workouts: list[dict[str, Any]] = []
    exercises: list[dict[str, Any]] = []
    logger.debug(
        "Generating %d week(s) from %d template(s) starting %s",
        weeks,
        len(templates),
        start_date.isoformat(),
    )
    for week_index in range(weeks):
        week_number = week_index + 1
        intensity = _week_intensity(progression, week_number)
        for template in templates:
            for day_of_week in template.get("day_of_week") or []:
                workout_date = _workout_date(start_date, week_index, day_of_week)
                if workout_date < start_date:
                    logger.debug("Skipped %s on %s (before start)", template["label"], workout_date)
                    continue
                workout_id = uuid.uuid4()
                workouts.append(
                    {
                        "id": workout_id,
                        "mesocycle_id": mesocycle_id,
                        "scheduled_for": workout_date,
                        "label": week_label(template["label"], week_number),
                        "week_number": week_number,
                        "intensity_modifier": intensity,
                    }
                )
                for exercise in template.get("exercises") or []:
                    exercises.append(
                        {
                            "id": uuid.uuid4(),
                            "workout_id": workout_id,
                            "exercise_id": exercise["exercise_id"],
                            "order_idx": exercise.get("order_idx") or 0,
                            "defaults": dict(exercise.get("defaults") or {}),
                        }
                    )
    logger.info("Generated %d workout(s) with %d exercise row(s)", len(workouts), len(exercises))
    return workouts, exercises


def build_mesocycle_plan(
    title: str,
    start_date: date,
    weeks: int,
    templates: Sequence[Mapping[str, Any]],
    progression: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Everything needed to review or save a mesocycle, without touching the database."""
    mesocycle_id = uuid.uuid4()
    workouts, exercises = generate_workouts_from_templates(
        templates, start_date, weeks, mesocycle_id, progression
    )
    return {
        "mesocycle_id": mesocycle_id,
        "basics": {"title": title, "weeks": weeks, "start_date": start_date.isoformat()},
        "workout_templates": [dict(t) for t in templates],
        "progression": dict(progression) if progression else None,
        "workouts": workouts,
        "exercises": exercises,
    }
