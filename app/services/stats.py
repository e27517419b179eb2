"""Statistics transforms: pure functions over rows already fetched for one user.

Rows are plain mappings (``row._asdict()`` or dicts in tests). Nothing here touches the
database, so every function is deterministic for a given input order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime
from typing import Any

from app.core.constants import UNKNOWN_MUSCLE_LABEL
from app.services.dates import parse_local_date, week_start
from app.services.one_rm import round_half_up

Row = Mapping[str, Any]


def _num(value: Any) -> float:
    """Numeric/Decimal/None -> float (None and garbage count as 0)."""
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def _to_iso(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


# ---- Exercise progress ----


def aggregate_sets_by_workout(rows: Iterable[Row]) -> list[dict[str, Any]]:
    """
    Collapse per-set progress rows into one point per workout (first-seen order).
    Each point: date, volume (sum), sets (count), weight (heaviest), reps (sum).
    """
    grouped: dict[Any, dict[str, Any]] = {}
    for row in rows:
        workout_id = row["workout_id"]
        weight = _num(row.get("weight"))
        reps = int(row.get("reps") or 0)
        volume = row.get("volume")
        volume = _num(volume) if volume is not None else weight * reps
        point = grouped.get(workout_id)
        if point is None:
            grouped[workout_id] = {
                "workout_id": workout_id,
                "date": row.get("workout_date") or row.get("date"),
                "weight": weight,
                "reps": reps,
                "volume": volume,
                "sets": 1,
            }
            continue
        point["weight"] = max(point["weight"], weight)
        point["reps"] += reps
        point["volume"] += volume
        point["sets"] += 1
    return list(grouped.values())


# ---- Personal records ----


def derive_personal_records(rows: Iterable[Row]) -> list[dict[str, Any]]:
    """
    Personal records per exercise from logged sets.

    - max_weight: heaviest single set; ties go to the most recently logged one.
    - max_volume: best single-workout sum of weight * reps (sets with both values only).
    - max_reps: best single-workout sum of reps.
    Workout-level records are dated by the last set logged in that workout; on equal
    values the earlier-seen workout keeps the record.
    """
    names: dict[Any, str] = {}
    best_weight: dict[Any, Row] = {}
    per_workout: dict[tuple[Any, Any], dict[str, Any]] = {}

    for row in rows:
        exercise_id = row["exercise_id"]
        names.setdefault(exercise_id, row.get("exercise_name") or "")
        logged_at = row.get("logged_at")
        weight = row.get("weight")
        reps = row.get("reps")

        if weight is not None:
            current = best_weight.get(exercise_id)
            if current is None or _beats_weight(row, current):
                best_weight[exercise_id] = row

        agg = per_workout.setdefault(
            (exercise_id, row["workout_id"]),
            {"volume": None, "reps": None, "date": None},
        )
        if weight is not None and reps is not None:
            agg["volume"] = (agg["volume"] or 0.0) + _num(weight) * int(reps)
        if reps is not None:
            agg["reps"] = (agg["reps"] or 0) + int(reps)
        if logged_at is not None and (agg["date"] is None or logged_at > agg["date"]):
            agg["date"] = logged_at

    best_volume: dict[Any, dict[str, Any]] = {}
    best_reps: dict[Any, dict[str, Any]] = {}
    for (exercise_id, _workout_id), agg in per_workout.items():
        if agg["volume"] is not None:
            current = best_volume.get(exercise_id)
            if current is None or agg["volume"] > current["volume"]:
                best_volume[exercise_id] = {"volume": agg["volume"], "date": _to_iso(agg["date"])}
        if agg["reps"] is not None:
            current = best_reps.get(exercise_id)
            if current is None or agg["reps"] > current["reps"]:
                best_reps[exercise_id] = {"reps": agg["reps"], "date": _to_iso(agg["date"])}

    records = []
    for exercise_id, name in names.items():
        weight_row = best_weight.get(exercise_id)
        records.append(
            {
                "exercise_id": exercise_id,
                "exercise_name": name,
                "max_weight": (
                    {
                        "weight": _num(weight_row.get("weight")),
                        "reps": int(weight_row.get("reps") or 0),
                        "date": _to_iso(weight_row.get("logged_at")),
                    }
                    if weight_row is not None
                    else None
                ),
                "max_volume": best_volume.get(exercise_id),
                "max_reps": best_reps.get(exercise_id),
            }
        )
    records.sort(key=lambda r: (r["exercise_name"].casefold(), str(r["exercise_id"])))
    return records


def _beats_weight(row: Row, current: Row) -> bool:
    weight, best = _num(row.get("weight")), _num(current.get("weight"))
    if weight != best:
        return weight > best
    logged_at, best_at = row.get("logged_at"), current.get("logged_at")
    if logged_at is None:
        return False
    return best_at is None or logged_at > best_at


def is_date_in_range(
    value: str | date | datetime | None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> bool:
    """Whole-day inclusive range check. No bounds at all -> True; missing value -> False."""
    if date_from is None and date_to is None:
        return True
    if not value:
        return False
    day = parse_local_date(value)
    if date_from is not None and day < date_from:
        return False
    if date_to is not None and day > date_to:
        return False
    return True


def filter_personal_records(
    records: Sequence[Row],
    *,
    date_from: date | None = None,
    date_to: date | None = None,
    exercise_id: Any = None,
    muscle: str | None = None,
    user_exercises: Sequence[Row] = (),
) -> list[Row]:
    """
    Narrow PRs by exercise, by primary muscle (through the user's exercise list) and by
    date: a record stays when any of its weight/volume/reps dates falls in the range.
    """
    prs = list(records)
    if exercise_id:
        prs = [pr for pr in prs if str(pr["exercise_id"]) == str(exercise_id)]
    if muscle:
        ids = {str(ex["id"]) for ex in user_exercises if ex.get("primary_muscle") == muscle}
        prs = [pr for pr in prs if str(pr["exercise_id"]) in ids]
    if date_from is not None or date_to is not None:
        kept = []
        for pr in prs:
            dates = [
                (pr.get(kind) or {}).get("date")
                for kind in ("max_weight", "max_volume", "max_reps")
            ]
            if any(is_date_in_range(d, date_from, date_to) for d in dates if d):
                kept.append(pr)
        prs = kept
    return prs


# ---- Distribution / summaries ----


def map_muscle_groups(rows: Iterable[Row]) -> list[dict[str, Any]]:
    return [
        {
            "primary_muscle": row.get("primary_muscle") or UNKNOWN_MUSCLE_LABEL,
            "set_count": int(row.get("set_count") or 0),
            "total_volume": _num(row.get("total_volume")),
        }
        for row in rows
    ]


def calculate_summary_stats(workouts: Sequence[Row]) -> dict[str, Any]:
    """Total volume and (half-up rounded) average sets per workout."""
    total_workouts = len(workouts)
    total_volume = sum(_num(w.get("total_volume")) for w in workouts)
    avg_sets = (
        round_half_up(sum(_num(w.get("set_count")) for w in workouts) / total_workouts)
        if total_workouts
        else 0
    )
    return {
        "total_workouts": total_workouts,
        "total_volume": total_volume,
        "avg_sets_per_workout": avg_sets,
    }


def _rate(completed: int, total: int) -> float:
    return (completed / total) * 100 if total > 0 else 0.0


def completion_rate(rows: Iterable[Row]) -> dict[str, Any]:
    """
    rows: one per workout (or per workout/join fragment) with workout_id and set_count.
    A workout is completed once it has at least one logged set.
    """
    completed_by_workout: dict[Any, bool] = {}
    for row in rows:
        workout_id = row["workout_id"]
        done = int(row.get("set_count") or 0) > 0
        completed_by_workout[workout_id] = completed_by_workout.get(workout_id, False) or done
    total = len(completed_by_workout)
    completed = sum(1 for done in completed_by_workout.values() if done)
    return {
        "total_workouts": total,
        "completed_workouts": completed,
        "completion_rate": _rate(completed, total),
    }


def weekly_completion(rows: Iterable[Row]) -> list[dict[str, Any]]:
    """Completion per Monday-based week, oldest week first."""
    weeks: dict[date, dict[Any, bool]] = {}
    for row in rows:
        week = week_start(parse_local_date(row["scheduled_for"]))
        bucket = weeks.setdefault(week, {})
        done = int(row.get("set_count") or 0) > 0
        bucket[row["workout_id"]] = bucket.get(row["workout_id"], False) or done
    result = []
    for week in sorted(weeks):
        bucket = weeks[week]
        completed = sum(1 for done in bucket.values() if done)
        result.append(
            {
                "week": week.isoformat(),
                "total_workouts": len(bucket),
                "completed_workouts": completed,
                "completion_rate": _rate(completed, len(bucket)),
            }
        )
    return result


def volume_by_date(rows: Iterable[Row]) -> list[dict[str, Any]]:
    """
    Per scheduled date: total volume (weight * reps where both logged), set count and
    average weight ("avg intensity", null weights ignored). Oldest date first.
    """
    days: dict[date, dict[str, Any]] = {}
    for row in rows:
        day = parse_local_date(row["scheduled_for"])
        bucket = days.setdefault(day, {"volume": 0.0, "sets": 0, "weights": []})
        weight, reps = row.get("weight"), row.get("reps")
        bucket["sets"] += 1
        if weight is not None:
            bucket["weights"].append(_num(weight))
            if reps is not None:
                bucket["volume"] += _num(weight) * int(reps)
    return [
        {
            "date": day.isoformat(),
            "total_volume": days[day]["volume"],
            "total_sets": days[day]["sets"],
            "avg_intensity": (
                sum(days[day]["weights"]) / len(days[day]["weights"]) if days[day]["weights"] else 0.0
            ),
        }
        for day in sorted(days)
    ]
