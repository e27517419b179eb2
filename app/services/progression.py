"""Progression templates and strategies for mesocycle planning.

Built-in templates describe week-by-week intensity curves; strategies decide how a
week's intensity changes an exercise's defaults (sets / reps / RIR / rest / load).
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from app.core.enums import (
    Difficulty,
    ExerciseType,
    ProgressionPrimary,
    ProgressionType,
    TargetGoal,
)
from app.schemas.progression import (
    DEFAULT_INTENSITY,
    IntensityParameters,
    ProgressionStrategy,
    ProgressionTemplate,
    SecondaryAdjustments,
    StrategyConstraints,
    WeekIntensity,
)

logger = logging.getLogger(__name__)


def _week(volume: float, weight: float, rir: float, rpe: float, sets: float, reps: float) -> IntensityParameters:
    return IntensityParameters(volume=volume, weight=weight, rir=rir, rpe=rpe, sets=sets, reps_modifier=reps)


PROGRESSION_TEMPLATES: list[ProgressionTemplate] = [
    ProgressionTemplate(
        id="linear-strength",
        name="Linear Strength Progression",
        description="Steady weekly increases in weight with consistent volume. Great for beginners.",
        type=ProgressionType.LINEAR,
        target_goal=TargetGoal.STRENGTH,
        difficulty=Difficulty.BEGINNER,
        duration=8,
        week_pattern=[
            _week(100, 100, 3, 7, 1.0, 1.0),
            _week(100, 102.5, 2, 7.5, 1.0, 1.0),
            _week(100, 105, 2, 8, 1.0, 1.0),
            _week(70, 85, 4, 5, 0.7, 1.0),  # deload
            _week(100, 107.5, 2, 8, 1.0, 1.0),
            _week(100, 110, 1, 8.5, 1.0, 1.0),
            _week(100, 112.5, 1, 9, 1.0, 1.0),
            _week(90, 115, 0, 9.5, 1.0, 0.9),  # peak
        ],
    ),
    ProgressionTemplate(
        id="wave-loading",
        name="Wave Loading Pattern",
        description=(
            "Intensity fluctuates in waves - build up, back down, repeat higher. "
            "Good for intermediate lifters."
        ),
        type=ProgressionType.WAVE,
        target_goal=TargetGoal.STRENGTH,
        difficulty=Difficulty.INTERMEDIATE,
        duration=6,
        week_pattern=[
            _week(100, 100, 3, 7, 1.0, 1.0),
            _week(95, 105, 2, 8, 1.0, 1.0),
            _week(90, 110, 1, 8.5, 1.0, 1.0),
            _week(105, 102.5, 3, 7, 1.1, 1.0),
            _week(100, 107.5, 2, 8, 1.1, 1.0),
            _week(95, 112.5, 1, 9, 1.0, 1.0),
        ],
    ),
    ProgressionTemplate(
        id="block-hypertrophy",
        name="Block Periodization (Hypertrophy Focus)",
        description="High volume accumulation followed by intensity phases. Great for muscle building.",
        type=ProgressionType.BLOCK,
        target_goal=TargetGoal.HYPERTROPHY,
        difficulty=Difficulty.INTERMEDIATE,
        duration=12,
        week_pattern=[
            # accumulation
            _week(120, 95, 4, 6, 1.2, 1.1),
            _week(125, 95, 3, 7, 1.25, 1.1),
            _week(130, 95, 3, 7, 1.3, 1.1),
            _week(80, 85, 5, 5, 0.8, 1.0),
            # intensification
            _week(110, 100, 3, 7, 1.1, 1.0),
            _week(105, 102.5, 2, 8, 1.05, 1.0),
            _week(100, 105, 2, 8, 1.0, 1.0),
            _week(70, 90, 4, 6, 0.7, 1.0),
            # realization
            _week(95, 107.5, 2, 8, 1.0, 0.95),
            _week(90, 110, 1, 8.5, 1.0, 0.9),
            _week(85, 112.5, 1, 9, 1.0, 0.85),
            _week(80, 115, 0, 9.5, 1.0, 0.8),
        ],
    ),
    ProgressionTemplate(
        id="undulating-power",
        name="Daily Undulating Periodization",
        description="Frequent intensity and volume changes within each week. Good for advanced athletes.",
        type=ProgressionType.UNDULATING,
        target_goal=TargetGoal.STRENGTH,
        difficulty=Difficulty.ADVANCED,
        duration=8,
        week_pattern=[
            _week(100, 100, 3, 7, 1.0, 1.0),
            _week(120, 95, 4, 6.5, 1.2, 1.1),
            _week(90, 105, 2, 8, 0.9, 0.9),
            _week(110, 98, 3, 7, 1.1, 1.05),
            _week(95, 107.5, 2, 8, 1.0, 0.95),
            _week(125, 97.5, 3, 7, 1.25, 1.1),
            _week(85, 110, 1, 8.5, 0.85, 0.9),
            _week(70, 85, 4, 5, 0.7, 1.0),  # deload
        ],
    ),
    ProgressionTemplate(
        id="powerlifting-peak",
        name="Powerlifting Competition Peak",
        description=(
            "Designed to peak for a powerlifting meet. "
            "Reduces volume while maintaining/increasing intensity."
        ),
        type=ProgressionType.STEP,
        target_goal=TargetGoal.POWERLIFTING,
        difficulty=Difficulty.ADVANCED,
        duration=6,
        week_pattern=[
            _week(100, 100, 3, 7, 1.0, 1.0),
            _week(90, 105, 2, 8, 0.9, 0.95),
            _week(80, 110, 1, 8.5, 0.8, 0.9),
            _week(70, 115, 1, 9, 0.7, 0.85),
            _week(50, 120, 0, 9.5, 0.5, 0.7),
            _week(30, 105, 3, 6, 0.3, 0.8),  # opener practice
        ],
    ),
    ProgressionTemplate(
        id="hypertrophy-volume",
        name="High Volume Hypertrophy",
        description="Maximizes muscle growth through progressive volume increases with moderate intensity.",
        type=ProgressionType.LINEAR,
        target_goal=TargetGoal.HYPERTROPHY,
        difficulty=Difficulty.INTERMEDIATE,
        duration=10,
        week_pattern=[
            _week(100, 95, 4, 6, 1.0, 1.0),
            _week(105, 95, 3, 7, 1.05, 1.0),
            _week(110, 97.5, 3, 7, 1.1, 1.0),
            _week(115, 97.5, 2, 7.5, 1.15, 1.0),
            _week(80, 90, 4, 5, 0.8, 1.0),  # deload
            _week(120, 100, 3, 7, 1.2, 1.0),
            _week(125, 100, 2, 7.5, 1.25, 1.0),
            _week(130, 102.5, 2, 8, 1.3, 1.0),
            _week(135, 102.5, 1, 8.5, 1.35, 1.0),
            _week(70, 90, 4, 5, 0.7, 1.0),  # final deload
        ],
    ),
]


DEFAULT_STRATEGIES: dict[str, ProgressionStrategy] = {
    "strength": ProgressionStrategy(
        primary=ProgressionPrimary.WEIGHT,
        secondary_adjustments=SecondaryAdjustments(rir=True),
        constraints=StrategyConstraints(maintain_reps=True, maintain_sets=True),
    ),
    "hypertrophy": ProgressionStrategy(
        primary=ProgressionPrimary.VOLUME,
        secondary_adjustments=SecondaryAdjustments(sets=True, reps=True, rir=True),
        constraints=StrategyConstraints(maintain_rir=False),
    ),
    "peaking": ProgressionStrategy(
        primary=ProgressionPrimary.INTENSITY,
        secondary_adjustments=SecondaryAdjustments(rir=True, rest=True),
        constraints=StrategyConstraints(maintain_reps=True, maintain_sets=True),
    ),
    "conditioning": ProgressionStrategy(
        primary=ProgressionPrimary.DENSITY,
        secondary_adjustments=SecondaryAdjustments(rest=True),
        constraints=StrategyConstraints(maintain_reps=True, maintain_sets=True),
    ),
}

_GOAL_STRATEGY = {
    TargetGoal.STRENGTH: "strength",
    TargetGoal.HYPERTROPHY: "hypertrophy",
    TargetGoal.ENDURANCE: "conditioning",
    TargetGoal.POWERLIFTING: "peaking",
}


# ---- Template lookups ----


def get_templates_by_goal(goal: str) -> list[ProgressionTemplate]:
    return [t for t in PROGRESSION_TEMPLATES if t.target_goal.value == goal]


def get_templates_by_difficulty(difficulty: str) -> list[ProgressionTemplate]:
    return [t for t in PROGRESSION_TEMPLATES if t.difficulty.value == difficulty]


def get_templates_by_type(progression_type: str) -> list[ProgressionTemplate]:
    return [t for t in PROGRESSION_TEMPLATES if t.type.value == progression_type]


def get_template_by_id(template_id: str) -> ProgressionTemplate | None:
    return next((t for t in PROGRESSION_TEMPLATES if t.id == template_id), None)


def scale_template(template: ProgressionTemplate, new_duration: int) -> list[IntensityParameters]:
    """Stretch (repeat weeks) or compress (skip weeks) a template's pattern to new_duration weeks."""
    original = len(template.week_pattern)
    scale = new_duration / original
    if scale == 1:
        return [week.model_copy() for week in template.week_pattern]
    scaled = []
    for week in range(new_duration):
        source = min(math.floor(week / scale), original - 1)
        scaled.append(template.week_pattern[source].model_copy())
    return scaled


def apply_progression_template(
    template_id: str,
    weeks: int,
    overrides: dict[str, float] | None = None,
) -> list[IntensityParameters]:
    """Week pattern for a mesocycle of `weeks` weeks; overrides replace fields in every week."""
    template = get_template_by_id(template_id)
    if template is None:
        raise ValueError(f"Template {template_id} not found")
    pattern = scale_template(template, weeks)
    known = {k: v for k, v in (overrides or {}).items() if k in IntensityParameters.model_fields}
    if known:
        pattern = [week.model_copy(update=known) for week in pattern]
    return pattern


def template_to_weekly_progressions(pattern: list[IntensityParameters]) -> list[WeekIntensity]:
    """Number the weeks and flag deloads (lighter than baseline on both load and volume)."""
    return [
        WeekIntensity(
            week=i + 1,
            intensity=week,
            is_deload=week.volume < 100 and week.weight < 100 and week.rir >= 4,
        )
        for i, week in enumerate(pattern)
    ]


def strategy_for_template(template: ProgressionTemplate) -> ProgressionStrategy:
    return DEFAULT_STRATEGIES[_GOAL_STRATEGY.get(template.target_goal, "hypertrophy")]


# ---- Strategy application ----


def apply_reps_modifier(reps: str, modifier: float) -> str:
    """Scale a rep prescription: '8-10' x 1.1 -> '9-11'; non-numeric strings pass through."""
    if modifier == 1.0:
        return reps
    if "-" in reps:
        low, _, high = reps.partition("-")
        try:
            return f"{_round(float(low) * modifier)}-{_round(float(high) * modifier)}"
        except ValueError:
            return reps
    match = re.match(r"^\s*(\d+)", reps)
    if match:
        return str(_round(int(match.group(1)) * modifier))
    return reps


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


def _leading_int(value: Any) -> int | None:
    match = re.match(r"^\s*(\d+)", str(value or ""))
    return int(match.group(1)) if match else None


def apply_progression_strategy_to_exercise(
    defaults: dict[str, Any],
    week_intensity: WeekIntensity | None,
    strategy: ProgressionStrategy | None,
) -> dict[str, Any]:
    """
    Adjust one exercise's defaults for a week.

    weight:    load follows week intensity; RIR shifts if allowed.
    volume:    sets/reps scale by the week multipliers; load stays at 100%.
    intensity: RIR drops (or RPE rises when no RIR); load may rise at most to 105%.
    density:   rest shrinks with volume, never under 30s.
    Constraints then restore sets/reps/RIR they ask to maintain.
    """
    if week_intensity is None or strategy is None:
        return dict(defaults)

    intensity = week_intensity.intensity
    base_sets = defaults.get("sets", 0)
    base_reps = defaults.get("reps", "")
    base_rir = defaults.get("rir")
    base_rpe = defaults.get("rpe")

    sets, reps, rir, rpe, rest = base_sets, base_reps, base_rir, base_rpe, defaults.get("rest")
    weight = 100.0
    changes: list[str] = []
    rir_shift = DEFAULT_INTENSITY.rir - intensity.rir
    adjust = strategy.secondary_adjustments

    if strategy.primary == ProgressionPrimary.WEIGHT:
        weight = intensity.weight
        if weight != 100:
            changes.append(f"{weight:g}% weight")
        if adjust.rir and intensity.rir != DEFAULT_INTENSITY.rir and base_rir is not None:
            rir = max(0, base_rir - rir_shift)
            changes.append(f"RIR {rir:g}")

    elif strategy.primary == ProgressionPrimary.VOLUME:
        if adjust.sets and intensity.sets != 1.0:
            sets = _round(base_sets * intensity.sets)
            if sets != base_sets:
                changes.append(f"{sets} sets")
        if adjust.reps and intensity.reps_modifier != 1.0:
            reps = apply_reps_modifier(str(base_reps), intensity.reps_modifier)
            if reps != base_reps:
                changes.append(f"{reps} reps")
        if adjust.rir and intensity.rir != DEFAULT_INTENSITY.rir and base_rir is not None:
            rir = max(0, base_rir - rir_shift)
            changes.append(f"RIR {rir:g}")

    elif strategy.primary == ProgressionPrimary.INTENSITY:
        if base_rir is not None:
            rir = max(0, base_rir - rir_shift)
            changes.append(f"RIR {rir:g}")
        elif base_rpe is not None:
            rpe = min(10, base_rpe + (intensity.rpe - DEFAULT_INTENSITY.rpe))
            changes.append(f"RPE {rpe:g}")
        if adjust.rir and intensity.weight > 100:
            weight = min(intensity.weight, 105)
            changes.append(f"{weight:g}% weight")

    elif strategy.primary == ProgressionPrimary.DENSITY:
        original_rest = _leading_int(rest) if adjust.rest else None
        if original_rest is not None:
            reduction = 1 - (intensity.volume / 100) * 0.3
            new_rest = max(30, _round(original_rest * reduction))
            rest = f"{new_rest}s"
            if rest != defaults.get("rest"):
                changes.append(f"{new_rest}s rest")

    if strategy.constraints.maintain_reps:
        reps = base_reps
    if strategy.constraints.maintain_sets:
        sets = base_sets
    if strategy.constraints.maintain_rir:
        rir = base_rir

    result = {
        **defaults,
        "sets": sets,
        "reps": reps,
        "rir": rir,
        "rpe": rpe,
        "rest": rest,
        "weight": weight,
        "intensity_description": " • ".join(changes) if changes else None,
    }
    logger.debug("Strategy %s week %s: %s -> %s", strategy.primary.value, week_intensity.week, defaults, result)
    return result


_COMPOUND = [r"squat", r"bench", r"deadlift", r"press", r"row", r"pull.*up", r"chin.*up", r"dip"]
_ISOLATION = [r"curl", r"extension", r"fly", r"raise", r"shrug", r"calf"]


def determine_exercise_type(exercise_name: str | None) -> ExerciseType:
    """Classify by name keywords; compound patterns win over isolation ones."""
    if not exercise_name:
        return ExerciseType.ACCESSORY
    if any(re.search(p, exercise_name, re.IGNORECASE) for p in _COMPOUND):
        return ExerciseType.COMPOUND
    if any(re.search(p, exercise_name, re.IGNORECASE) for p in _ISOLATION):
        return ExerciseType.ISOLATION
    return ExerciseType.ACCESSORY
