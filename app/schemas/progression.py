"""Progression schemas: intensity parameters, templates, strategies."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import Difficulty, ExerciseType, ProgressionPrimary, ProgressionType, TargetGoal


class IntensityParameters(BaseModel):
    """One week's intensity relative to baseline (week 1 = 100 / 1.0)."""

    volume: float = 100  # % of baseline volume
    weight: float = 100  # % of baseline load
    rir: float = 2  # reps in reserve target (lower = harder)
    rpe: float = 7  # RPE target (higher = harder)
    sets: float = 1.0  # set multiplier
    reps_modifier: float = 1.0  # rep multiplier


DEFAULT_INTENSITY = IntensityParameters()
DELOAD_INTENSITY = IntensityParameters(volume=70, weight=85, rir=4, rpe=5, sets=0.7, reps_modifier=1.0)


class WeekIntensity(BaseModel):
    week: int = Field(..., ge=1)
    intensity: IntensityParameters
    is_deload: bool = False
    notes: str | None = None
    label: str | None = None  # e.g. "Build Week", "Deload"


class GlobalProgressionSettings(BaseModel):
    auto_deload: bool = True
    deload_frequency: int = 4  # every N weeks
    deload_intensity: float = 70  # % of normal intensity
    main_lift_progression: float = 2.5  # weekly load increase %
    accessory_progression: float = 5  # weekly volume increase %
    fatigue_threshold: float = 8


class MesocycleProgressionIn(BaseModel):
    progression_type: ProgressionType = ProgressionType.CUSTOM
    baseline_week: WeekIntensity | None = None
    weekly_progressions: list[WeekIntensity] = []
    global_settings: GlobalProgressionSettings | None = None


class MesocycleProgressionRead(MesocycleProgressionIn):
    model_config = ConfigDict(from_attributes=True)


class ProgressionTemplate(BaseModel):
    id: str
    name: str
    description: str
    type: ProgressionType
    target_goal: TargetGoal
    difficulty: Difficulty
    duration: int  # suggested weeks
    week_pattern: list[IntensityParameters]


class SecondaryAdjustments(BaseModel):
    sets: bool = False
    reps: bool = False
    rir: bool = False
    rest: bool = False


class StrategyConstraints(BaseModel):
    maintain_reps: bool = False
    maintain_sets: bool = False
    maintain_rir: bool = False


class ProgressionStrategy(BaseModel):
    primary: ProgressionPrimary
    secondary_adjustments: SecondaryAdjustments = SecondaryAdjustments()
    constraints: StrategyConstraints = StrategyConstraints()


class ApplyTemplateRequest(BaseModel):
    weeks: int = Field(..., ge=1, le=52)
    overrides: dict[str, float] | None = None


class ApplyStrategyRequest(BaseModel):
    """Preview how one exercise's defaults change in a given week."""

    exercise_name: str | None = None
    defaults: dict
    week_intensity: WeekIntensity | None = None
    strategy: ProgressionStrategy | None = None


class ApplyStrategyResponse(BaseModel):
    exercise_type: ExerciseType
    defaults: dict


class ApplyTemplateResponse(BaseModel):
    template_id: str
    progression_type: ProgressionType
    strategy: ProgressionStrategy
    weekly_progressions: list[WeekIntensity]
