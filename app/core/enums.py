"""Shared enums for models and API."""

from enum import Enum


class ProgressionType(str, Enum):
    """Shape of the week-to-week intensity curve."""

    LINEAR = "linear"
    WAVE = "wave"
    BLOCK = "block"
    UNDULATING = "undulating"
    STEP = "step"
    CUSTOM = "custom"


class TargetGoal(str, Enum):
    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    ENDURANCE = "endurance"
    POWERLIFTING = "powerlifting"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ProgressionPrimary(str, Enum):
    """What a progression strategy pushes week over week."""

    WEIGHT = "weight"
    VOLUME = "volume"
    INTENSITY = "intensity"
    DENSITY = "density"  # Same work, less rest


class ExerciseType(str, Enum):
    """Coarse classification used to pick a progression override."""

    COMPOUND = "compound"
    ISOLATION = "isolation"
    ACCESSORY = "accessory"


class WeightUnit(str, Enum):
    KG = "kg"
    LBS = "lbs"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class OneRMFormulaName(str, Enum):
    EPLEY = "epley"
    BRZYCKI = "brzycki"
    LOMBARDI = "lombardi"
    OCONNER = "oconner"
    MAYHEW = "mayhew"


class ProgressGrouping(str, Enum):
    """Exercise progress granularity: one point per set or per workout."""

    SET = "set"
    WORKOUT = "workout"


class TemplateChangeType(str, Enum):
    ADD_EXERCISE = "add_exercise"
