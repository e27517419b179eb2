"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.exercise import Exercise
from app.models.mesocycle import Mesocycle, MesocycleProgression
from app.models.preferences import UserPreferences
from app.models.template_change import TemplateChange
from app.models.workout import SetLogged, Workout, WorkoutExercise

__all__ = [
    "Exercise",
    "Mesocycle",
    "MesocycleProgression",
    "SetLogged",
    "TemplateChange",
    "UserPreferences",
    "Workout",
    "WorkoutExercise",
]
