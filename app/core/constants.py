"""Application constants."""

EQUIPMENT_TYPES = ["barbell", "dumbbell", "machine", "bodyweight"]

MUSCLE_GROUPS = [
    "chest",
    "back",
    "shoulders",
    "biceps",
    "triceps",
    "quads",
    "hamstrings",
    "glutes",
    "calves",
    "traps",
]

COMMON_TAGS = ["compound", "isolation", "push", "pull", "legs", "arms", "unilateral"]

# Bar weights in kg (lbs equivalents: 45 / 35 / 18)
BARBELL_WEIGHTS = {
    "Olympic Barbell": 20.0,
    "Standard Barbell": 15.9,
    "EZ Curl Bar": 8.2,
}

# Label for muscle groups with no primary muscle recorded
UNKNOWN_MUSCLE_LABEL = "Other"

# Freestyle sessions live in a one-week mesocycle with this title
FREESTYLE_MESOCYCLE_TITLE = "Freestyle"
FREESTYLE_WORKOUT_LABEL = "Freestyle Workout"

# Stats windows (months back from today)
DEFAULT_VOLUME_MONTHS = 3
DEFAULT_DISTRIBUTION_MONTHS = 1
DEFAULT_WEEKLY_COMPLETION_MONTHS = 3
DEFAULT_PROGRESS_MONTHS = 6

# Dashboard / overview sizes
DASHBOARD_RECENT_WORKOUTS = 3
DASHBOARD_NEXT_WORKOUT_EXERCISES = 4
STATS_RECENT_WORKOUTS = 5

# Session limits (logger)
MAX_SETS_PER_EXERCISE_PER_SESSION = 20
