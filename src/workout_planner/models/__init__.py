"""Data models for workout-planner."""

from .exercise import Exercise
from .progress import ExerciseProgress
from .workout import DEFAULT_REST_SECONDS, Workout

__all__ = [
    "DEFAULT_REST_SECONDS",
    "Exercise",
    "ExerciseProgress",
    "Workout",
]
