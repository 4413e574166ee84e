"""CLI commands for workout-planner."""

from .history import history
from .init import init
from .start import start
from .workouts import workouts

__all__ = [
    "history",
    "init",
    "start",
    "workouts",
]
