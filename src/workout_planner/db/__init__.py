"""Database layer for workout-planner."""

from .engine import get_db_path, init_db
from .repositories import SessionLog, SessionLogRepository, WorkoutRepository

__all__ = [
    "get_db_path",
    "init_db",
    "SessionLog",
    "SessionLogRepository",
    "WorkoutRepository",
]
