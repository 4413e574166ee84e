"""Workout session engine."""

from .interfaces import Ack, AcknowledgmentSource, SessionReporter, WorkoutLogHook
from .summary import ExerciseSummary, WorkoutSummary
from .workout_session import SessionState, WorkoutSession

__all__ = [
    "Ack",
    "AcknowledgmentSource",
    "ExerciseSummary",
    "SessionReporter",
    "SessionState",
    "WorkoutLogHook",
    "WorkoutSession",
    "WorkoutSummary",
]
