"""Workout session summary."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ExerciseSummary:
    """Completion line for one exercise."""

    name: str
    completed_sets: int
    total_sets: int
    percentage: float
    completed: bool

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "completed_sets": self.completed_sets,
            "total_sets": self.total_sets,
            "percentage": self.percentage,
            "completed": self.completed,
        }


@dataclass
class WorkoutSummary:
    """Result of a workout session.

    An exercise counts towards ``completed_count`` only when its progress is
    flagged completed, not when its percentage merely happens to be high.
    """

    workout_name: str
    started_at: datetime | None
    ended_at: datetime | None
    duration_seconds: int
    exercises: list[ExerciseSummary] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.exercises)

    @property
    def completed_count(self) -> int:
        return sum(1 for e in self.exercises if e.completed)

    @property
    def completion_rate(self) -> float:
        """Percentage of exercises completed (0 for an empty workout)."""
        if not self.exercises:
            return 0.0
        return self.completed_count / self.total_count * 100

    @property
    def duration_display(self) -> str:
        minutes, seconds = divmod(self.duration_seconds, 60)
        return f"{minutes} minutes, {seconds} seconds"

    @property
    def in_progress(self) -> bool:
        return self.ended_at is None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "workout_name": self.workout_name,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "duration_seconds": self.duration_seconds,
            "exercises": [e.to_dict() for e in self.exercises],
            "completed_count": self.completed_count,
            "total_count": self.total_count,
            "completion_rate": self.completion_rate,
        }
