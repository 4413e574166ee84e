"""Per-exercise progress tracking model."""

from dataclasses import dataclass

from .exercise import Exercise


@dataclass
class ExerciseProgress:
    """Tracks completed sets and reps of one exercise within a session.

    ``completed`` becomes true once ``completed_sets`` reaches the
    exercise's set count, or when the exercise is force-completed with
    :meth:`mark_completed`. Bounds and monotonicity are the caller's
    responsibility.
    """

    exercise: Exercise
    completed_sets: int = 0
    completed_reps: int = 0
    completed: bool = False

    def update_progress(self, completed_sets: int, completed_reps: int) -> None:
        """Overwrite the completed sets and reps in the current set."""
        self.completed_sets = completed_sets
        self.completed_reps = completed_reps

        if completed_sets >= self.exercise.sets:
            self.completed = True

    def mark_completed(self) -> None:
        """Mark the exercise as fully completed regardless of actual progress."""
        self.completed = True
        self.completed_sets = self.exercise.sets
        self.completed_reps = self.exercise.reps

    def is_completed(self) -> bool:
        return self.completed

    def get_completion_percentage(self) -> float:
        """Calculate completion percentage.

        Returns:
            Progress as a percentage (0-100)
        """
        if self.completed:
            return 100.0

        total_reps = self.exercise.sets * self.exercise.reps
        done_reps = self.completed_sets * self.exercise.reps + self.completed_reps
        return (done_reps / total_reps) * 100.0

    def get_remaining_set_count(self) -> int:
        return max(0, self.exercise.sets - self.completed_sets)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "exercise": self.exercise.name,
            "completed_sets": self.completed_sets,
            "total_sets": self.exercise.sets,
            "completed_reps": self.completed_reps,
            "completed": self.completed,
            "percentage": self.get_completion_percentage(),
        }

    def __str__(self) -> str:
        if self.completed:
            return f"{self.exercise.name}: COMPLETED"
        return (
            f"{self.exercise.name}: {self.completed_sets}/{self.exercise.sets} sets, "
            f"{self.completed_reps}/{self.exercise.reps} reps in current set "
            f"({self.get_completion_percentage():.1f}%)"
        )
