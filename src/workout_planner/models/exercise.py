"""Exercise definition model."""

from dataclasses import dataclass

from ..errors import InvalidExerciseError


@dataclass(frozen=True)
class Exercise:
    """A single exercise in a workout.

    Exercises are immutable; edits to a workout replace the exercise rather
    than mutating it, so a running session always sees consistent values.
    """

    name: str
    sets: int
    reps: int
    duration: int = 0  # seconds per set, 0 = untimed (rep-based)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise InvalidExerciseError("Exercise name cannot be empty")
        if self.sets < 1:
            raise InvalidExerciseError(f"Sets must be at least 1, got {self.sets}")
        if self.reps < 1:
            raise InvalidExerciseError(f"Reps must be at least 1, got {self.reps}")
        if self.duration < 0:
            raise InvalidExerciseError(
                f"Duration cannot be negative, got {self.duration}"
            )

    @property
    def is_timed(self) -> bool:
        """Whether each set runs against a work timer."""
        return self.duration > 0

    def matches(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.strip().lower() == name.strip().lower()

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            sets=int(data["sets"]),
            reps=int(data["reps"]),
            duration=int(data.get("duration", 0)),
        )
