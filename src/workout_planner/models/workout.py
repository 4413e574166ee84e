"""Workout catalog model."""

from dataclasses import dataclass, field, replace
from datetime import datetime

from ..config import DEFAULT_REST_SECONDS
from ..errors import DuplicateExerciseError
from .exercise import Exercise

SORT_KEYS = ("name", "sets", "reps", "duration")
FILTER_KEYS = ("sets", "reps", "duration")


@dataclass
class Workout:
    """An ordered collection of exercises with per-exercise rest overrides.

    Rest overrides are keyed by exercise name and looked up
    case-insensitively; exercises without an override rest for
    ``DEFAULT_REST_SECONDS`` between sets.
    """

    name: str
    exercises: list[Exercise] = field(default_factory=list)
    custom_rest_times: dict[str, int] = field(default_factory=dict)
    created_at: datetime | None = None
    id: int | None = None

    def add_exercise(self, exercise: Exercise) -> None:
        """Append an exercise, rejecting duplicate names."""
        if self.get_exercise_details(exercise.name) is not None:
            raise DuplicateExerciseError(exercise.name)
        self.exercises.append(exercise)

    def remove_exercise(self, name: str) -> bool:
        """Remove an exercise by name.

        Returns:
            True if an exercise was removed
        """
        remaining = [e for e in self.exercises if not e.matches(name)]
        removed = len(remaining) != len(self.exercises)
        self.exercises = remaining
        return removed

    def list_exercises(self) -> list[Exercise]:
        """Return a copy of the exercise list."""
        return list(self.exercises)

    def get_exercise_details(self, name: str) -> Exercise | None:
        """Find an exercise by name (case-insensitive)."""
        for exercise in self.exercises:
            if exercise.matches(name):
                return exercise
        return None

    def update_exercise(
        self, name: str, sets: int, reps: int, duration: int
    ) -> bool:
        """Replace the sets/reps/duration of an existing exercise.

        Returns:
            True if the exercise was found and updated
        """
        for i, exercise in enumerate(self.exercises):
            if exercise.matches(name):
                self.exercises[i] = replace(
                    exercise, sets=sets, reps=reps, duration=duration
                )
                return True
        return False

    def set_custom_rest_times(self, rest_times: dict[str, int]) -> None:
        """Merge rest-time overrides (seconds) into the workout."""
        for name, seconds in rest_times.items():
            if seconds < 0:
                raise ValueError(f"Rest time for '{name}' cannot be negative")
            # Drop any existing key that differs only by case
            for key in [k for k in self.custom_rest_times if k.lower() == name.lower()]:
                del self.custom_rest_times[key]
            self.custom_rest_times[name] = int(seconds)

    def get_rest_time(self, exercise_name: str) -> int:
        """Rest seconds between sets of the named exercise."""
        wanted = exercise_name.strip().lower()
        for name, seconds in self.custom_rest_times.items():
            if name.strip().lower() == wanted:
                return seconds
        return DEFAULT_REST_SECONDS

    def calculate_total_workout_time(self) -> float:
        """Estimate the workout duration in minutes.

        Counts timed work for every set plus rest between sets (one fewer
        rest than sets). Untimed sets contribute no work time.
        """
        total = 0.0
        for exercise in self.exercises:
            total += (exercise.duration / 60.0) * exercise.sets
            if exercise.sets > 1:
                rest = self.get_rest_time(exercise.name)
                total += (exercise.sets - 1) * (rest / 60.0)
        return total

    def sort_exercises(self, sort_by: str) -> None:
        """Sort exercises in place by name, sets, reps or duration."""
        key = sort_by.lower()
        if key not in SORT_KEYS:
            raise ValueError(
                f"Invalid sort criteria '{sort_by}'. Use one of: {', '.join(SORT_KEYS)}"
            )
        if key == "name":
            self.exercises.sort(key=lambda e: e.name.lower())
        else:
            self.exercises.sort(key=lambda e: getattr(e, key))

    def filter_exercises(self, filter_by: str, threshold: int) -> list[Exercise]:
        """Exercises whose sets, reps or duration is at least ``threshold``."""
        key = filter_by.lower()
        if key not in FILTER_KEYS:
            raise ValueError(
                f"Invalid filter '{filter_by}'. Use one of: {', '.join(FILTER_KEYS)}"
            )
        return [e for e in self.exercises if getattr(e, key) >= threshold]

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "exercises": [e.to_dict() for e in self.exercises],
            "custom_rest_times": dict(self.custom_rest_times),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
    ) -> "Workout":
        """Create from dictionary."""
        return cls(
            id=id,
            name=data["name"],
            exercises=[Exercise.from_dict(e) for e in data.get("exercises", [])],
            custom_rest_times={
                k: int(v) for k, v in data.get("custom_rest_times", {}).items()
            },
            created_at=created_at,
        )

    def get_summary(self) -> str:
        """Get a text summary of the workout."""
        lines = [f"Workout: {self.name}"]
        lines.append(f"Exercises: {len(self.exercises)}")
        lines.append(
            f"Estimated duration: {self.calculate_total_workout_time():.1f} minutes"
        )
        for i, ex in enumerate(self.exercises, start=1):
            timing = f"{ex.duration}s per set" if ex.is_timed else "untimed"
            lines.append(
                f"  {i}. {ex.name}: {ex.sets}x{ex.reps} ({timing}), "
                f"rest {self.get_rest_time(ex.name)}s"
            )
        return "\n".join(lines)
