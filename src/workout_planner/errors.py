"""Exception types for workout-planner."""


class WorkoutPlannerError(Exception):
    """Base class for workout-planner errors."""


class InvalidExerciseError(WorkoutPlannerError, ValueError):
    """Exercise fields are out of range."""


class DuplicateExerciseError(WorkoutPlannerError, ValueError):
    """An exercise with the same name already exists in the workout."""

    def __init__(self, name: str):
        super().__init__(f"An exercise named '{name}' already exists")
        self.name = name


class SchedulerShutdownError(WorkoutPlannerError, RuntimeError):
    """A task was scheduled after the scheduler was shut down."""
