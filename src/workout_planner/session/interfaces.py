"""Collaborators a workout session talks to.

The session never reads input or prints directly. It waits on an
``AcknowledgmentSource`` and reports through a ``SessionReporter``.
"""

from enum import Enum
from typing import TYPE_CHECKING, Callable, Protocol, Sequence, runtime_checkable

from ..timing import TimerEvent
from .summary import WorkoutSummary

if TYPE_CHECKING:
    from .workout_session import WorkoutSession


class Ack(str, Enum):
    """User responses at an acknowledgment point."""

    CONTINUE = "continue"
    PAUSE = "pause"
    RESUME = "resume"
    QUIT = "quit"


START_CHOICES = (Ack.CONTINUE,)
STEP_CHOICES = (Ack.CONTINUE, Ack.PAUSE, Ack.QUIT)
BETWEEN_EXERCISE_CHOICES = (Ack.CONTINUE, Ack.PAUSE)
PAUSED_CHOICES = (Ack.RESUME, Ack.QUIT)


@runtime_checkable
class AcknowledgmentSource(Protocol):
    """Blocks until the user is ready, returning their choice."""

    async def wait_ready(self, prompt: str, choices: Sequence[Ack]) -> Ack:
        ...


@runtime_checkable
class SessionReporter(Protocol):
    """Display sink for session messages."""

    def info(self, message: str) -> None:
        ...

    def success(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

    def timer_event(self, event: TimerEvent) -> None:
        ...

    def summary(self, summary: WorkoutSummary) -> None:
        ...


WorkoutLogHook = Callable[["WorkoutSession"], None]
