"""Pytest configuration and fixtures."""

import inspect
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from workout_planner.errors import SchedulerShutdownError
from workout_planner.models import Exercise, Workout
from workout_planner.session import Ack, WorkoutSession


class FakeTask:
    """Scheduled callback on the fake clock."""

    def __init__(self, seq: int, when: float, callback, interval: float | None = None):
        self.seq = seq
        self.when = when
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Deterministic scheduler: time only moves when ``advance`` is called."""

    def __init__(self):
        self.time = 0.0
        self.tasks: list[FakeTask] = []
        self.once_delays: list[float] = []
        self.shut_down = False
        self._seq = 0

    def now(self) -> float:
        return self.time

    def _add(self, when: float, callback, interval: float | None = None) -> FakeTask:
        if self.shut_down:
            raise SchedulerShutdownError("Scheduler has been shut down")
        self._seq += 1
        task = FakeTask(self._seq, when, callback, interval)
        self.tasks.append(task)
        return task

    def schedule_once(self, delay: float, callback) -> FakeTask:
        task = self._add(self.time + delay, callback)
        self.once_delays.append(delay)
        return task

    def schedule_repeating(self, interval: float, callback) -> FakeTask:
        return self._add(self.time + interval, callback, interval)

    def shutdown(self) -> None:
        self.shut_down = True
        for task in self.tasks:
            task.cancel()
        self.tasks.clear()

    @property
    def pending(self) -> list[FakeTask]:
        return [t for t in self.tasks if not t.cancelled]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due callbacks in time order."""
        target = self.time + seconds
        while True:
            due = [t for t in self.tasks if not t.cancelled and t.when <= target]
            if not due:
                break
            task = min(due, key=lambda t: (t.when, t.seq))
            self.time = task.when
            if task.interval is not None:
                task.when += task.interval
            else:
                self.tasks.remove(task)
            task.callback()
        self.time = target
        self.tasks = [t for t in self.tasks if not t.cancelled]


class FakeClock:
    """Wall clock for session timestamps."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2025, 5, 2, 9, 0, 0)

    def __call__(self) -> datetime:
        return self.current

    def tick(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


class ScriptedAcks:
    """Acknowledgment source replaying a script.

    Entries are an ``Ack`` or a callable taking the prompt and returning an
    ``Ack`` (sync or async). Once the script runs out every prompt is
    answered with CONTINUE when allowed.
    """

    def __init__(self, script=None):
        self.script = list(script or [])
        self.prompts: list[tuple[str, tuple[Ack, ...]]] = []

    async def wait_ready(self, prompt, choices):
        self.prompts.append((prompt, tuple(choices)))
        if self.script:
            entry = self.script.pop(0)
            if callable(entry):
                entry = entry(prompt)
                if inspect.isawaitable(entry):
                    entry = await entry
            assert entry in choices, f"{entry} not offered at '{prompt}'"
            return entry
        return Ack.CONTINUE if Ack.CONTINUE in choices else choices[0]


class RecordingReporter:
    """Reporter that keeps everything it is told."""

    def __init__(self):
        self.infos: list[str] = []
        self.successes: list[str] = []
        self.warnings: list[str] = []
        self.events = []
        self.summaries = []

    def info(self, message):
        self.infos.append(message)

    def success(self, message):
        self.successes.append(message)

    def warning(self, message):
        self.warnings.append(message)

    def timer_event(self, event):
        self.events.append(event)

    def summary(self, summary):
        self.summaries.append(summary)


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def leg_day():
    """Single untimed exercise with the default rest."""
    workout = Workout(name="Leg Day")
    workout.add_exercise(Exercise(name="Squats", sets=3, reps=10, duration=0))
    return workout


@pytest.fixture
def plank_workout():
    """Single timed exercise with a custom rest override."""
    workout = Workout(name="Core")
    workout.add_exercise(Exercise(name="Plank", sets=2, reps=1, duration=30))
    workout.set_custom_rest_times({"Plank": 15})
    return workout


@pytest.fixture
def full_body():
    """Two exercises so between-exercise prompts are exercised."""
    workout = Workout(name="Full Body")
    workout.add_exercise(Exercise(name="Push-ups", sets=2, reps=15))
    workout.add_exercise(Exercise(name="Wall Sit", sets=1, reps=1, duration=45))
    workout.set_custom_rest_times({"push-ups": 30})
    return workout


@pytest.fixture
def make_session(scheduler, reporter, clock):
    """Build sessions wired to the fake scheduler, reporter and clock.

    The scripted acknowledgment source is reachable as ``session.acks`` and
    finished sessions passed to the log hook collect in ``make_session.logged``.
    """
    logged = []

    def factory(workout: Workout, script=None, log_hook=None) -> WorkoutSession:
        acks = ScriptedAcks(script)
        session = WorkoutSession(
            workout,
            acks=acks,
            reporter=reporter,
            scheduler=scheduler,
            log_hook=log_hook if log_hook is not None else logged.append,
            clock=clock,
        )
        session.acks = acks
        return session

    factory.logged = logged
    return factory
