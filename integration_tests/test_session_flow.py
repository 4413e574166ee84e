"""End-to-end session tests on the real event loop.

These run real timers and a real database, so they take a few seconds.
Run them with ``pytest integration_tests``.
"""

import asyncio

import pytest

from workout_planner.db import SessionLogRepository, WorkoutRepository, init_db
from workout_planner.models import Exercise, Workout
from workout_planner.session import Ack, SessionState, WorkoutSession
from workout_planner.timing import TimerEventKind, TimerMode


class SlowAcks:
    """Acknowledges each prompt after a fixed delay."""

    def __init__(self, delay: float):
        self.delay = delay

    async def wait_ready(self, prompt, choices):
        await asyncio.sleep(self.delay)
        return Ack.CONTINUE


class EventLog:
    """Reporter that only keeps timer events and summaries."""

    def __init__(self):
        self.events = []
        self.summaries = []

    def info(self, message):
        pass

    def success(self, message):
        pass

    def warning(self, message):
        pass

    def timer_event(self, event):
        self.events.append(event)

    def summary(self, summary):
        self.summaries.append(summary)


@pytest.fixture
def short_plank():
    workout = Workout(name="Short Plank")
    workout.add_exercise(Exercise(name="Plank", sets=2, reps=1, duration=1))
    workout.set_custom_rest_times({"plank": 1})
    return workout


class TestSessionFlow:
    """Guided sessions with real timers."""

    async def test_timers_complete_while_waiting(self, short_plank):
        """Test work and rest timers run out before each acknowledgment."""
        log = EventLog()
        session = WorkoutSession(short_plank, acks=SlowAcks(1.3), reporter=log)

        await session.start_workout()

        completed = [e.mode for e in log.events if e.kind is TimerEventKind.COMPLETED]
        assert completed == [TimerMode.WORK, TimerMode.REST, TimerMode.WORK]
        assert session.state is SessionState.FINISHED
        assert log.summaries[-1].completion_rate == 100.0
        assert session.timer.is_shut_down

    async def test_finished_session_is_stored(self, short_plank, tmp_path):
        """Test a logged session round trips through the database."""
        db_path = tmp_path / "flow.db"
        await init_db(db_path)
        workout_id = await WorkoutRepository(db_path).create(short_plank)

        finished = []
        session = WorkoutSession(
            short_plank,
            acks=SlowAcks(0),
            reporter=EventLog(),
            log_hook=lambda s: finished.append(s.build_summary()),
        )
        await session.start_workout()

        repo = SessionLogRepository(db_path)
        for summary in finished:
            await repo.create(summary, workout_id=workout_id)

        logs = await repo.list_recent(workout_id=workout_id)
        assert len(logs) == 1
        assert logs[0].workout_name == "Short Plank"
        assert logs[0].completion_rate == 100.0
