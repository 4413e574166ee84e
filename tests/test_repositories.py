"""Tests for the SQLite repositories."""

from datetime import datetime

import pytest

from workout_planner.db import SessionLogRepository, WorkoutRepository, init_db
from workout_planner.models import Exercise, Workout
from workout_planner.session import ExerciseSummary, WorkoutSummary


@pytest.fixture
async def db_path(temp_db_path):
    await init_db(temp_db_path)
    return temp_db_path


class TestWorkoutRepository:
    """Tests for WorkoutRepository."""

    async def test_create_and_get(self, db_path, plank_workout):
        """Test a workout survives a round trip."""
        repo = WorkoutRepository(db_path)
        workout_id = await repo.create(plank_workout)

        loaded = await repo.get(workout_id)

        assert loaded.id == workout_id
        assert loaded.name == "Core"
        assert loaded.exercises == plank_workout.exercises
        assert loaded.get_rest_time("Plank") == 15
        assert loaded.created_at is not None

    async def test_get_missing(self, db_path):
        """Test unknown IDs return None."""
        assert await WorkoutRepository(db_path).get(999) is None

    async def test_get_by_name_ignores_case(self, db_path, leg_day):
        """Test name lookup is case-insensitive."""
        repo = WorkoutRepository(db_path)
        await repo.create(leg_day)

        loaded = await repo.get_by_name("leg day")
        assert loaded is not None
        assert loaded.name == "Leg Day"

    async def test_update(self, db_path, leg_day):
        """Test exercises and overrides are updated."""
        repo = WorkoutRepository(db_path)
        workout_id = await repo.create(leg_day)
        workout = await repo.get(workout_id)

        workout.add_exercise(Exercise(name="Lunges", sets=2, reps=12))
        workout.set_custom_rest_times({"Squats": 90})
        await repo.update(workout)

        loaded = await repo.get(workout_id)
        assert [e.name for e in loaded.exercises] == ["Squats", "Lunges"]
        assert loaded.get_rest_time("squats") == 90

    async def test_update_requires_id(self, db_path, leg_day):
        """Test updating an unsaved workout raises."""
        with pytest.raises(ValueError):
            await WorkoutRepository(db_path).update(leg_day)

    async def test_list_and_delete(self, db_path, leg_day, full_body):
        """Test listing is ordered by name and delete removes."""
        repo = WorkoutRepository(db_path)
        leg_id = await repo.create(leg_day)
        await repo.create(full_body)

        names = [w.name for w in await repo.list_all()]
        assert names == ["Full Body", "Leg Day"]

        await repo.delete(leg_id)
        assert [w.name for w in await repo.list_all()] == ["Full Body"]


class TestSessionLogRepository:
    """Tests for SessionLogRepository."""

    def _summary(self, name: str, completed: bool) -> WorkoutSummary:
        return WorkoutSummary(
            workout_name=name,
            started_at=datetime(2025, 5, 2, 9, 0, 0),
            ended_at=datetime(2025, 5, 2, 9, 20, 30),
            duration_seconds=1230,
            exercises=[
                ExerciseSummary(
                    name="Squats",
                    completed_sets=3 if completed else 1,
                    total_sets=3,
                    percentage=100.0 if completed else 33.3,
                    completed=completed,
                )
            ],
        )

    async def test_create_and_list(self, db_path):
        """Test a summary is stored and listed newest first."""
        repo = SessionLogRepository(db_path)
        await repo.create(self._summary("Leg Day", completed=False), workout_id=1)
        await repo.create(self._summary("Leg Day", completed=True), workout_id=1)

        logs = await repo.list_recent()

        assert len(logs) == 2
        assert logs[0].completion_rate == 100.0
        assert logs[1].completion_rate == 0.0
        assert logs[0].duration_seconds == 1230
        assert logs[0].started_at == datetime(2025, 5, 2, 9, 0, 0)
        assert logs[0].summary["exercises"][0]["name"] == "Squats"

    async def test_filter_by_workout(self, db_path):
        """Test history can be limited to one workout."""
        repo = SessionLogRepository(db_path)
        await repo.create(self._summary("Leg Day", completed=True), workout_id=1)
        await repo.create(self._summary("Core", completed=True), workout_id=2)

        logs = await repo.list_recent(workout_id=2)

        assert [log.workout_name for log in logs] == ["Core"]
