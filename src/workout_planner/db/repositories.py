"""Data access layer for workout-planner."""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..models.workout import Workout
from ..session.summary import WorkoutSummary
from .engine import get_db_path


class WorkoutRepository:
    """Repository for the workout catalog."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, workout: Workout) -> int:
        """Create a new workout."""
        data = workout.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workouts (name, exercises, custom_rest_times)
                VALUES (?, ?, ?)
                """,
                (
                    data["name"],
                    json.dumps(data["exercises"]),
                    json.dumps(data["custom_rest_times"]),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, workout_id: int) -> Workout | None:
        """Get a workout by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workouts WHERE id = ?", (workout_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_workout(row)

    async def get_by_name(self, name: str) -> Workout | None:
        """Get a workout by name (case-insensitive)."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workouts WHERE name = ? COLLATE NOCASE", (name,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_workout(row)

    async def list_all(self) -> list[Workout]:
        """List all workouts."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workouts ORDER BY name COLLATE NOCASE"
            )
            rows = await cursor.fetchall()
            return [self._row_to_workout(row) for row in rows]

    async def update(self, workout: Workout) -> None:
        """Update an existing workout."""
        if workout.id is None:
            raise ValueError("Workout must have an ID to update")

        data = workout.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE workouts SET
                    name = ?, exercises = ?, custom_rest_times = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    data["name"],
                    json.dumps(data["exercises"]),
                    json.dumps(data["custom_rest_times"]),
                    workout.id,
                ),
            )
            await db.commit()

    async def delete(self, workout_id: int) -> None:
        """Delete a workout."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM workouts WHERE id = ?", (workout_id,))
            await db.commit()

    def _row_to_workout(self, row: aiosqlite.Row) -> Workout:
        """Convert a database row to a Workout."""
        data = {
            "name": row["name"],
            "exercises": json.loads(row["exercises"]),
            "custom_rest_times": json.loads(row["custom_rest_times"]),
        }
        return Workout.from_dict(
            data,
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]) if row["created_at"] else None,
        )


@dataclass
class SessionLog:
    """A stored record of a finished workout session."""

    id: int
    workout_id: int | None
    workout_name: str
    started_at: datetime | None
    ended_at: datetime | None
    duration_seconds: int
    completion_rate: float
    summary: dict


class SessionLogRepository:
    """Repository for finished session history."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, summary: WorkoutSummary, workout_id: int | None = None) -> int:
        """Store a finished session's summary."""
        data = summary.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO session_logs
                (workout_id, workout_name, started_at, ended_at,
                 duration_seconds, completion_rate, summary)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    workout_id,
                    data["workout_name"],
                    data["started_at"],
                    data["ended_at"],
                    data["duration_seconds"],
                    data["completion_rate"],
                    json.dumps(data),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def list_recent(
        self, limit: int = 20, workout_id: int | None = None
    ) -> list[SessionLog]:
        """List the most recent session logs, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if workout_id is None:
                cursor = await db.execute(
                    "SELECT * FROM session_logs ORDER BY id DESC LIMIT ?", (limit,)
                )
            else:
                cursor = await db.execute(
                    """
                    SELECT * FROM session_logs WHERE workout_id = ?
                    ORDER BY id DESC LIMIT ?
                    """,
                    (workout_id, limit),
                )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    def _row_to_log(self, row: aiosqlite.Row) -> SessionLog:
        """Convert a database row to a SessionLog."""
        started_at = None
        if row["started_at"]:
            started_at = datetime.fromisoformat(row["started_at"])

        ended_at = None
        if row["ended_at"]:
            ended_at = datetime.fromisoformat(row["ended_at"])

        return SessionLog(
            id=row["id"],
            workout_id=row["workout_id"],
            workout_name=row["workout_name"],
            started_at=started_at,
            ended_at=ended_at,
            duration_seconds=row["duration_seconds"],
            completion_rate=row["completion_rate"],
            summary=json.loads(row["summary"]),
        )
