"""Guided workout session command."""

import click

from ..console import ConsoleSession
from ..db import SessionLogRepository, get_db_path
from ..session import WorkoutSession, WorkoutSummary
from .base import (
    async_command,
    echo_error,
    echo_success,
    ensure_initialized,
    load_workout,
)


@click.command()
@click.argument("workout_id", type=int)
@click.option("--no-log", is_flag=True, help="Don't record the session in history")
@click.pass_context
@async_command
async def start(ctx, workout_id: int, no_log: bool):
    """Start a guided session for a workout.

    Walks through every set of every exercise, running work timers for timed
    sets and rest timers between sets. Pause or quit from any prompt.
    """
    ensure_initialized(ctx)
    workout = await load_workout(ctx, workout_id)

    if not workout.exercises:
        echo_error(f"Workout '{workout.name}' has no exercises.")
        ctx.exit(1)

    # The session calls the hook synchronously; storage happens afterwards
    finished: list[WorkoutSummary] = []
    console = ConsoleSession()
    session = WorkoutSession(
        workout,
        acks=console,
        reporter=console,
        log_hook=lambda s: finished.append(s.build_summary()),
    )

    await session.start_workout()

    if no_log:
        return

    log_repo = SessionLogRepository(get_db_path())
    for summary in finished:
        await log_repo.create(summary, workout_id=workout.id)
        echo_success("Workout session logged")
