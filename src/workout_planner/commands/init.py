"""Initialize project command."""

import click

from ..config import get_data_dir
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the workout-planner data directory and database.

    Set WORKOUT_PLANNER_HOME to keep data somewhere other than the default
    directory.
    """
    data_dir = get_data_dir()
    echo_info(f"Initializing workout-planner in {data_dir}")

    db_path = get_db_path(data_dir)
    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("workout-planner is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo('  1. Create a workout:      workout-planner workouts create "Leg Day"')
    click.echo("  2. Add exercises:         workout-planner workouts add-exercise 1")
    click.echo("  3. Start a session:       workout-planner start 1")
