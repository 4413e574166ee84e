"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..db import WorkoutRepository, get_db_path
from ..models.workout import Workout


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'workout-planner init' first."
        )
        ctx.exit(1)


async def load_workout(ctx: click.Context, workout_id: int) -> Workout:
    """Fetch a workout or exit with an error."""
    workout = await WorkoutRepository(get_db_path()).get(workout_id)
    if workout is None:
        echo_error(f"Workout ID {workout_id} not found")
        ctx.exit(1)
    return workout


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Lay out rows under headers as left-aligned columns.

    Each column is as wide as its widest cell, columns are separated by
    ``padding`` spaces and trailing whitespace is dropped. Returns an empty
    string when there are no rows.
    """
    if not rows:
        return ""

    cells = [[str(cell) for cell in row] for row in rows]
    widths = [
        max(len(header), *(len(row[i]) for row in cells))
        for i, header in enumerate(headers)
    ]
    gap = " " * padding

    def line(values: list[str]) -> str:
        return gap.join(v.ljust(w) for v, w in zip(values, widths)).rstrip()

    lines = [line(headers), line(["-" * w for w in widths])]
    lines.extend(line(row) for row in cells)
    return "\n".join(lines)
