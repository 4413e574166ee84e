"""Workout catalog commands."""

import click

from ..db import WorkoutRepository, get_db_path
from ..errors import InvalidExerciseError, WorkoutPlannerError
from ..models.exercise import Exercise
from ..models.workout import FILTER_KEYS, SORT_KEYS, Workout
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    load_workout,
)


def _exercise_rows(workout: Workout, exercises: list[Exercise]) -> list[list[str]]:
    rows = []
    for i, ex in enumerate(exercises, start=1):
        rows.append([
            str(i),
            ex.name,
            str(ex.sets),
            str(ex.reps),
            f"{ex.duration}s" if ex.is_timed else "-",
            f"{workout.get_rest_time(ex.name)}s",
        ])
    return rows


EXERCISE_HEADERS = ["#", "Exercise", "Sets", "Reps", "Duration", "Rest"]


@click.group()
@click.pass_context
def workouts(ctx):
    """Manage workouts and their exercises."""
    ensure_initialized(ctx)


@workouts.command()
@click.argument("name")
@click.pass_context
@async_command
async def create(ctx, name: str):
    """Create a new, empty workout."""
    name = name.strip()
    if not name:
        echo_error("Workout name cannot be empty")
        ctx.exit(1)

    repo = WorkoutRepository(get_db_path())
    if await repo.get_by_name(name):
        echo_error(f"A workout named '{name}' already exists")
        ctx.exit(1)

    workout_id = await repo.create(Workout(name=name))
    echo_success(f"Created workout '{name}' (ID: {workout_id})")


@workouts.command(name="list")
@async_command
async def list_workouts():
    """List all workouts."""
    all_workouts = await WorkoutRepository(get_db_path()).list_all()

    if not all_workouts:
        echo_info("No workouts found. Create one with 'workout-planner workouts create'")
        return

    headers = ["ID", "Name", "Exercises", "Est. minutes", "Created"]
    rows = []
    for workout in all_workouts:
        created = workout.created_at.strftime("%Y-%m-%d") if workout.created_at else "N/A"
        rows.append([
            str(workout.id),
            workout.name[:30] + "..." if len(workout.name) > 30 else workout.name,
            str(len(workout.exercises)),
            f"{workout.calculate_total_workout_time():.1f}",
            created,
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_workouts)} workout(s)")


@workouts.command()
@click.argument("workout_id", type=int)
@click.pass_context
@async_command
async def show(ctx, workout_id: int):
    """Show the exercises of a workout."""
    workout = await load_workout(ctx, workout_id)

    click.echo()
    click.echo("=" * 60)
    click.echo(f"Workout: {workout.name} (ID: {workout.id})")
    click.echo("=" * 60)

    if not workout.exercises:
        echo_info("No exercises yet. Add one with 'workout-planner workouts add-exercise'")
        return

    click.echo()
    click.echo(format_table(EXERCISE_HEADERS, _exercise_rows(workout, workout.exercises)))
    click.echo()
    click.echo(
        f"Estimated duration: {workout.calculate_total_workout_time():.1f} minutes"
    )


@workouts.command()
@click.argument("workout_id", type=int)
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, workout_id: int, force: bool):
    """Delete a workout."""
    workout = await load_workout(ctx, workout_id)

    if not force:
        click.echo(f"Workout: {workout.name}")
        if not click.confirm("Are you sure you want to delete this workout?"):
            echo_info("Cancelled")
            return

    await WorkoutRepository(get_db_path()).delete(workout_id)
    echo_success(f"Workout {workout_id} deleted")


@workouts.command(name="add-exercise")
@click.argument("workout_id", type=int)
@click.option("--name", prompt="Exercise name", help="Exercise name")
@click.option(
    "--sets", type=click.IntRange(1, 100), prompt="Number of sets", help="Sets"
)
@click.option(
    "--reps", type=click.IntRange(1, 1000), prompt="Reps per set", help="Reps per set"
)
@click.option(
    "--duration",
    type=click.IntRange(0, 3600),
    prompt="Duration per set in seconds (0 for no timer)",
    default=0,
    help="Seconds per set, 0 for untimed sets",
)
@click.pass_context
@async_command
async def add_exercise(ctx, workout_id: int, name: str, sets: int, reps: int, duration: int):
    """Add an exercise to a workout."""
    workout = await load_workout(ctx, workout_id)

    try:
        workout.add_exercise(
            Exercise(name=name.strip(), sets=sets, reps=reps, duration=duration)
        )
    except WorkoutPlannerError as e:
        echo_error(str(e))
        ctx.exit(1)

    await WorkoutRepository(get_db_path()).update(workout)
    echo_success(f"Exercise added: {name.strip()}")


@workouts.command(name="remove-exercise")
@click.argument("workout_id", type=int)
@click.argument("name")
@click.pass_context
@async_command
async def remove_exercise(ctx, workout_id: int, name: str):
    """Remove an exercise from a workout by name."""
    workout = await load_workout(ctx, workout_id)

    if not workout.remove_exercise(name):
        echo_error(f"Exercise '{name}' not found in {workout.name}")
        ctx.exit(1)

    await WorkoutRepository(get_db_path()).update(workout)
    echo_success(f"Exercise removed: {name}")


@workouts.command(name="update-exercise")
@click.argument("workout_id", type=int)
@click.argument("name")
@click.option("--sets", type=click.IntRange(1, 100), help="New number of sets")
@click.option("--reps", type=click.IntRange(1, 1000), help="New reps per set")
@click.option("--duration", type=click.IntRange(0, 3600), help="New seconds per set")
@click.pass_context
@async_command
async def update_exercise(
    ctx, workout_id: int, name: str, sets: int | None, reps: int | None, duration: int | None
):
    """Update an exercise; omitted options keep their current value."""
    workout = await load_workout(ctx, workout_id)

    current = workout.get_exercise_details(name)
    if current is None:
        echo_error(f"Exercise '{name}' not found in {workout.name}")
        ctx.exit(1)

    try:
        workout.update_exercise(
            name,
            sets if sets is not None else current.sets,
            reps if reps is not None else current.reps,
            duration if duration is not None else current.duration,
        )
    except InvalidExerciseError as e:
        echo_error(str(e))
        ctx.exit(1)

    await WorkoutRepository(get_db_path()).update(workout)
    echo_success(f"Exercise updated: {current.name}")


@workouts.command()
@click.argument("workout_id", type=int)
@click.argument("name")
@click.argument("seconds", type=click.IntRange(0, 3600))
@click.pass_context
@async_command
async def rest(ctx, workout_id: int, name: str, seconds: int):
    """Set a custom rest time (seconds) between sets of an exercise."""
    workout = await load_workout(ctx, workout_id)

    exercise = workout.get_exercise_details(name)
    if exercise is None:
        echo_error(f"Exercise '{name}' not found in {workout.name}")
        ctx.exit(1)

    workout.set_custom_rest_times({exercise.name: seconds})
    await WorkoutRepository(get_db_path()).update(workout)
    echo_success(f"Rest time for {exercise.name} set to {seconds} seconds")


@workouts.command()
@click.argument("workout_id", type=int)
@click.argument("sort_by", type=click.Choice(SORT_KEYS, case_sensitive=False))
@click.pass_context
@async_command
async def sort(ctx, workout_id: int, sort_by: str):
    """Reorder a workout's exercises."""
    workout = await load_workout(ctx, workout_id)

    workout.sort_exercises(sort_by)
    await WorkoutRepository(get_db_path()).update(workout)
    echo_success(f"Exercises sorted by {sort_by.lower()}")
    click.echo()
    click.echo(format_table(EXERCISE_HEADERS, _exercise_rows(workout, workout.exercises)))


@workouts.command(name="filter")
@click.argument("workout_id", type=int)
@click.argument("filter_by", type=click.Choice(FILTER_KEYS, case_sensitive=False))
@click.argument("threshold", type=int)
@click.pass_context
@async_command
async def filter_exercises(ctx, workout_id: int, filter_by: str, threshold: int):
    """Show exercises whose sets, reps or duration is at least THRESHOLD."""
    workout = await load_workout(ctx, workout_id)

    matches = workout.filter_exercises(filter_by, threshold)
    if not matches:
        echo_info(f"No exercises with {filter_by.lower()} >= {threshold}")
        return

    click.echo()
    click.echo(format_table(EXERCISE_HEADERS, _exercise_rows(workout, matches)))
