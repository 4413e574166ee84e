"""CLI entry point for workout-planner."""

import click

from . import __version__
from .commands import history, init, start, workouts
from .config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="workout-planner")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """workout-planner: guided, timed workout sessions.

    Build workouts from exercises, then run them set by set with work and
    rest timers, pausing and resuming as you go.

    Example usage:

        # Initialize the project
        workout-planner init

        # Build a workout
        workout-planner workouts create "Leg Day"
        workout-planner workouts add-exercise 1 --name Squats --sets 3 --reps 10
        workout-planner workouts rest 1 Squats 90

        # Run it
        workout-planner start 1
        workout-planner history
    """
    configure_logging(verbose)


# Register commands
main.add_command(init)
main.add_command(workouts)
main.add_command(start)
main.add_command(history)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
