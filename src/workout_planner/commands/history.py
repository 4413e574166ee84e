"""Session history command."""

import click

from ..db import SessionLogRepository, get_db_path
from .base import async_command, echo_info, ensure_initialized, format_table


@click.command()
@click.option("--workout", "workout_id", type=int, help="Only show one workout")
@click.option("--limit", "-n", type=click.IntRange(1, 500), default=20, show_default=True)
@click.pass_context
@async_command
async def history(ctx, workout_id: int | None, limit: int):
    """Show recently finished workout sessions."""
    ensure_initialized(ctx)

    logs = await SessionLogRepository(get_db_path()).list_recent(
        limit=limit, workout_id=workout_id
    )

    if not logs:
        echo_info("No sessions logged yet. Run 'workout-planner start <id>'")
        return

    headers = ["ID", "Workout", "Date", "Duration", "Completion"]
    rows = []
    for log in logs:
        date = log.started_at.strftime("%Y-%m-%d %H:%M") if log.started_at else "N/A"
        minutes, seconds = divmod(log.duration_seconds, 60)
        rows.append([
            str(log.id),
            log.workout_name,
            date,
            f"{minutes}m {seconds:02d}s",
            f"{log.completion_rate:.1f}%",
        ])

    click.echo()
    click.echo(format_table(headers, rows))
