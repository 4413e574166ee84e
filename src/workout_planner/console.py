"""Terminal front end for guided workout sessions."""

from typing import Sequence

import click
import questionary
from questionary import Style

from .commands.base import echo_success, echo_warning, format_table
from .session.interfaces import Ack
from .session.summary import WorkoutSummary
from .timing import TimerEvent, TimerEventKind, TimerMode

custom_style = Style([
    ("qmark", "fg:#673ab7 bold"),
    ("question", "bold"),
    ("answer", "fg:#f44336 bold"),
    ("pointer", "fg:#673ab7 bold"),
    ("highlighted", "fg:#673ab7 bold"),
    ("selected", "fg:#cc5454"),
])

CHOICE_LABELS = {
    Ack.CONTINUE: "Continue",
    Ack.PAUSE: "Pause workout",
    Ack.RESUME: "Resume workout",
    Ack.QUIT: "Quit and finish workout",
}


class ConsoleSession:
    """Questionary prompts for acknowledgments, click output for reporting."""

    async def wait_ready(self, prompt: str, choices: Sequence[Ack]) -> Ack:
        if len(choices) == 1:
            await questionary.press_any_key_to_continue(
                prompt, style=custom_style
            ).ask_async()
            return choices[0]

        answer = await questionary.select(
            prompt,
            choices=[questionary.Choice(CHOICE_LABELS[c], c) for c in choices],
            style=custom_style,
        ).ask_async()

        # Ctrl-C at a prompt returns None
        if answer is None:
            return Ack.QUIT if Ack.QUIT in choices else choices[0]
        return answer

    def info(self, message: str) -> None:
        click.echo(message)

    def success(self, message: str) -> None:
        echo_success(message)

    def warning(self, message: str) -> None:
        echo_warning(message)

    def timer_event(self, event: TimerEvent) -> None:
        label = "Exercise" if event.mode is TimerMode.WORK else "Rest"
        if event.kind is TimerEventKind.STARTED:
            click.echo(f"{label} timer started for {event.remaining} seconds.")
        elif event.kind is TimerEventKind.TICK:
            click.echo(f"Rest time remaining: {event.remaining} seconds")
        elif event.kind is TimerEventKind.PAUSED:
            click.echo(f"{label} timer paused with {event.remaining} seconds remaining.")
        elif event.kind is TimerEventKind.RESUMED:
            click.echo(f"Resuming {label.lower()} timer with {event.remaining} seconds remaining.")
        elif event.kind is TimerEventKind.COMPLETED:
            if event.mode is TimerMode.REST:
                click.echo(click.style("Rest time completed! Continue with your workout.", bold=True))
            else:
                click.echo(click.style("Exercise time completed!", bold=True))
        elif event.kind is TimerEventKind.STOPPED:
            click.echo("Timer stopped.")

    def summary(self, summary: WorkoutSummary) -> None:
        click.echo()
        click.echo(click.style("===== WORKOUT SUMMARY =====", bold=True))
        click.echo(f"Workout: {summary.workout_name}")
        click.echo(f"Total duration: {summary.duration_display}")
        if summary.started_at:
            click.echo(f"Start time: {summary.started_at:%Y-%m-%d %H:%M:%S}")
        end = f"{summary.ended_at:%Y-%m-%d %H:%M:%S}" if summary.ended_at else "In progress"
        click.echo(f"End time: {end}")

        rows = [
            [
                e.name,
                f"{e.completed_sets}/{e.total_sets}",
                f"{e.percentage:.1f}%",
                "yes" if e.completed else "no",
            ]
            for e in summary.exercises
        ]
        if rows:
            click.echo()
            click.echo(format_table(["Exercise", "Sets", "Progress", "Done"], rows))

        click.echo()
        click.echo(
            f"Overall completion: {summary.completed_count}/{summary.total_count} "
            f"exercises ({summary.completion_rate:.1f}%)"
        )
