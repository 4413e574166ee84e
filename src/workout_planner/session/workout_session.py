"""Guided workout session engine."""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from ..models.exercise import Exercise
from ..models.progress import ExerciseProgress
from ..models.workout import Workout
from ..timing import AsyncioScheduler, Scheduler, TimerEvent, TimerManager, TimerMode
from .interfaces import (
    BETWEEN_EXERCISE_CHOICES,
    PAUSED_CHOICES,
    START_CHOICES,
    STEP_CHOICES,
    Ack,
    AcknowledgmentSource,
    SessionReporter,
    WorkoutLogHook,
)
from .summary import ExerciseSummary, WorkoutSummary

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Workout session lifecycle state."""

    NOT_STARTED = "not_started"
    ACTIVE = "active"
    PAUSED = "paused"
    FINISHED = "finished"


class WorkoutSession:
    """Runs a workout: exercises in order, sets within each exercise.

    State machine: NOT_STARTED -> ACTIVE <-> PAUSED -> FINISHED. FINISHED
    is terminal; once finished the session's timer is shut down.

    Progress is tracked per exercise position, so the guided loop can be
    re-driven after a pause and continue from the first incomplete set of
    the exercise under the cursor. State conflicts (starting twice,
    pausing while paused, finishing twice) are reported, never raised.
    """

    def __init__(
        self,
        workout: Workout,
        acks: AcknowledgmentSource,
        reporter: SessionReporter,
        scheduler: Scheduler | None = None,
        log_hook: WorkoutLogHook | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._workout = workout
        self._exercises = workout.list_exercises()
        self._progress = [ExerciseProgress(exercise) for exercise in self._exercises]
        self._acks = acks
        self._reporter = reporter
        self._log_hook = log_hook
        self._clock = clock
        self._timer = TimerManager(scheduler or AsyncioScheduler())
        self._timer.subscribe(self._on_timer_event)
        self._state = SessionState.NOT_STARTED
        self._current_exercise_index = 0
        self.started_at: datetime | None = None
        self.ended_at: datetime | None = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def workout(self) -> Workout:
        return self._workout

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    @property
    def current_exercise_index(self) -> int:
        return self._current_exercise_index

    @property
    def timer(self) -> TimerManager:
        return self._timer

    @property
    def progress(self) -> list[ExerciseProgress]:
        """Progress records in workout order."""
        return list(self._progress)

    def get_progress(self, exercise: Exercise | str) -> ExerciseProgress | None:
        """Look up progress by exercise or exercise name (case-insensitive)."""
        name = exercise.name if isinstance(exercise, Exercise) else exercise
        for record in self._progress:
            if record.exercise.matches(name):
                return record
        return None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start_workout(self) -> None:
        """Start the session and guide the user through every exercise.

        Calling this on a paused session resumes it and continues from the
        current exercise and its first incomplete set.
        """
        if self._state is SessionState.ACTIVE:
            self._conflict("Workout is already in progress.")
            return
        if self._state is SessionState.FINISHED:
            self._conflict("Workout has already been finished.")
            return

        if self._state is SessionState.PAUSED:
            self.resume_workout()
        else:
            if not self._exercises:
                self._reporter.warning(
                    "Cannot start workout: No exercises in the workout plan."
                )
                logger.warning("Refusing to start empty workout '%s'", self._workout.name)
                return

            self._state = SessionState.ACTIVE
            self.started_at = self._clock()
            logger.debug("Workout '%s' started", self._workout.name)

            self._reporter.info(f"===== STARTING WORKOUT: {self._workout.name} =====")
            self._reporter.info(f"Total exercises: {len(self._exercises)}")
            self._reporter.info(
                "Estimated duration: "
                f"{self._workout.calculate_total_workout_time():.1f} minutes"
            )
            self._reporter.info(f"Starting at: {self.started_at:%Y-%m-%d %H:%M:%S}")
            await self._acks.wait_ready(
                "Press Enter to continue to the first exercise...", START_CHOICES
            )

        await self._run_exercises()

        if self.is_active:
            self.finish_workout()

    def pause_workout(self) -> None:
        """Pause the session and any running timer."""
        if self._state is not SessionState.ACTIVE:
            self._conflict("No workout is currently active.")
            return

        self._state = SessionState.PAUSED
        if self._timer.is_running():
            self._timer.pause_timer()
        logger.debug("Workout paused at exercise %d", self._current_exercise_index + 1)
        self._reporter.info("Workout paused.")

    def resume_workout(self) -> None:
        """Resume a paused session, including a timer paused with it."""
        if self._state is SessionState.ACTIVE:
            self._conflict("Workout is already active.")
            return
        if self._state is not SessionState.PAUSED:
            self._conflict("Workout is not paused.")
            return

        self._state = SessionState.ACTIVE
        if self._timer.is_paused():
            self._timer.resume_timer()
        self._reporter.info(
            f"Workout resumed from exercise {self._current_exercise_index + 1}"
            f"/{len(self._exercises)}"
        )

    def finish_workout(self) -> None:
        """Finish the session, report the summary and release the timer."""
        if self._state is SessionState.FINISHED:
            self._conflict("Workout has already been finished.")
            return

        self._state = SessionState.FINISHED
        self.ended_at = self._clock()

        if self._timer.is_running() or self._timer.is_paused():
            self._timer.stop_timer()

        summary = self.build_summary()
        self._reporter.summary(summary)
        logger.debug(
            "Workout '%s' finished: %d/%d exercises",
            self._workout.name,
            summary.completed_count,
            summary.total_count,
        )

        if self._log_hook is not None:
            try:
                self._log_hook(self)
            except Exception:
                logger.exception("Workout log hook failed")

        self._timer.shutdown()

    def track_progress(
        self, exercise: Exercise | str, completed_sets: int, completed_reps: int
    ) -> None:
        """Record progress for an exercise outside the guided loop."""
        record = self.get_progress(exercise)
        if record is None:
            name = exercise.name if isinstance(exercise, Exercise) else exercise
            logger.warning("No progress record for exercise '%s'", name)
            return
        record.update_progress(completed_sets, completed_reps)

    def build_summary(self) -> WorkoutSummary:
        """Summarise the session so far (up to now if not finished)."""
        duration = 0
        if self.started_at is not None:
            end = self.ended_at or self._clock()
            duration = max(0, int((end - self.started_at).total_seconds()))

        return WorkoutSummary(
            workout_name=self._workout.name,
            started_at=self.started_at,
            ended_at=self.ended_at,
            duration_seconds=duration,
            exercises=[
                ExerciseSummary(
                    name=record.exercise.name,
                    completed_sets=record.completed_sets,
                    total_sets=record.exercise.sets,
                    percentage=record.get_completion_percentage(),
                    completed=record.is_completed(),
                )
                for record in self._progress
            ],
        )

    # ------------------------------------------------------------------
    # Guided loop
    # ------------------------------------------------------------------

    async def _run_exercises(self) -> None:
        last_index = len(self._exercises) - 1
        while self._current_exercise_index <= last_index and self.is_active:
            await self._run_exercise(self._current_exercise_index)
            if not self.is_active:
                # Paused from outside or quit; the cursor stays put
                return

            if self._current_exercise_index < last_index:
                ack = await self._acks.wait_ready(
                    "Ready for the next exercise?", BETWEEN_EXERCISE_CHOICES
                )
                if ack is Ack.PAUSE:
                    self.pause_workout()
                    if not await self._hold_paused():
                        return

            self._current_exercise_index += 1

    async def _run_exercise(self, index: int) -> None:
        exercise = self._exercises[index]
        record = self._progress[index]

        self._reporter.info(f"----- EXERCISE: {exercise.name} -----")
        self._reporter.info(
            f"Sets: {exercise.sets} | Reps: {exercise.reps} | "
            f"Duration: {exercise.duration} seconds per set"
        )

        current_set = record.completed_sets + 1

        # Re-driving a paused session resumes its timer: a work timer belongs
        # to the set under the cursor, a rest timer to the rest after the
        # last completed set.
        resumed = self._timer.mode if self._timer.is_running() else None
        in_rest = resumed is TimerMode.REST and record.completed_sets > 0
        if in_rest:
            current_set = record.completed_sets

        while current_set <= exercise.sets and self.is_active:
            if not in_rest:
                self._reporter.info(f"Set {current_set} of {exercise.sets}")

                if exercise.is_timed and resumed is TimerMode.WORK:
                    prompt = "Timer resumed. Press Enter when you've completed this set..."
                elif exercise.is_timed:
                    self._stop_timer_if_active()
                    self._timer.track_duration(exercise.duration)
                    prompt = "Timer started. Press Enter when you've completed this set..."
                else:
                    self._stop_timer_if_active()
                    prompt = f"Complete {exercise.reps} reps and press Enter when done..."
                resumed = None

                if not await self._acknowledge(prompt):
                    return
                self._stop_timer_if_active()

                record.update_progress(current_set, exercise.reps)
                self._reporter.success(f"Set {current_set} completed!")

            if current_set < exercise.sets:
                if in_rest:
                    self._reporter.info(
                        f"Resting for {self._timer.get_remaining()} more seconds."
                    )
                    in_rest = False
                    resumed = None
                else:
                    rest = self._workout.get_rest_time(exercise.name)
                    self._reporter.info(f"Rest for {rest} seconds before the next set.")
                    self._timer.start_rest_timer(rest)
                if not await self._acknowledge("Press Enter when you're ready to continue..."):
                    return
                self._stop_timer_if_active()
            else:
                self._reporter.success(f"{exercise.name} completed!")

            current_set += 1

        if current_set > exercise.sets:
            record.mark_completed()

    async def _acknowledge(self, prompt: str) -> bool:
        """Wait for the user to finish a step.

        Handles pause (blocking until resume or quit) and quit. Returns
        False when the guided loop should stop.
        """
        while True:
            ack = await self._acks.wait_ready(prompt, STEP_CHOICES)
            if ack is Ack.QUIT:
                self.finish_workout()
                return False
            if ack is Ack.PAUSE:
                self.pause_workout()
                if not await self._hold_paused():
                    return False
                continue
            return self.is_active

    async def _hold_paused(self) -> bool:
        """Block while paused. Returns True once resumed, False on quit."""
        ack = await self._acks.wait_ready(
            "Workout paused. Resume or quit?", PAUSED_CHOICES
        )
        if ack is Ack.QUIT:
            self.finish_workout()
            return False
        self.resume_workout()
        return self.is_active

    def _stop_timer_if_active(self) -> None:
        if self._timer.is_running() or self._timer.is_paused():
            self._timer.stop_timer()

    def _on_timer_event(self, event: TimerEvent) -> None:
        self._reporter.timer_event(event)

    def _conflict(self, message: str) -> None:
        logger.warning(message)
        self._reporter.warning(message)

