"""Work and rest countdown timers."""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator, Callable

from ..errors import SchedulerShutdownError
from .scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

TICK_INTERVAL = 1.0
FINAL_COUNTDOWN = 3
TICK_EVERY = 5


class TimerMode(str, Enum):
    """Which kind of interval a timer is tracking."""

    WORK = "work"
    REST = "rest"


class TimerState(str, Enum):
    """Timer lifecycle state."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class TimerEventKind(str, Enum):
    STARTED = "started"
    TICK = "tick"
    PAUSED = "paused"
    RESUMED = "resumed"
    STOPPED = "stopped"
    COMPLETED = "completed"


@dataclass(frozen=True)
class TimerEvent:
    """A notification emitted by a TimerManager."""

    kind: TimerEventKind
    mode: TimerMode | None
    remaining: int


TimerListener = Callable[[TimerEvent], None]

_FINAL_KINDS = (TimerEventKind.COMPLETED, TimerEventKind.STOPPED)


def should_report(remaining: int) -> bool:
    """Rest countdown display policy: every 5 seconds, then each of the last 3."""
    return remaining > 0 and (remaining % TICK_EVERY == 0 or remaining <= FINAL_COUNTDOWN)


class TimerManager:
    """Runs a single work or rest countdown at a time.

    State machine: IDLE -> RUNNING -> {PAUSED, IDLE (completed)};
    PAUSED -> RUNNING (resume) or IDLE (stop). Misuse such as starting a
    second timer is logged and ignored.

    Each start bumps a generation counter that every scheduled callback
    checks, so nothing fires for a timer that was paused or stopped.
    """

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._state = TimerState.IDLE
        self._mode: TimerMode | None = None
        self._duration = 0
        self._started_at = 0.0
        self._elapsed_at_pause = 0
        self._tasks: list[ScheduledTask] = []
        self._generation = 0
        self._listeners: list[TimerListener] = []
        self._shut_down = False

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def mode(self) -> TimerMode | None:
        """Mode of the running or paused timer, if any."""
        return self._mode

    @property
    def is_shut_down(self) -> bool:
        return self._shut_down

    def is_running(self) -> bool:
        return self._state is TimerState.RUNNING

    def is_paused(self) -> bool:
        return self._state is TimerState.PAUSED

    def get_remaining(self) -> int:
        """Whole seconds left on the running or paused timer (0 when idle)."""
        if self._state is TimerState.RUNNING:
            return max(0, self._duration - self._elapsed())
        if self._state is TimerState.PAUSED:
            return max(0, self._duration - self._elapsed_at_pause)
        return 0

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: TimerListener) -> Callable[[], None]:
        """Register a listener for timer events.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def countdown(self) -> AsyncIterator[int]:
        """Stream the reported seconds-remaining values of the current timer.

        The stream ends when the timer completes or is stopped. It is
        subscribed immediately, so no tick is missed between this call and
        the first iteration.
        """
        if self._state is TimerState.IDLE:
            return _empty_countdown()

        queue: asyncio.Queue[TimerEvent] = asyncio.Queue()

        # Detaches itself once the timer ends, even if the stream is never read
        def forward(event: TimerEvent) -> None:
            queue.put_nowait(event)
            if event.kind in _FINAL_KINDS:
                unsubscribe()

        unsubscribe = self.subscribe(forward)
        return _drain_countdown(queue, unsubscribe)

    def _emit(self, kind: TimerEventKind, mode: TimerMode | None, remaining: int) -> None:
        event = TimerEvent(kind=kind, mode=mode, remaining=remaining)
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def track_duration(self, seconds: int) -> bool:
        """Start a work timer for ``seconds``.

        Returns:
            True if the timer was started
        """
        if self._state is TimerState.RUNNING:
            logger.warning("Timer is already running. Stop it first.")
            return False
        if seconds <= 0:
            logger.warning("Work timer needs a positive duration, got %s", seconds)
            return False
        return self._start(TimerMode.WORK, seconds, TimerEventKind.STARTED)

    def start_rest_timer(self, seconds: int) -> bool:
        """Start a rest timer for ``seconds`` with periodic countdown ticks.

        Returns:
            True if the timer was started
        """
        if self._state is TimerState.RUNNING:
            logger.warning("Timer is already running. Stop it first.")
            return False
        if seconds <= 0:
            logger.warning("Rest timer needs a positive duration, got %s", seconds)
            return False
        return self._start(TimerMode.REST, seconds, TimerEventKind.STARTED)

    def pause_timer(self) -> bool:
        """Pause the running timer, keeping the elapsed time."""
        if self._state is not TimerState.RUNNING:
            logger.warning("No timer is currently running.")
            return False

        elapsed = self._elapsed()
        self._cancel_tasks()
        self._elapsed_at_pause = elapsed
        self._state = TimerState.PAUSED
        logger.debug("%s timer paused at %ss", self._mode.value, elapsed)
        self._emit(TimerEventKind.PAUSED, self._mode, self.get_remaining())
        return True

    def resume_timer(self) -> bool:
        """Resume a paused timer with its remaining time."""
        if self._state is TimerState.RUNNING:
            logger.warning("Timer is already running.")
            return False
        if self._state is not TimerState.PAUSED or self._mode is None:
            logger.warning("No timer to resume.")
            return False

        mode = self._mode
        remaining = self._duration - self._elapsed_at_pause
        if remaining <= 0:
            # Nothing left to wait for
            self._reset()
            self._emit(TimerEventKind.COMPLETED, mode, 0)
            return True

        logger.debug("Resuming %s timer with %ss remaining", mode.value, remaining)
        return self._start(mode, remaining, TimerEventKind.RESUMED)

    def stop_timer(self) -> bool:
        """Stop and discard the current timer."""
        if self._state is TimerState.IDLE and not self._tasks:
            logger.warning("No timer is running.")
            return False

        mode = self._mode
        remaining = self.get_remaining()
        self._cancel_tasks()
        self._reset()
        self._emit(TimerEventKind.STOPPED, mode, remaining)
        return True

    def shutdown(self) -> None:
        """Tear down the scheduling facility. No timer can start afterwards."""
        if self._shut_down:
            return

        mode = self._mode
        was_active = self._state is not TimerState.IDLE
        remaining = self.get_remaining()
        self._cancel_tasks()
        self._reset()
        self._scheduler.shutdown()
        self._shut_down = True
        if was_active:
            self._emit(TimerEventKind.STOPPED, mode, remaining)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _elapsed(self) -> int:
        return int(self._scheduler.now() - self._started_at)

    def _start(self, mode: TimerMode, seconds: int, kind: TimerEventKind) -> bool:
        if self._shut_down:
            logger.warning("Timer manager has been shut down; cannot start a timer.")
            return False

        self._cancel_tasks()
        generation = self._generation
        self._mode = mode
        self._duration = seconds
        self._elapsed_at_pause = 0
        self._started_at = self._scheduler.now()
        self._state = TimerState.RUNNING

        try:
            if mode is TimerMode.REST:
                self._tasks.append(
                    self._scheduler.schedule_repeating(
                        TICK_INTERVAL, self._make_ticker(generation, seconds)
                    )
                )
            self._tasks.append(
                self._scheduler.schedule_once(
                    seconds, lambda: self._complete(generation)
                )
            )
        except SchedulerShutdownError:
            logger.warning("Scheduler is shut down; cannot start a %s timer.", mode.value)
            self._cancel_tasks()
            self._reset()
            return False

        logger.debug("%s timer started for %ss", mode.value, seconds)
        self._emit(kind, mode, seconds)
        return True

    def _make_ticker(self, generation: int, duration: int) -> Callable[[], None]:
        ticks = 0

        def tick() -> None:
            nonlocal ticks
            if generation != self._generation:
                return
            ticks += 1
            remaining = duration - ticks
            if should_report(remaining):
                self._emit(TimerEventKind.TICK, TimerMode.REST, remaining)

        return tick

    def _complete(self, generation: int) -> None:
        if generation != self._generation or self._state is not TimerState.RUNNING:
            return
        mode = self._mode
        self._cancel_tasks()
        self._reset()
        logger.debug("%s timer completed", mode.value if mode else "unknown")
        self._emit(TimerEventKind.COMPLETED, mode, 0)

    def _cancel_tasks(self) -> None:
        self._generation += 1
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()

    def _reset(self) -> None:
        self._state = TimerState.IDLE
        self._mode = None
        self._duration = 0
        self._elapsed_at_pause = 0


async def _empty_countdown() -> AsyncIterator[int]:
    return
    yield


async def _drain_countdown(
    queue: "asyncio.Queue[TimerEvent]", unsubscribe: Callable[[], None]
) -> AsyncIterator[int]:
    try:
        while True:
            event = await queue.get()
            if event.kind is TimerEventKind.TICK:
                yield event.remaining
            elif event.kind in _FINAL_KINDS:
                return
    finally:
        unsubscribe()
