"""Scheduling capability used by timers.

Timers never talk to the event loop directly; they receive a ``Scheduler``
so tests can drive time with a fake clock.
"""

import asyncio
import logging
import time
from typing import Callable, Protocol, runtime_checkable

from ..errors import SchedulerShutdownError

logger = logging.getLogger(__name__)


@runtime_checkable
class ScheduledTask(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None:
        """Cancel the task. Cancelling twice is harmless."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Protocol for one-shot and repeating callback scheduling."""

    def now(self) -> float:
        """Monotonic time in seconds."""
        ...

    def schedule_once(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """Run ``callback`` once after ``delay`` seconds."""
        ...

    def schedule_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        """Run ``callback`` every ``interval`` seconds, first after one interval."""
        ...

    def shutdown(self) -> None:
        """Cancel everything and refuse further scheduling."""
        ...


class _OnceTask:
    def __init__(self, scheduler: "AsyncioScheduler", callback: Callable[[], None]):
        self._scheduler = scheduler
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self.cancelled = False

    def _run(self) -> None:
        self._scheduler._tasks.discard(self)
        if not self.cancelled:
            self._callback()

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
        self._scheduler._tasks.discard(self)


class _RepeatingTask:
    """Fixed-rate repetition: fire times are anchored to the start time."""

    def __init__(
        self,
        scheduler: "AsyncioScheduler",
        interval: float,
        callback: Callable[[], None],
    ):
        self._scheduler = scheduler
        self._interval = interval
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._fires = 0
        self._start = 0.0
        self.cancelled = False

    def _arm(self, loop: asyncio.AbstractEventLoop) -> None:
        if self._fires == 0:
            self._start = loop.time()
        when = self._start + (self._fires + 1) * self._interval
        self._handle = loop.call_at(when, self._run, loop)

    def _run(self, loop: asyncio.AbstractEventLoop) -> None:
        if self.cancelled:
            return
        self._fires += 1
        self._callback()
        # The callback may have cancelled this task
        if not self.cancelled:
            self._arm(loop)

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
        self._scheduler._tasks.discard(self)


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop.

    Callbacks run on the loop thread, the same thread as the session's
    control flow, so timer state needs no extra locking.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop
        self._tasks: set[_OnceTask | _RepeatingTask] = set()
        self._closed = False

    @property
    def is_shutdown(self) -> bool:
        return self._closed

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _check_open(self) -> None:
        if self._closed:
            raise SchedulerShutdownError("Scheduler has been shut down")

    def now(self) -> float:
        return time.monotonic()

    def schedule_once(self, delay: float, callback: Callable[[], None]) -> _OnceTask:
        self._check_open()
        loop = self._get_loop()
        task = _OnceTask(self, callback)
        task._handle = loop.call_later(max(0.0, delay), task._run)
        self._tasks.add(task)
        return task

    def schedule_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> _RepeatingTask:
        self._check_open()
        if interval <= 0:
            raise ValueError("Repeat interval must be positive")
        loop = self._get_loop()
        task = _RepeatingTask(self, interval, callback)
        task._arm(loop)
        self._tasks.add(task)
        return task

    def shutdown(self) -> None:
        if self._closed:
            return
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        logger.debug("Scheduler shut down")
