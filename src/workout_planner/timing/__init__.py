"""Countdown timers and the scheduling capability they run on."""

from .scheduler import AsyncioScheduler, ScheduledTask, Scheduler
from .timer import (
    TimerEvent,
    TimerEventKind,
    TimerManager,
    TimerMode,
    TimerState,
    should_report,
)

__all__ = [
    "AsyncioScheduler",
    "ScheduledTask",
    "Scheduler",
    "TimerEvent",
    "TimerEventKind",
    "TimerManager",
    "TimerMode",
    "TimerState",
    "should_report",
]
