"""Timer package."""

from .engine import (
    TimerController,
    TimerState,
    Milestone,
    MilestoneFlags,
    format_elapsed,
    TICK_INTERVAL_MS,
    OVERTIME_GRACE_SECONDS,
)

__all__ = [
    "TimerController",
    "TimerState",
    "Milestone",
    "MilestoneFlags",
    "format_elapsed",
    "TICK_INTERVAL_MS",
    "OVERTIME_GRACE_SECONDS",
]
