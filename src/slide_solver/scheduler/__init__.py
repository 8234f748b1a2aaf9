"""
Scheduler module - runs the AI against a board owner on an event loop.
"""

from slide_solver.scheduler.scheduler import (
    AIScheduler,
    SchedulerState,
    create_scheduler,
    DEFAULT_MODE,
    DEFAULT_SPEED,
)

__all__ = [
    "AIScheduler",
    "SchedulerState",
    "create_scheduler",
    "DEFAULT_MODE",
    "DEFAULT_SPEED",
]
