"""Focus mode - Pomodoro timer core for PomoPro CLI."""

from .achievements import ACHIEVEMENTS, Achievement
from .clock import SessionClock
from .history import Session
from .lifecycle import LifecycleState
from .scheduler import Scheduler
from .settings import TimerSettings
from .state import SessionKind, TimerSnapshot, TimerStatus

__all__ = [
    "ACHIEVEMENTS",
    "Achievement",
    "LifecycleState",
    "Scheduler",
    "Session",
    "SessionClock",
    "SessionKind",
    "TimerSettings",
    "TimerSnapshot",
    "TimerStatus",
]
