"""Services module for PomoPro CLI - Business logic layer."""

from .notification_service import ConsoleNotifier, Notifier, NullNotifier
from .task_service import TaskService
from .timer_service import FocusTimer

__all__ = [
    "FocusTimer",
    "TaskService",
    "Notifier",
    "ConsoleNotifier",
    "NullNotifier",
]
