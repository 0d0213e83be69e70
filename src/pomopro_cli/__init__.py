"""PomoPro CLI - Pomodoro focus timer with session tracking and analytics."""

__version__ = "0.1.0"
