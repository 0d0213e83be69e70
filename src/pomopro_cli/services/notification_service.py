"""Notification capability for completed sessions and achievements."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.console import Console
from rich.panel import Panel

from pomopro_cli.models.focus.state import SessionKind
from pomopro_cli.utils.ui.formatters import get_console


def format_clock(seconds: int) -> str:
    """Format seconds as MM:SS."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def completion_message(
    kind: SessionKind, early: bool = False, time_saved: int = 0
) -> tuple[str, str]:
    """Title and body announcing the end of a session of *kind*."""
    if early:
        return "Activity complete!", f"You saved {format_clock(time_saved)}"
    if kind == "focus":
        return "Pomodoro complete!", "Time for a break!"
    if kind == "short-break":
        return "Pomodoro complete!", "Break is over. Time to focus!"
    return "Pomodoro complete!", "Long break is over. New cycle!"


class Notifier(ABC):
    """Abstract notification sink."""

    @property
    @abstractmethod
    def has_permission(self) -> bool:
        """Whether notifications may currently be shown."""

    @abstractmethod
    def request_permission(self) -> bool:
        """Ask for permission to notify. Returns the resulting state."""

    @abstractmethod
    def notify(self, title: str, body: str) -> None:
        """Show a notification. Must be a no-op without permission."""

    @abstractmethod
    def play_sound(self) -> None:
        """Play the completion sound."""


class ConsoleNotifier(Notifier):
    """Shows notifications as rich panels and rings the terminal bell."""

    def __init__(self, enabled: bool = True, console: Console | None = None):
        self.enabled = enabled
        self.console = console or get_console()
        self._granted = False

    @property
    def has_permission(self) -> bool:
        return self._granted

    def request_permission(self) -> bool:
        self._granted = self.enabled
        return self._granted

    def notify(self, title: str, body: str) -> None:
        if not self._granted:
            return
        self.console.print(
            Panel(body, title=f"[bold]{title}[/bold]", border_style="green", expand=False)
        )

    def play_sound(self) -> None:
        self.console.bell()


class NullNotifier(Notifier):
    """Notifier that never shows anything."""

    @property
    def has_permission(self) -> bool:
        return False

    def request_permission(self) -> bool:
        return False

    def notify(self, title: str, body: str) -> None:
        pass

    def play_sound(self) -> None:
        pass
