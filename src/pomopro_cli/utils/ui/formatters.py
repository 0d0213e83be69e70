"""Output helpers shared by the commands."""

from __future__ import annotations

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Shared Rich console so all output goes through one place."""
    return Console(highlight=highlight)


console = get_console()


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def format_minutes(minutes: int) -> str:
    """Render minutes as ``1h 5m`` or ``45m``."""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m" if hours else f"{mins}m"


def get_progress_bar(percentage: float, width: int = 10) -> str:
    """Block progress bar for *percentage* (0-100)."""
    filled = int(max(0, min(100, percentage)) / 100 * width)
    return "█" * filled + "░" * (width - filled)


def get_mood_emoji(mood: float) -> str:
    """Emoji for an average 1-5 mood rating."""
    if mood >= 4.5:
        return "🤩"
    if mood >= 3.5:
        return "😊"
    if mood >= 2.5:
        return "🙂"
    if mood >= 1.5:
        return "😐"
    return "😴"
