"""Pomodoro cycling: which session comes next."""

from __future__ import annotations

from .settings import TimerSettings
from .state import SessionKind


def next_kind(
    current: SessionKind, cycle_count: int, long_break_interval: int
) -> tuple[SessionKind, int]:
    """Determine the next session kind and the updated cycle count.

    Completing a focus session counts one cycle; every
    ``long_break_interval``-th cycle earns a long break. Any break is
    followed by focus.
    """
    if current == "focus":
        cycle_count += 1
        if cycle_count % long_break_interval == 0:
            return "long-break", cycle_count
        return "short-break", cycle_count
    return "focus", cycle_count


def cycle_position(cycle_count: int, long_break_interval: int) -> int:
    """1-based position of the upcoming focus session within its cycle."""
    return cycle_count % long_break_interval + 1


def get_progress_dots(cycle_count: int, settings: TimerSettings) -> str:
    """Progress dots showing completed pomodoros in the current cycle."""
    done = cycle_count % settings.long_break_interval
    dots = ["●" if i < done else "○" for i in range(settings.long_break_interval)]
    return " ".join(dots)


def get_emoji(kind: SessionKind) -> str:
    """Get emoji for a session kind."""
    if kind == "focus":
        return "🍅"
    if kind == "short-break":
        return "☕"
    return "🌴"


def get_title(kind: SessionKind) -> str:
    """Human-readable name of a session kind."""
    if kind == "focus":
        return "Focus"
    if kind == "short-break":
        return "Short Break"
    return "Long Break"
