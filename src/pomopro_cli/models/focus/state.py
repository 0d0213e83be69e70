"""Timer state types and the persisted snapshot used for recovery."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

TimerStatus = Literal["idle", "running", "paused"]
SessionKind = Literal["focus", "short-break", "long-break"]

TIMER_STATUSES: tuple[str, ...] = ("idle", "running", "paused")
SESSION_KINDS: tuple[str, ...] = ("focus", "short-break", "long-break")
BREAK_KINDS: tuple[str, ...] = ("short-break", "long-break")


@dataclass(frozen=True)
class TimerSnapshot:
    """In-progress timer data persisted under the ``timer-state`` key."""

    timer_state: TimerStatus = "idle"
    current_session: SessionKind = "focus"
    time_left: int = 25 * 60
    cycle_count: int = 0
    current_task: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> TimerSnapshot:
        """Create from a stored record, tolerating missing or bad fields."""
        if not isinstance(data, dict):
            return cls()

        status = data.get("timer_state")
        kind = data.get("current_session")
        time_left = data.get("time_left")
        cycle_count = data.get("cycle_count")
        task = data.get("current_task")

        return cls(
            timer_state=status if status in TIMER_STATUSES else "idle",
            current_session=kind if kind in SESSION_KINDS else "focus",
            time_left=time_left if isinstance(time_left, int) and time_left >= 0 else 25 * 60,
            cycle_count=cycle_count if isinstance(cycle_count, int) and cycle_count >= 0 else 0,
            current_task=task if isinstance(task, str) and task else None,
        )
