"""Session log records and read-only queries over the log."""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any

from .state import BREAK_KINDS, SESSION_KINDS, SessionKind


def _rating(value: Any) -> int | None:
    """A stored 1-5 rating, or None when absent or out of range."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if 1 <= value <= 5 else None


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class Session:
    """One entry of the append-only session log."""

    id: str
    date: str  # ISO 8601
    kind: SessionKind
    duration: int  # seconds actually elapsed
    completed: bool
    task_id: str | None = None
    mood: int | None = None
    productivity: int | None = None
    completed_early: bool = False
    time_saved: int = 0  # seconds

    @property
    def started_at(self) -> datetime:
        """Timestamp converted to the local timezone."""
        return datetime.fromisoformat(self.date.replace("Z", "+00:00")).astimezone()

    @property
    def local_date(self) -> date:
        return self.started_at.date()

    @property
    def local_hour(self) -> int:
        return self.started_at.hour

    @property
    def is_focus(self) -> bool:
        return self.kind == "focus"

    @property
    def is_break(self) -> bool:
        return self.kind in BREAK_KINDS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Session:
        """Create from dictionary.

        Raises:
            ValueError: If the record is missing required fields or is malformed
        """
        if not isinstance(data, dict):
            raise ValueError("Session record must be a mapping")
        try:
            record = cls(
                id=str(data["id"]),
                date=str(data["date"]),
                kind=data["kind"],
                duration=max(0, int(data.get("duration", 0))),
                completed=bool(data.get("completed", False)),
                task_id=_optional_str(data.get("task_id")),
                mood=_rating(data.get("mood")),
                productivity=_rating(data.get("productivity")),
                completed_early=bool(data.get("completed_early", False)),
                time_saved=max(0, int(data.get("time_saved", 0))),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed session record: {e}") from e

        if record.kind not in SESSION_KINDS:
            raise ValueError(f"Unknown session kind: {record.kind!r}")
        # Validates the timestamp eagerly
        record.started_at
        return record

    @classmethod
    def create(
        cls,
        kind: SessionKind,
        duration: int,
        now: datetime,
        task_id: str | None = None,
        mood: int | None = None,
        productivity: int | None = None,
        completed_early: bool = False,
        time_saved: int = 0,
    ) -> Session:
        """Create a completed session record stamped at *now*."""
        return cls(
            id=str(uuid.uuid4()),
            date=now.isoformat(),
            kind=kind,
            duration=max(0, duration),
            completed=True,
            task_id=task_id,
            mood=mood,
            productivity=productivity,
            completed_early=completed_early,
            time_saved=max(0, time_saved),
        )


def completed_focus_sessions(sessions: list[Session]) -> list[Session]:
    """Completed focus sessions in log order."""
    return [s for s in sessions if s.is_focus and s.completed]


def recent_sessions(
    sessions: list[Session], limit: int = 20, kind: SessionKind | None = None
) -> list[Session]:
    """Most recent sessions first, optionally filtered by kind."""
    selected = [s for s in sessions if kind is None or s.kind == kind]
    selected.sort(key=lambda s: s.started_at, reverse=True)
    return selected[:limit]


def sessions_for_task(sessions: list[Session], task_id: str) -> list[Session]:
    """All sessions bound to *task_id*, most recent first."""
    return recent_sessions(
        [s for s in sessions if s.task_id == task_id], limit=len(sessions)
    )
