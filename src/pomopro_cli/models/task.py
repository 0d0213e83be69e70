"""Task data models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


class Task(BaseModel):
    """A unit of work that focus sessions can be bound to."""

    id: str
    title: str
    description: str = ""
    estimated_pomodoros: int = Field(default=1)
    completed_pomodoros: int = Field(default=0, ge=0)
    completed: bool = False
    created_at: datetime

    @field_validator("estimated_pomodoros", mode="before")
    @classmethod
    def at_least_one(cls, v: Any) -> int:
        try:
            return max(1, int(v))
        except (TypeError, ValueError):
            return 1

    @property
    def is_on_target(self) -> bool:
        """Whether the estimated number of pomodoros has been reached."""
        return self.completed_pomodoros >= self.estimated_pomodoros


def new_task_id(now: datetime, existing: set[str]) -> str:
    """Derive a unique id from the creation time in milliseconds."""
    candidate = int(now.timestamp() * 1000)
    while str(candidate) in existing:
        candidate += 1
    return str(candidate)
