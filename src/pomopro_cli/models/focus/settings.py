"""Timer settings edited by the user.

Settings are user data (stored under the ``settings`` key), not application
configuration. Numeric input outside the accepted range is clamped and
unparseable input falls back to the field default, so editing settings never
fails.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .state import SessionKind

AMBIENT_SOUNDS: dict[str, str] = {
    "none": "None",
    "rain": "Rain",
    "forest": "Forest",
    "ocean": "Ocean",
    "cafe": "Cafe",
    "white-noise": "White Noise",
}

# field -> (default, minimum, maximum)
NUMERIC_BOUNDS: dict[str, tuple[int, int, int]] = {
    "focus_time": (25, 1, 60),
    "short_break_time": (5, 1, 30),
    "long_break_time": (15, 1, 60),
    "long_break_interval": (4, 2, 8),
    "daily_goal": (8, 1, 20),
}


def clamp_int(value: Any, default: int, minimum: int, maximum: int) -> int:
    """Coerce *value* to an int within ``[minimum, maximum]``.

    Empty, zero or non-numeric input yields *default*.
    """
    if isinstance(value, bool):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError):
        return default
    if number == 0:
        return default
    return max(minimum, min(maximum, number))


class TimerSettings(BaseModel):
    """Pomodoro durations, goals and automation flags."""

    focus_time: int = Field(default=25, description="Focus duration in minutes")
    short_break_time: int = Field(default=5, description="Short break in minutes")
    long_break_time: int = Field(default=15, description="Long break in minutes")
    long_break_interval: int = Field(
        default=4, description="Focus sessions before a long break"
    )
    daily_goal: int = Field(default=8, description="Focus sessions per day")
    sound_enabled: bool = Field(default=True)
    ambient_sound: str = Field(default="none")
    auto_start_breaks: bool = Field(default=False)
    auto_start_pomodoros: bool = Field(default=False)
    theme: str = Field(default="default")

    @field_validator(*NUMERIC_BOUNDS.keys(), mode="before")
    @classmethod
    def clamp_numeric(cls, v: Any, info) -> int:
        default, minimum, maximum = NUMERIC_BOUNDS[info.field_name]
        return clamp_int(v, default, minimum, maximum)

    @field_validator("ambient_sound", mode="before")
    @classmethod
    def known_ambient_sound(cls, v: Any) -> str:
        if isinstance(v, str) and v.strip().lower() in AMBIENT_SOUNDS:
            return v.strip().lower()
        return "none"

    @field_validator(
        "sound_enabled", "auto_start_breaks", "auto_start_pomodoros", mode="before"
    )
    @classmethod
    def parse_flag(cls, v: Any, info) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes", "on")
        if v is None:
            return cls.model_fields[info.field_name].default
        return bool(v)

    @field_validator("theme", mode="before")
    @classmethod
    def default_theme(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            return "default"
        return v.strip()

    def duration_for(self, kind: SessionKind) -> int:
        """Return the configured duration of *kind* in seconds."""
        if kind == "focus":
            return self.focus_time * 60
        if kind == "short-break":
            return self.short_break_time * 60
        return self.long_break_time * 60

    def should_auto_start(self, kind: SessionKind) -> bool:
        """Whether a session of *kind* starts on its own after an advance."""
        if kind == "focus":
            return self.auto_start_pomodoros
        return self.auto_start_breaks

    def updated(self, **changes: Any) -> TimerSettings:
        """Return a copy with *changes* applied through validation."""
        return TimerSettings(**{**self.model_dump(), **changes})

    @classmethod
    def from_stored(cls, data: Any) -> TimerSettings:
        """Build settings from a stored record, ignoring unknown keys."""
        if not isinstance(data, dict):
            return cls()
        known = {k: v for k, v in data.items() if k in cls.model_fields}
        return cls(**known)
