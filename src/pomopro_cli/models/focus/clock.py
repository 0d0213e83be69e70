"""Countdown clock for the active session."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SessionClock:
    """Single active countdown, advanced one unit per tick.

    The clock only counts. Whether ticks arrive, and how often, is up to the
    scheduler driving it.
    """

    remaining: int = 0
    ticking: bool = False

    @property
    def expired(self) -> bool:
        return self.remaining <= 0

    def start(self) -> SessionClock:
        return replace(self, ticking=True)

    def pause(self) -> SessionClock:
        return replace(self, ticking=False)

    def reset(self, seconds: int) -> SessionClock:
        """Load *seconds* and stop ticking."""
        return SessionClock(remaining=max(0, int(seconds)), ticking=False)

    def tick(self) -> SessionClock:
        """Count down one second; ignored while stopped or at zero."""
        if not self.ticking or self.remaining <= 0:
            return self
        return replace(self, remaining=self.remaining - 1)
