"""Session lifecycle state machine.

Every transition is a pure function: it takes the current ``LifecycleState``
(plus settings and the wall-clock instant where needed) and returns a new
state. Completions additionally return the ``Session`` record to append to the
log. Side effects (persistence, notifications, auto-start scheduling) are the
caller's job; see ``pomopro_cli.services.timer_service``.

    idle --start--> running --pause--> paused --start--> running
    running --tick, remaining == 0--> idle   (natural completion, advance)
    running|paused --complete_early--> idle  (focus only, advance)
    any --reset--> idle                      (nothing logged)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from .clock import SessionClock
from .cycling import next_kind
from .exceptions import InvalidTransitionError
from .history import Session
from .settings import TimerSettings
from .state import SessionKind, TimerSnapshot, TimerStatus

RATING_RANGE = range(1, 6)


@dataclass(frozen=True)
class LifecycleState:
    """Complete state of the timer at one instant."""

    status: TimerStatus = "idle"
    kind: SessionKind = "focus"
    clock: SessionClock = field(default_factory=lambda: SessionClock(25 * 60))
    planned_duration: int = 25 * 60
    cycle_count: int = 0
    task_id: str | None = None
    mood: int | None = None
    productivity: int | None = None
    started_at: str | None = None

    @property
    def remaining(self) -> int:
        return self.clock.remaining

    @property
    def elapsed(self) -> int:
        return max(0, self.planned_duration - self.clock.remaining)

    @property
    def progress(self) -> float:
        """Percentage of the planned duration already elapsed."""
        if self.planned_duration <= 0:
            return 0.0
        return self.elapsed / self.planned_duration * 100

    def to_snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            timer_state=self.status,
            current_session=self.kind,
            time_left=self.clock.remaining,
            cycle_count=self.cycle_count,
            current_task=self.task_id,
        )


def initial_state(settings: TimerSettings) -> LifecycleState:
    """Idle focus session with the configured focus duration."""
    seconds = settings.duration_for("focus")
    return LifecycleState(clock=SessionClock(seconds), planned_duration=seconds)


def restore_state(snapshot: TimerSnapshot, settings: TimerSettings) -> LifecycleState:
    """Rebuild state from a persisted snapshot.

    Running and paused timers come back idle with a full duration for their
    kind; wall-clock time spent while the process was gone is not replayed.
    """
    seconds = settings.duration_for(snapshot.current_session)
    return LifecycleState(
        kind=snapshot.current_session,
        clock=SessionClock(seconds),
        planned_duration=seconds,
        cycle_count=snapshot.cycle_count,
        task_id=snapshot.current_task,
    )


def apply_start(
    state: LifecycleState, settings: TimerSettings, now: datetime
) -> LifecycleState:
    """Start a fresh session from idle, or resume a paused one."""
    if state.status == "running":
        raise InvalidTransitionError("Timer is already running")

    if state.status == "paused":
        return replace(state, status="running", clock=state.clock.start())

    planned = settings.duration_for(state.kind)
    return replace(
        state,
        status="running",
        clock=SessionClock(remaining=planned, ticking=True),
        planned_duration=planned,
        started_at=now.isoformat(),
    )


def apply_pause(state: LifecycleState) -> LifecycleState:
    if state.status != "running":
        raise InvalidTransitionError("Can only pause a running session")
    return replace(state, status="paused", clock=state.clock.pause())


def apply_tick(
    state: LifecycleState, settings: TimerSettings, now: datetime
) -> tuple[LifecycleState, Session | None]:
    """Deliver one clock tick.

    Returns the new state and, when the countdown reached zero on this tick,
    the naturally completed session. Ticks outside ``running`` are ignored, so
    a late duplicate tick after completion cannot complete twice.
    """
    if state.status != "running":
        return state, None

    clock = state.clock.tick()
    ticked = replace(state, clock=clock)
    if not clock.expired:
        return ticked, None

    return _complete(ticked, settings, now, early=False)


def apply_complete_early(
    state: LifecycleState, settings: TimerSettings, now: datetime
) -> tuple[LifecycleState, Session]:
    """Finish the current focus session before the countdown ends."""
    if state.kind != "focus":
        raise InvalidTransitionError("Only focus sessions can be completed early")
    if state.status not in ("running", "paused"):
        raise InvalidTransitionError("No focus session in progress")
    return _complete(state, settings, now, early=True)


def apply_reset(state: LifecycleState, settings: TimerSettings) -> LifecycleState:
    """Discard progress: back to idle focus, cycle 0, no task, no feedback."""
    return initial_state(settings)


def apply_settings(state: LifecycleState, settings: TimerSettings) -> LifecycleState:
    """Follow edited settings while idle; a started session keeps its target."""
    if state.status != "idle":
        return state
    seconds = settings.duration_for(state.kind)
    return replace(state, clock=SessionClock(seconds), planned_duration=seconds)


def apply_bind_task(state: LifecycleState, task_id: str | None) -> LifecycleState:
    """Bind (or with ``None`` unbind) the task of the upcoming focus session."""
    if state.status != "idle":
        raise InvalidTransitionError("A task can only be chosen while the timer is idle")
    if state.kind != "focus":
        raise InvalidTransitionError("Tasks can only be bound to focus sessions")
    return replace(state, task_id=task_id)


def apply_feedback(
    state: LifecycleState,
    mood: int | None = None,
    productivity: int | None = None,
) -> LifecycleState:
    """Attach mood and/or productivity ratings to the paused focus session."""
    if state.status != "paused" or state.kind != "focus":
        raise InvalidTransitionError(
            "Feedback can only be given while a focus session is paused"
        )
    for name, value in (("mood", mood), ("productivity", productivity)):
        if value is not None and value not in RATING_RANGE:
            raise ValueError(f"{name} must be between 1 and 5, got {value}")

    return replace(
        state,
        mood=mood if mood is not None else state.mood,
        productivity=productivity if productivity is not None else state.productivity,
    )


def advance(state: LifecycleState, settings: TimerSettings) -> LifecycleState:
    """Move to the next session kind, idle, with per-session fields cleared."""
    kind, cycle_count = next_kind(
        state.kind, state.cycle_count, settings.long_break_interval
    )
    seconds = settings.duration_for(kind)
    return replace(
        state,
        status="idle",
        kind=kind,
        cycle_count=cycle_count,
        clock=SessionClock(seconds),
        planned_duration=seconds,
        mood=None,
        productivity=None,
        started_at=None,
    )


def _complete(
    state: LifecycleState, settings: TimerSettings, now: datetime, early: bool
) -> tuple[LifecycleState, Session]:
    remaining = state.clock.remaining
    if early:
        duration, saved = state.planned_duration - remaining, remaining
    else:
        duration, saved = state.planned_duration, 0

    session = Session.create(
        kind=state.kind,
        duration=duration,
        now=now,
        task_id=state.task_id,
        mood=state.mood,
        productivity=state.productivity,
        completed_early=early,
        time_saved=saved,
    )
    return advance(state, settings), session
