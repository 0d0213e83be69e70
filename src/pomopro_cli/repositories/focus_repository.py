"""Typed access to the persisted pomodoro data.

``FocusRepository`` sits on top of any ``Store`` adapter and converts between
stored JSON values and domain objects. Reads substitute defaults for missing
or corrupt data and skip malformed records; writes propagate
``StorageUnavailableError``.
"""

from __future__ import annotations

from pydantic import ValidationError

from pomopro_cli.models.focus.achievements import ACHIEVEMENTS, Achievement
from pomopro_cli.models.focus.exceptions import CorruptValueError, StorageUnavailableError
from pomopro_cli.models.focus.history import Session
from pomopro_cli.models.focus.settings import TimerSettings
from pomopro_cli.models.focus.state import TimerSnapshot
from pomopro_cli.models.task import Task
from pomopro_cli.repositories.store import Store
from pomopro_cli.utils.logger import get_logger

SETTINGS_KEY = "settings"
SESSIONS_KEY = "sessions"
TIMER_STATE_KEY = "timer-state"
TASKS_KEY = "tasks"
ACHIEVEMENTS_KEY = "achievements"


class FocusRepository:
    """Repository for settings, the session log, tasks, achievements and
    the timer snapshot."""

    def __init__(self, store: Store):
        self.store = store

    # Settings

    def load_settings(self) -> TimerSettings:
        return TimerSettings.from_stored(self.store.read(SETTINGS_KEY, {}))

    def save_settings(self, settings: TimerSettings) -> None:
        self.store.write(SETTINGS_KEY, settings.model_dump())

    # Session log

    def load_sessions(self) -> list[Session]:
        """Load the session log in append order, skipping malformed records."""
        raw = self.store.read(SESSIONS_KEY, [])
        if not isinstance(raw, list):
            get_logger().warning("Session log is not a list, ignoring it")
            return []

        sessions = []
        for record in raw:
            try:
                sessions.append(Session.from_dict(record))
            except ValueError as e:
                get_logger().warning("Skipping malformed session: %s", e)
        return sessions

    def append_session(self, session: Session) -> None:
        """Append *session* to the log. Existing entries are kept verbatim.

        Raises:
            StorageUnavailableError: If the stored log is unreadable, in which
                case it is left untouched, or the write fails
        """
        try:
            raw = self.store.read(SESSIONS_KEY, [], strict=True)
        except CorruptValueError as e:
            raise StorageUnavailableError(f"Session log is unreadable: {e}") from e
        if not isinstance(raw, list):
            raise StorageUnavailableError("Session log is not a list")
        raw.append(session.to_dict())
        self.store.write(SESSIONS_KEY, raw)

    # Tasks

    def load_tasks(self) -> list[Task]:
        raw = self.store.read(TASKS_KEY, [])
        if not isinstance(raw, list):
            get_logger().warning("Task list is not a list, ignoring it")
            return []

        tasks = []
        for record in raw:
            try:
                tasks.append(Task.model_validate(record))
            except ValidationError as e:
                get_logger().warning("Skipping malformed task: %s", e)
        return tasks

    def save_tasks(self, tasks: list[Task]) -> None:
        self.store.write(TASKS_KEY, [t.model_dump(mode="json") for t in tasks])

    # Achievements

    def load_achievements(self) -> list[Achievement]:
        """Load achievements, filling in catalog defaults for missing ids."""
        raw = self.store.read(ACHIEVEMENTS_KEY, [])
        stored: dict[str, Achievement] = {}
        if isinstance(raw, list):
            for record in raw:
                try:
                    achievement = Achievement.from_dict(record)
                except ValueError as e:
                    get_logger().warning("Skipping achievement record: %s", e)
                    continue
                stored[achievement.id] = achievement
        return [stored.get(a.id, a) for a in ACHIEVEMENTS]

    def save_achievements(self, achievements: list[Achievement]) -> None:
        self.store.write(ACHIEVEMENTS_KEY, [a.to_dict() for a in achievements])

    # Timer snapshot

    def load_snapshot(self) -> TimerSnapshot:
        return TimerSnapshot.from_dict(self.store.read(TIMER_STATE_KEY, {}))

    def save_snapshot(self, snapshot: TimerSnapshot) -> None:
        self.store.write(TIMER_STATE_KEY, snapshot.to_dict())
