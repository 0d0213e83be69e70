"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real filesystem and clock.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from pomopro_cli.models.focus.history import Session
from pomopro_cli.models.focus.settings import TimerSettings
from pomopro_cli.repositories.focus_repository import FocusRepository
from pomopro_cli.repositories.store import MemoryStore
from pomopro_cli.services.notification_service import Notifier


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send application logs to a temporary directory."""
    import pomopro_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("pomopro_cli").handlers.clear()
    with patch(
        "pomopro_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")
    ):
        yield
    logger_mod._logger = None
    logging.getLogger("pomopro_cli").handlers.clear()


@pytest.fixture()
def app_dirs(tmp_path, monkeypatch):
    """Point config and data directories at *tmp_path* for CLI tests.

    Resets the global config manager so each test starts from defaults.
    """
    import pomopro_cli.config as config_mod

    monkeypatch.setattr(
        config_mod, "user_config_dir", lambda *a, **k: str(tmp_path / "config")
    )
    monkeypatch.setattr(
        config_mod, "user_data_dir", lambda *a, **k: str(tmp_path / "data")
    )
    monkeypatch.setattr(config_mod, "_config_manager", None)
    yield tmp_path


# ---------------------------------------------------------------------------
# Domain helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def now() -> datetime:
    """A fixed local instant: Tuesday 2026-06-16 14:00."""
    return datetime(2026, 6, 16, 14, 0).astimezone()


@pytest.fixture()
def settings() -> TimerSettings:
    return TimerSettings()


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def repository(store) -> FocusRepository:
    return FocusRepository(store)


@pytest.fixture()
def make_session(now):
    """Factory for completed sessions relative to the fixed *now*."""

    def _make(
        kind: str = "focus",
        duration: int = 1500,
        days_ago: int = 0,
        hour: int | None = None,
        **kwargs,
    ) -> Session:
        when = now - timedelta(days=days_ago)
        if hour is not None:
            when = when.replace(hour=hour)
        return Session.create(kind=kind, duration=duration, now=when, **kwargs)

    return _make


class RecordingNotifier(Notifier):
    """Notifier that records every call for assertions."""

    def __init__(self, granted: bool = True):
        self.granted = granted
        self.permission_requests = 0
        self.notifications: list[tuple[str, str]] = []
        self.sounds = 0

    @property
    def has_permission(self) -> bool:
        return self.granted

    def request_permission(self) -> bool:
        self.permission_requests += 1
        return self.granted

    def notify(self, title: str, body: str) -> None:
        if self.granted:
            self.notifications.append((title, body))

    def play_sound(self) -> None:
        self.sounds += 1


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


class FailingStore(MemoryStore):
    """Store whose writes always fail."""

    def write(self, key, value):
        from pomopro_cli.models.focus.exceptions import StorageUnavailableError

        raise StorageUnavailableError(f"disk full while writing {key}")


@pytest.fixture()
def failing_store() -> FailingStore:
    return FailingStore()
