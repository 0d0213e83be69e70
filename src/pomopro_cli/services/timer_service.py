"""Timer service - runs the session lifecycle and its side effects.

``FocusTimer`` holds the current lifecycle state and feeds it through the
pure transitions in ``pomopro_cli.models.focus.lifecycle``. When a session
completes it performs, in order: append the session to the log, credit the
bound task, re-evaluate achievements, play the sound, show the notification,
schedule the auto-start and persist the snapshot.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from pomopro_cli.config import ConfigManager, get_config_manager
from pomopro_cli.models.focus.achievements import AchievementTracker
from pomopro_cli.models.focus.exceptions import (
    InvalidTransitionError,
    StorageUnavailableError,
    TaskNotFoundError,
)
from pomopro_cli.models.focus.history import Session
from pomopro_cli.models.focus.lifecycle import (
    LifecycleState,
    apply_bind_task,
    apply_complete_early,
    apply_feedback,
    apply_pause,
    apply_reset,
    apply_settings,
    apply_start,
    apply_tick,
    restore_state,
)
from pomopro_cli.models.focus.scheduler import ScheduledCall, Scheduler
from pomopro_cli.models.focus.settings import TimerSettings
from pomopro_cli.repositories.focus_repository import FocusRepository
from pomopro_cli.services.notification_service import (
    ConsoleNotifier,
    Notifier,
    NullNotifier,
    completion_message,
)
from pomopro_cli.services.storage_service import get_focus_repository
from pomopro_cli.services.task_service import TaskService
from pomopro_cli.utils.logger import get_logger

DEFAULT_AUTO_START_DELAY = 2.0


def _local_now() -> datetime:
    return datetime.now().astimezone()


class FocusTimer:
    """Stateful pomodoro timer bound to a repository and a scheduler."""

    def __init__(
        self,
        repository: FocusRepository,
        scheduler: Scheduler | None = None,
        notifier: Notifier | None = None,
        auto_start_delay: float = DEFAULT_AUTO_START_DELAY,
        clock: Callable[[], datetime] = _local_now,
    ):
        self.repository = repository
        self.scheduler = scheduler or Scheduler()
        self.notifier = notifier or NullNotifier()
        self.auto_start_delay = auto_start_delay
        self.clock = clock

        self.tasks = TaskService(repository)
        self.achievements = AchievementTracker(repository, self.notifier)

        self.settings: TimerSettings = repository.load_settings()
        self.state: LifecycleState = restore_state(
            repository.load_snapshot(), self.settings
        )
        self.last_session: Session | None = None
        self._pending_start: ScheduledCall | None = None

    @property
    def auto_start_pending(self) -> bool:
        return self._pending_start is not None and not self._pending_start.cancelled

    # Commands

    def start(self) -> LifecycleState:
        """Start the current session, or resume it when paused."""
        if not self.notifier.has_permission:
            self.notifier.request_permission()
        self._cancel_auto_start()

        resuming = self.state.status == "paused"
        self.state = apply_start(self.state, self.settings, self.clock())
        get_logger().info(
            "%s %s session (%ss left)",
            "Resumed" if resuming else "Started",
            self.state.kind,
            self.state.remaining,
        )
        self._persist()
        return self.state

    def pause(self) -> LifecycleState:
        self.state = apply_pause(self.state)
        get_logger().info("Paused %s session", self.state.kind)
        self._persist()
        return self.state

    def toggle(self) -> LifecycleState:
        """Pause when running, otherwise start or resume."""
        if self.state.status == "running":
            return self.pause()
        return self.start()

    def tick(self) -> Session | None:
        """Deliver one clock tick; returns the session completed by it, if any."""
        self.state, session = apply_tick(self.state, self.settings, self.clock())
        if session is not None:
            self._on_complete(session)
        return session

    def complete_early(self) -> Session:
        """Finish the running or paused focus session now."""
        self.state, session = apply_complete_early(
            self.state, self.settings, self.clock()
        )
        self._on_complete(session)
        return session

    def reset(self) -> LifecycleState:
        """Back to an idle focus session; drops any pending auto-start."""
        self._cancel_auto_start()
        self.state = apply_reset(self.state, self.settings)
        get_logger().info("Timer reset")
        self._persist()
        return self.state

    def bind_task(self, task_id: str | None) -> LifecycleState:
        """Bind an open task to the upcoming focus session.

        Raises:
            TaskNotFoundError: If the task does not exist
            InvalidTransitionError: If the task is completed or the timer is busy
        """
        if task_id is not None:
            task = self.tasks.get_task(task_id)
            if task.completed:
                raise InvalidTransitionError(f"Task {task_id} is already completed")
        self.state = apply_bind_task(self.state, task_id)
        self._persist()
        return self.state

    def give_feedback(
        self, mood: int | None = None, productivity: int | None = None
    ) -> LifecycleState:
        self.state = apply_feedback(self.state, mood, productivity)
        return self.state

    def update_settings(self, **changes) -> TimerSettings:
        """Apply and save a settings edit.

        Raises:
            StorageUnavailableError: If the settings could not be saved
        """
        self.settings = self.settings.updated(**changes)
        self.repository.save_settings(self.settings)
        self.state = apply_settings(self.state, self.settings)
        self._persist()
        return self.settings

    def run(
        self,
        on_tick: Callable[[], None] | None = None,
        should_stop: Callable[[], bool] | None = None,
        tick_interval: float = 1.0,
    ) -> None:
        """Drive the timer in real time until *should_stop* returns true."""

        def _tick() -> None:
            self.tick()
            if on_tick:
                on_tick()

        self.scheduler.run_realtime(_tick, tick_interval, should_stop)

    # Completion side effects

    def _on_complete(self, session: Session) -> None:
        logger = get_logger()
        logger.info(
            "Completed %s session (%ss%s)",
            session.kind,
            session.duration,
            ", early" if session.completed_early else "",
        )
        self.last_session = session

        try:
            self.repository.append_session(session)
        except StorageUnavailableError:
            logger.error("Could not record session %s", session.id, exc_info=True)

        if session.is_focus and session.task_id:
            try:
                self.tasks.increment_pomodoros(session.task_id)
            except TaskNotFoundError:
                logger.warning("Bound task %s no longer exists", session.task_id)
            except StorageUnavailableError:
                logger.error("Could not update task %s", session.task_id, exc_info=True)

        try:
            self.achievements.check_achievements(self.clock())
        except StorageUnavailableError:
            logger.error("Could not save achievements", exc_info=True)

        if self.settings.sound_enabled:
            self.notifier.play_sound()
        self.notifier.notify(
            *completion_message(session.kind, session.completed_early, session.time_saved)
        )

        if self.settings.should_auto_start(self.state.kind):
            self._pending_start = self.scheduler.call_later(
                self.auto_start_delay, self._auto_start
            )

        self._persist()

    def _auto_start(self) -> None:
        self._pending_start = None
        if self.state.status == "idle":
            self.start()

    def _cancel_auto_start(self) -> None:
        if self._pending_start is not None:
            self._pending_start.cancel()
            self._pending_start = None

    def _persist(self) -> None:
        try:
            self.repository.save_snapshot(self.state.to_snapshot())
        except StorageUnavailableError:
            get_logger().error("Could not save timer state", exc_info=True)


def get_focus_timer(
    config_manager: ConfigManager | None = None,
    scheduler: Scheduler | None = None,
) -> FocusTimer:
    """Build a timer wired to the configured store and console notifications."""
    config_manager = config_manager or get_config_manager()
    config = config_manager.config
    return FocusTimer(
        get_focus_repository(config_manager),
        scheduler=scheduler,
        notifier=ConsoleNotifier(enabled=config.notifications.enabled),
        auto_start_delay=config.timer.auto_start_delay,
    )
