"""Gamification and achievements system for focus sessions."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pomopro_cli.utils.logger import get_logger

from .history import Session, completed_focus_sessions
from .settings import TimerSettings

if TYPE_CHECKING:
    from pomopro_cli.repositories.focus_repository import FocusRepository
    from pomopro_cli.services.notification_service import Notifier


@dataclass(frozen=True)
class Achievement:
    """Represents an achievement badge and the user's standing on it."""

    id: str
    title: str
    description: str
    icon: str
    target: int
    progress: int = 0
    unlocked: bool = False
    unlocked_at: str | None = None

    @property
    def percent(self) -> float:
        if self.target <= 0:
            return 100.0
        return min(self.progress / self.target * 100, 100.0)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Achievement:
        """Create from dictionary.

        Display metadata always comes from the catalog; only the user's
        standing (progress, unlocked, unlocked_at) is taken from *data*.
        """
        if not isinstance(data, dict) or data.get("id") not in CATALOG:
            raise ValueError(f"Unknown achievement record: {data!r}")
        base = CATALOG[data["id"]]
        progress = data.get("progress", 0)
        unlocked_at = data.get("unlocked_at")
        return replace(
            base,
            progress=progress if isinstance(progress, int) and progress >= 0 else 0,
            unlocked=bool(data.get("unlocked", False)),
            unlocked_at=unlocked_at if isinstance(unlocked_at, str) else None,
        )


# Define all available achievements
ACHIEVEMENTS = [
    Achievement(
        "first-pomodoro",
        "First Step",
        "Complete your first pomodoro",
        "🍅",
        target=1,
    ),
    Achievement(
        "daily-goal",
        "Daily Goal",
        "Reach your daily pomodoro goal",
        "🎯",
        target=1,
    ),
    Achievement(
        "week-streak",
        "Consistent Week",
        "Complete at least 1 pomodoro a day for 7 days in a row",
        "🔥",
        target=7,
    ),
    Achievement(
        "century",
        "Centurion",
        "Complete 100 pomodoros",
        "💯",
        target=100,
    ),
    Achievement(
        "early-bird",
        "Early Bird",
        "Complete a pomodoro before 8 AM",
        "🌅",
        target=1,
    ),
    Achievement(
        "night-owl",
        "Night Owl",
        "Complete a pomodoro after 10 PM",
        "🦉",
        target=1,
    ),
    Achievement(
        "efficient",
        "Efficient",
        "Finish an activity before the time runs out",
        "⚡",
        target=1,
    ),
]

CATALOG: dict[str, Achievement] = {a.id: a for a in ACHIEVEMENTS}

EARLY_BIRD_HOUR = 8
NIGHT_OWL_HOUR = 22


def compute_progress(
    sessions: list[Session], settings: TimerSettings, now: datetime
) -> dict[str, int]:
    """Current progress of every achievement, recomputed from the whole log."""
    focus = completed_focus_sessions(sessions)
    today = now.astimezone().date()
    today_count = sum(1 for s in focus if s.local_date == today)

    return {
        "first-pomodoro": 1 if focus else 0,
        "daily-goal": 1 if today_count >= settings.daily_goal else 0,
        # Single-day rule; the multi-day streak lives in analytics.get_streak
        "week-streak": 1 if today_count > 0 else 0,
        "century": len(focus),
        "early-bird": 1 if any(s.local_hour < EARLY_BIRD_HOUR for s in focus) else 0,
        "night-owl": 1 if any(s.local_hour >= NIGHT_OWL_HOUR for s in focus) else 0,
        "efficient": 1 if any(s.completed_early for s in sessions) else 0,
    }


def evaluate(
    sessions: list[Session],
    settings: TimerSettings,
    previous: list[Achievement],
    now: datetime,
) -> list[Achievement]:
    """Re-evaluate all achievements against the session log.

    Unlocking is sticky: an achievement stays unlocked once its progress has
    reached the target, and ``unlocked_at`` keeps the instant of the first
    unlock. Achievements absent from *previous* start from catalog defaults.
    """
    progress = compute_progress(sessions, settings, now)
    known = {a.id: a for a in previous}
    stamp = now.isoformat()

    result = []
    for base in ACHIEVEMENTS:
        old = known.get(base.id, base)
        value = progress[base.id]
        unlocked = old.unlocked or value >= base.target
        unlocked_at = old.unlocked_at
        if unlocked and not old.unlocked:
            unlocked_at = stamp
        result.append(
            replace(old, progress=value, unlocked=unlocked, unlocked_at=unlocked_at)
        )
    return result


def newly_unlocked(
    previous: list[Achievement], current: list[Achievement]
) -> list[Achievement]:
    """Achievements unlocked in *current* that were locked in *previous*."""
    before = {a.id for a in previous if a.unlocked}
    return [a for a in current if a.unlocked and a.id not in before]


class AchievementTracker:
    """Tracks and awards achievements based on focus session data."""

    def __init__(self, repository: FocusRepository, notifier: Notifier | None = None):
        self.repository = repository
        self.notifier = notifier

    def check_achievements(self, now: datetime | None = None) -> list[Achievement]:
        """Check for newly earned achievements.

        Evaluates the whole log, persists the result and sends one
        notification per newly unlocked achievement.

        Raises:
            StorageUnavailableError: If the achievements could not be saved
        """
        now = now or datetime.now().astimezone()
        previous = self.repository.load_achievements()
        current = evaluate(
            self.repository.load_sessions(),
            self.repository.load_settings(),
            previous,
            now,
        )
        earned = newly_unlocked(previous, current)
        self.repository.save_achievements(current)

        for achievement in earned:
            get_logger().info("Achievement unlocked: %s", achievement.id)
            self._announce(achievement)
        return earned

    def get_progress(self) -> dict[str, float]:
        """Get progress percentage towards each achievement."""
        return {a.id: a.percent for a in self.repository.load_achievements()}

    def _announce(self, achievement: Achievement) -> None:
        if self.notifier is None or not self.notifier.has_permission:
            return
        self.notifier.notify(
            "🏆 Achievement Unlocked!",
            f"{achievement.icon} {achievement.title}: {achievement.description}",
        )
