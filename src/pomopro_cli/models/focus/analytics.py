"""Analytics engine for focus sessions."""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any, Literal

from dateutil.relativedelta import relativedelta

from pomopro_cli.models.task import Task

from .history import Session, completed_focus_sessions, recent_sessions

if TYPE_CHECKING:
    from pomopro_cli.repositories.focus_repository import FocusRepository

Period = Literal["day", "week", "month"]
PERIODS: tuple[str, ...] = ("day", "week", "month")

TYPE_COLORS = [
    ("focus", "Focus", "#000000"),
    ("short-break", "Short Break", "#22c55e"),
    ("long-break", "Long Break", "#3b82f6"),
]

STREAK_WINDOW_DAYS = 30
TASK_PROGRESS_LIMIT = 5
TASK_NAME_WIDTH = 20


def to_minutes(seconds: int) -> int:
    """Whole minutes, rounding half up."""
    return int(seconds / 60 + 0.5)


def period_start(period: Period, now: datetime) -> datetime:
    """Earliest instant included in *period* ending at *now*."""
    if period == "day":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "week":
        return now - timedelta(days=7)
    if period == "month":
        return now - relativedelta(months=1)
    raise ValueError(f"Unknown period: {period!r}")


def filter_by_period(
    sessions: list[Session], period: Period, now: datetime
) -> list[Session]:
    """Sessions that started within *period* before *now* (inclusive)."""
    now = now.astimezone()
    start = period_start(period, now)
    return [s for s in sessions if start <= s.started_at <= now]


def _mean(values: list[int]) -> float:
    return sum(values) / len(values) if values else 0


def get_streak(sessions: list[Session], now: datetime) -> dict[str, int]:
    """
    Calculate current and best focus streaks.

    A streak is consecutive days with at least one completed focus session.
    The current streak counts back from today; the best streak is the longest
    run inside the last 30 days.

    Returns:
        Dict with current and best
    """
    days = {s.local_date for s in completed_focus_sessions(sessions)}
    if not days:
        return {"current": 0, "best": 0}

    today = now.astimezone().date()

    current = 0
    day = today
    while day in days:
        current += 1
        day -= timedelta(days=1)

    best = run = 0
    for offset in range(STREAK_WINDOW_DAYS):
        if today - timedelta(days=offset) in days:
            run += 1
            best = max(best, run)
        else:
            run = 0

    return {"current": current, "best": best}


def _daily_data(sessions: list[Session]) -> list[dict[str, Any]]:
    groups: dict[date, dict[str, Any]] = {}
    for session in sessions:
        group = groups.setdefault(
            session.local_date, {"sessions": 0, "focus_seconds": 0, "moods": []}
        )
        group["sessions"] += 1
        if session.is_focus and session.completed:
            group["focus_seconds"] += session.duration
        if session.mood:
            group["moods"].append(session.mood)

    return [
        {
            "date": day.isoformat(),
            "sessions": group["sessions"],
            "focus_time": to_minutes(group["focus_seconds"]),
            "mood": _mean(group["moods"]),
        }
        for day, group in groups.items()
    ]


def _task_progress(tasks: list[Task]) -> list[dict[str, Any]]:
    progress = []
    for task in tasks[:TASK_PROGRESS_LIMIT]:
        name = task.title
        if len(name) > TASK_NAME_WIDTH:
            name = name[:TASK_NAME_WIDTH] + "..."
        progress.append(
            {
                "name": name,
                "completed": task.completed_pomodoros,
                "total": task.estimated_pomodoros,
            }
        )
    return progress


def aggregate(
    sessions: list[Session],
    tasks: list[Task],
    period: Period,
    now: datetime,
) -> dict[str, Any]:
    """
    Compute dashboard statistics for *period*.

    Every figure except the streak is computed over the sessions inside the
    period window; the streak always looks at the full log.

    Args:
        sessions: Full session log
        tasks: Task list in display order
        period: "day", "week" or "month"
        now: Reference instant

    Returns:
        Dict with period metrics
    """
    window = filter_by_period(sessions, period, now)

    total = len(window)
    completed = [s for s in window if s.completed]
    focus_seconds = sum(s.duration for s in completed if s.is_focus)
    break_seconds = sum(s.duration for s in completed if s.is_break)

    by_kind = Counter(s.kind for s in completed)
    hours = Counter(s.local_hour for s in window)
    daily = _daily_data(window)

    return {
        "period": period,
        "total_sessions": total,
        "completion_rate": len(completed) / total * 100 if total else 0,
        "total_focus_time": to_minutes(focus_seconds),
        "total_break_time": to_minutes(break_seconds),
        "average_mood": _mean([s.mood for s in window if s.mood is not None]),
        "average_productivity": _mean(
            [s.productivity for s in window if s.productivity is not None]
        ),
        "daily_data": daily,
        "type_distribution": [
            {"name": name, "value": by_kind.get(kind, 0), "color": color}
            for kind, name, color in TYPE_COLORS
        ],
        "hourly_data": [
            {"hour": hour, "sessions": hours[hour]} for hour in range(24) if hours[hour]
        ],
        "task_progress": _task_progress(tasks),
        "mood_trend": [
            {"date": d["date"], "mood": d["mood"], "productivity": d["sessions"]}
            for d in daily
            if d["mood"] > 0
        ],
        "streak": get_streak(sessions, now),
    }


def get_insights(sessions: list[Session], now: datetime) -> list[dict[str, str]]:
    """Personal insights derived from completed focus sessions."""
    focus = completed_focus_sessions(sessions)
    if not focus:
        return []

    insights = []

    hours = Counter(s.local_hour for s in focus)
    best_hour = max(hours, key=lambda h: (hours[h], h))
    insights.append(
        {
            "icon": "🕐",
            "title": "Best Time",
            "description": f"You are most productive at {best_hour}h",
        }
    )

    average = sum(s.duration for s in focus) / len(focus)
    insights.append(
        {
            "icon": "⏱️",
            "title": "Average Duration",
            "description": f"Your sessions last {to_minutes(average)} minutes on average",
        }
    )

    streak = get_streak(sessions, now)["current"]
    if streak > 0:
        insights.append(
            {
                "icon": "🔥",
                "title": "Current Streak",
                "description": f"{streak} consecutive day{'s' if streak > 1 else ''}",
            }
        )

    early = [s for s in sessions if s.completed_early]
    if early:
        saved = to_minutes(sum(s.time_saved for s in early))
        insights.append(
            {
                "icon": "⚡",
                "title": "Efficiency",
                "description": f"You saved {saved} minutes by finishing tasks early",
            }
        )

    return insights


class FocusAnalytics:
    """Compute analytics from the persisted session log."""

    def __init__(self, repository: FocusRepository):
        self.repository = repository

    def get_summary(
        self, period: Period = "week", now: datetime | None = None
    ) -> dict[str, Any]:
        return aggregate(
            self.repository.load_sessions(),
            self.repository.load_tasks(),
            period,
            now or datetime.now().astimezone(),
        )

    def get_streak(self, now: datetime | None = None) -> dict[str, int]:
        return get_streak(
            self.repository.load_sessions(), now or datetime.now().astimezone()
        )

    def get_insights(self, now: datetime | None = None) -> list[dict[str, str]]:
        return get_insights(
            self.repository.load_sessions(), now or datetime.now().astimezone()
        )

    def get_recent_sessions(self, limit: int = 20, kind: str | None = None) -> list[Session]:
        return recent_sessions(self.repository.load_sessions(), limit=limit, kind=kind)
