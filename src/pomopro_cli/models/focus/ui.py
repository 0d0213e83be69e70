"""Live timer UI for ``pomopro timer start``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from pomopro_cli.utils.ui.formatters import get_console

from .cycling import cycle_position, get_emoji, get_progress_dots, get_title
from .exceptions import InvalidTransitionError
from .history import Session
from .lifecycle import LifecycleState
from .settings import TimerSettings
from .state import TimerSnapshot

if TYPE_CHECKING:
    from pomopro_cli.services.timer_service import FocusTimer

BAR_WIDTH = 40
RATING_KEYS = ("1", "2", "3", "4", "5")


class TimerDisplay:
    """Manages the live timer display."""

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()
        self.message: str | None = None

    def create_layout(
        self,
        state: LifecycleState,
        settings: TimerSettings,
        task_title: str | None = None,
        auto_start_pending: bool = False,
    ) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        if state.status == "paused":
            header, color = "⏸️  PAUSED", "yellow"
        else:
            header = f"{get_emoji(state.kind)}  {get_title(state.kind)}"
            color = "cyan" if state.kind == "focus" else "green"
        layout["header"].update(
            Align.center(Text(header, style=f"bold {color}"), vertical="middle")
        )

        body = self._create_body(state, settings, task_title, auto_start_pending)
        layout["body"].update(Align.center(body, vertical="middle"))

        layout["footer"].update(
            Align.center(self._create_footer(state), vertical="middle")
        )
        return layout

    def _create_body(
        self,
        state: LifecycleState,
        settings: TimerSettings,
        task_title: str | None,
        auto_start_pending: bool,
    ) -> Group:
        components = []

        if task_title and state.kind == "focus":
            components.append(Text(task_title[:50], style="bold white", justify="center"))
            components.append(Text(""))

        remaining = state.remaining
        if state.status == "paused":
            timer_color = "yellow"
        elif remaining < 60:
            timer_color = "red"
        else:
            timer_color = "cyan"
        components.append(
            Text(
                f"{remaining // 60:02d}:{remaining % 60:02d}",
                style=f"bold {timer_color}",
                justify="center",
            )
        )
        components.append(Text(""))

        pct = min(100, int(state.progress))
        filled = int(BAR_WIDTH * pct / 100)
        components.append(
            Text("▓" * filled + "░" * (BAR_WIDTH - filled) + f"  {pct}%", style="dim", justify="center")
        )

        position = cycle_position(state.cycle_count, settings.long_break_interval)
        components.append(
            Text(
                f"{get_progress_dots(state.cycle_count, settings)}   "
                f"pomodoro {position}/{settings.long_break_interval}",
                style="dim",
                justify="center",
            )
        )

        if auto_start_pending:
            components.append(Text("Starting automatically...", style="green", justify="center"))
        if self.message:
            components.append(Text(""))
            components.append(Text(self.message, style="green", justify="center"))

        return Group(*components)

    def _create_footer(self, state: LifecycleState) -> Text:
        """Create footer with keyboard hints."""
        if state.status == "running":
            hints = "'p' pause  •  'c' complete  •  'r' reset  •  'q' quit"
        elif state.status == "paused":
            hints = "'p' resume  •  'c' complete  •  1-5 rate  •  'r' reset  •  'q' quit"
        else:
            hints = "'p' start  •  'r' reset  •  'q' quit"
        return Text(hints, style="dim", justify="center")

    def handle_key(self, timer: FocusTimer, key: str | None) -> bool:
        """Apply a keypress to *timer*. Returns True when the user quits."""
        if key == "q":
            return True
        try:
            if key == "p":
                timer.toggle()
            elif key == "c":
                session = timer.complete_early()
                self.message = describe_session(session)
            elif key == "r":
                timer.reset()
                self.message = None
            elif key in RATING_KEYS:
                # First rating is mood, the next ones productivity
                if timer.state.mood is None:
                    timer.give_feedback(mood=int(key))
                else:
                    timer.give_feedback(productivity=int(key))
        except InvalidTransitionError as e:
            self.message = str(e)
        return False

    def run(self, timer: FocusTimer, tick_interval: float = 1.0) -> None:
        """Run the live display until the user quits.

        When stdin is not a terminal the display ends once a session finishes.
        """
        from .keyboard import KeyboardHandler

        quit_requested = False
        session_finished = False

        def render() -> Layout:
            title = None
            if timer.state.task_id:
                title = next(
                    (t.title for t in timer.tasks.list_tasks() if t.id == timer.state.task_id),
                    None,
                )
            return self.create_layout(
                timer.state, timer.settings, title, timer.auto_start_pending
            )

        with KeyboardHandler() as keyboard, Live(
            render(), console=self.console, refresh_per_second=4
        ) as live:

            def on_tick() -> None:
                nonlocal session_finished
                if timer.last_session is not None:
                    session_finished = True
                    self.message = describe_session(timer.last_session)
                    timer.last_session = None
                live.update(render())

            def should_stop() -> bool:
                nonlocal quit_requested
                # No quit key without a terminal
                if not keyboard.active and session_finished:
                    return True
                quit_requested = quit_requested or self.handle_key(
                    timer, keyboard.get_key()
                )
                live.update(render())
                return quit_requested

            timer.run(on_tick=on_tick, should_stop=should_stop, tick_interval=tick_interval)


def describe_session(session: Session) -> str:
    """One-line summary of a finished session."""
    minutes = session.duration // 60
    if session.completed_early:
        saved = session.time_saved
        return f"✓ {get_title(session.kind)} finished early after {minutes}m, saved {saved // 60:02d}:{saved % 60:02d}"
    return f"✓ {get_title(session.kind)} complete ({minutes}m)"


def show_status_panel(
    snapshot: TimerSnapshot,
    settings: TimerSettings,
    task_title: str | None = None,
    console: Console | None = None,
) -> None:
    """Print the last recorded timer state."""
    console = console or get_console()
    kind = snapshot.current_session
    left = snapshot.time_left
    lines = [
        f"[bold]{get_emoji(kind)} {get_title(kind)}[/bold]  ({snapshot.timer_state})",
        f"Remaining: {left // 60:02d}:{left % 60:02d}",
        f"Cycle: {get_progress_dots(snapshot.cycle_count, settings)}  "
        f"({snapshot.cycle_count} completed)",
        f"Task: {task_title or 'none'}",
    ]
    console.print(Panel("\n".join(lines), title="Timer", border_style="cyan", expand=False))
