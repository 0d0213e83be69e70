"""Pomodoro timer commands for PomoPro CLI."""

import sys
from typing import Optional

import typer
from rich.table import Table

from pomopro_cli.config import get_config_manager
from pomopro_cli.models.focus.analytics import FocusAnalytics
from pomopro_cli.models.focus.cycling import get_emoji, get_title
from pomopro_cli.models.focus.state import SESSION_KINDS
from pomopro_cli.models.focus.ui import TimerDisplay, show_status_panel
from pomopro_cli.services.storage_service import get_focus_repository
from pomopro_cli.services.timer_service import get_focus_timer
from pomopro_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pomopro_cli.utils.typer_helpers import SuggestingGroup
from pomopro_cli.utils.ui.formatters import (
    format_error,
    format_info,
    format_success,
    format_warning,
    get_console,
)

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Pomodoro timer for focus sessions")


@app.command("start")
@command_wrapper
def start_timer(
    task_id: Optional[str] = typer.Option(
        None, "--task-id", help="Task to work on during the focus session"
    ),
) -> None:
    """Start (or resume) the timer and show the live countdown."""
    timer = get_focus_timer()
    if task_id:
        timer.bind_task(task_id)
    timer.start()

    if not sys.stdin.isatty():
        format_warning("No terminal input, stopping after this session")
    TimerDisplay(console).run(
        timer, tick_interval=get_config_manager().config.timer.tick_interval
    )

    if timer.state.status == "running":
        # The countdown stops with the process
        timer.pause()
    format_info(
        f"Timer stopped at {timer.state.remaining // 60:02d}:{timer.state.remaining % 60:02d}"
    )


@app.command("status")
@command_wrapper
def timer_status() -> None:
    """Show the last recorded timer state."""
    repository = get_focus_repository()
    snapshot = repository.load_snapshot()
    title = None
    if snapshot.current_task:
        title = next(
            (t.title for t in repository.load_tasks() if t.id == snapshot.current_task),
            None,
        )
    show_status_panel(snapshot, repository.load_settings(), title, console)


@app.command("reset")
@command_wrapper
def reset_timer() -> None:
    """Reset to an idle focus session and clear the cycle."""
    get_focus_timer().reset()
    format_success("Timer reset")


@app.command("bind")
@command_wrapper
def bind_task(
    task_id: Optional[str] = typer.Argument(
        None, help="Task ID to bind (omit to unbind)"
    ),
) -> None:
    """Bind a task to the next focus session."""
    get_focus_timer().bind_task(task_id)
    if task_id:
        format_success(f"Next focus session is bound to task {task_id}")
    else:
        format_success("Task unbound")


@app.command("history")
@command_wrapper
def timer_history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of sessions to show"),
    kind: Optional[str] = typer.Option(
        None, "--type", help="Filter by type: focus, short-break or long-break"
    ),
) -> None:
    """Show recent sessions."""
    if kind is not None and kind not in SESSION_KINDS:
        format_error(f"Invalid type. Must be one of: {', '.join(SESSION_KINDS)}")
        raise typer.Exit(ERROR_INVALID_ARGS)

    sessions = FocusAnalytics(get_focus_repository()).get_recent_sessions(limit, kind)
    if not sessions:
        console.print("[yellow]No sessions found[/yellow]")
        return

    table = Table(title=f"Recent Sessions ({len(sessions)})", show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Duration", justify="right")
    table.add_column("Task")
    table.add_column("Mood", justify="center")
    table.add_column("Status", justify="center")

    for session in sessions:
        status = "[yellow]⚡ early[/yellow]" if session.completed_early else "[green]✓[/green]"
        table.add_row(
            session.started_at.strftime("%Y-%m-%d %H:%M"),
            f"{get_emoji(session.kind)} {get_title(session.kind)}",
            f"{session.duration // 60}m {session.duration % 60:02d}s",
            session.task_id or "—",
            str(session.mood) if session.mood else "—",
            status,
        )

    console.print(table)
