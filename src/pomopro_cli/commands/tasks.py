"""Task commands: the work items focus sessions are bound to."""

import typer
from rich.table import Table

from pomopro_cli.models.task import Task
from pomopro_cli.services.storage_service import get_focus_repository
from pomopro_cli.services.task_service import TaskService
from pomopro_cli.utils.typer_helpers import SuggestingGroup
from pomopro_cli.utils.ui.formatters import format_success, get_console, get_progress_bar

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Task management commands")


def _service() -> TaskService:
    return TaskService(get_focus_repository())


@app.command("add")
@command_wrapper
def add_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    estimate: int = typer.Option(
        1, "--estimate", "-e", help="Estimated number of pomodoros"
    ),
) -> None:
    """Add a task."""
    task = _service().add_task(title, description, estimate)
    format_success(f"Task created: {task.title} (ID: {task.id})")


@app.command("list")
@command_wrapper
def list_tasks(
    show_all: bool = typer.Option(False, "--all", help="Include completed tasks"),
) -> None:
    """List tasks with their pomodoro progress."""
    tasks = _service().list_tasks(include_completed=show_all)
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(title=f"Tasks ({len(tasks)})", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Pomodoros")
    table.add_column("Status", justify="center")

    for task in tasks:
        pct = task.completed_pomodoros / task.estimated_pomodoros * 100
        table.add_row(
            task.id,
            task.title,
            f"{get_progress_bar(pct)} {task.completed_pomodoros}/{task.estimated_pomodoros}",
            _status_marker(task),
        )

    console.print(table)


def _status_marker(task: Task) -> str:
    if task.completed:
        return "[green]✓[/green]"
    if task.is_on_target:
        return "[cyan]◎[/cyan]"
    return "○"


@app.command("show")
@command_wrapper
def show_task(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Show a task and the sessions spent on it."""
    service = _service()
    task = service.get_task(task_id)
    sessions = service.task_sessions(task_id)

    console.print(f"[bold]{task.title}[/bold] {_status_marker(task)}")
    if task.description:
        console.print(task.description)
    console.print(
        f"Pomodoros: {task.completed_pomodoros}/{task.estimated_pomodoros}"
        + (" [cyan](estimate reached)[/cyan]" if task.is_on_target else "")
    )
    if not sessions:
        console.print("[yellow]No sessions recorded for this task[/yellow]")
        return

    table = Table(title=f"Sessions ({len(sessions)})", show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Duration", justify="right")
    table.add_column("Mood", justify="center")
    table.add_column("Productivity", justify="center")

    for session in sessions:
        table.add_row(
            session.started_at.strftime("%Y-%m-%d %H:%M"),
            f"{session.duration // 60}m {session.duration % 60:02d}s",
            str(session.mood) if session.mood else "—",
            str(session.productivity) if session.productivity else "—",
        )

    console.print(table)


@app.command("done")
@command_wrapper
def toggle_task(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Mark a task completed, or reopen a completed one."""
    task = _service().toggle_task(task_id)
    state = "completed" if task.completed else "reopened"
    format_success(f"Task {state}: {task.title}")


@app.command("delete")
@command_wrapper
def delete_task(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Delete a task."""
    _service().delete_task(task_id)
    format_success(f"Task deleted: {task_id}")
