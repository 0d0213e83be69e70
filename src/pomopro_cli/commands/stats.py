"""Statistics and analytics commands for focus sessions."""

import typer
from rich.table import Table

from pomopro_cli.models.focus.analytics import PERIODS, FocusAnalytics
from pomopro_cli.services.storage_service import get_focus_repository
from pomopro_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pomopro_cli.utils.typer_helpers import SuggestingGroup
from pomopro_cli.utils.ui.formatters import (
    format_error,
    format_minutes,
    get_console,
    get_mood_emoji,
    get_progress_bar,
)

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Focus statistics and insights")

PERIOD_TITLES = {"day": "Today", "week": "Last 7 Days", "month": "Last Month"}


@app.command("show")
@command_wrapper
def show_stats(
    period: str = typer.Option("week", "--period", "-p", help="day, week or month"),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the statistics dashboard for a period."""
    if period not in PERIODS:
        format_error(f"Invalid period. Must be one of: {', '.join(PERIODS)}")
        raise typer.Exit(ERROR_INVALID_ARGS)

    stats = FocusAnalytics(get_focus_repository()).get_summary(period)

    if json_opt:
        console.print_json(data=stats)
        return

    console.print(f"\n[bold cyan]🍅 Focus Statistics - {PERIOD_TITLES[period]}[/bold cyan]\n")

    console.print(f"Sessions: [bold]{stats['total_sessions']}[/bold]")
    console.print(f"Completion Rate: [bold]{stats['completion_rate']:.0f}%[/bold]")
    console.print(f"Focus Time: [bold]{format_minutes(stats['total_focus_time'])}[/bold]")
    console.print(f"Break Time: {format_minutes(stats['total_break_time'])}")
    if stats["average_mood"]:
        mood = stats["average_mood"]
        console.print(f"Average Mood: {get_mood_emoji(mood)} {mood:.1f}/5")
    if stats["average_productivity"]:
        console.print(f"Average Productivity: {stats['average_productivity']:.1f}/5")

    streak = stats["streak"]
    console.print(
        f"Streak: [bold]{streak['current']}[/bold] days (best {streak['best']})"
    )

    if stats["daily_data"]:
        table = Table(title="Daily Activity", show_header=True)
        table.add_column("Date", style="cyan")
        table.add_column("Sessions", justify="right")
        table.add_column("Focus", justify="right")
        table.add_column("Mood", justify="center")
        for day in stats["daily_data"]:
            table.add_row(
                day["date"],
                str(day["sessions"]),
                format_minutes(day["focus_time"]),
                get_mood_emoji(day["mood"]) if day["mood"] else "—",
            )
        console.print()
        console.print(table)

    console.print("\n[bold]By Type:[/bold]")
    for entry in stats["type_distribution"]:
        console.print(f"  {entry['name']}: {entry['value']}")

    if stats["hourly_data"]:
        peak = max(h["sessions"] for h in stats["hourly_data"])
        console.print("\n[bold]By Hour:[/bold]")
        for entry in stats["hourly_data"]:
            bar = get_progress_bar(entry["sessions"] / peak * 100)
            console.print(f"  {entry['hour']:02d}:00 {bar} {entry['sessions']}")

    if stats["task_progress"]:
        console.print("\n[bold]Tasks:[/bold]")
        for task in stats["task_progress"]:
            pct = task["completed"] / task["total"] * 100 if task["total"] else 0
            console.print(
                f"  {task['name']:<23} {get_progress_bar(pct)} {task['completed']}/{task['total']}"
            )
    console.print()


@app.command("streak")
@command_wrapper
def show_streak() -> None:
    """Show the current and best focus streak."""
    streak = FocusAnalytics(get_focus_repository()).get_streak()
    if streak["current"] == 0:
        console.print("[yellow]No active streak. Complete a focus session today![/yellow]")
    else:
        console.print(f"🔥 Current streak: [bold]{streak['current']}[/bold] days")
    console.print(f"🏆 Best streak (last 30 days): [bold]{streak['best']}[/bold] days")


@app.command("insights")
@command_wrapper
def show_insights() -> None:
    """Show personal insights from completed focus sessions."""
    insights = FocusAnalytics(get_focus_repository()).get_insights()
    if not insights:
        console.print(
            "[yellow]Complete some pomodoros to see personalised insights.[/yellow]"
        )
        return

    console.print("\n[bold cyan]💡 Insights[/bold cyan]\n")
    for insight in insights:
        console.print(f"{insight['icon']} [bold]{insight['title']}[/bold]")
        console.print(f"   {insight['description']}")
    console.print()
