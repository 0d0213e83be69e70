"""Achievements and gamification commands."""

from datetime import datetime

import typer
from rich.panel import Panel

from pomopro_cli.models.focus.achievements import Achievement, AchievementTracker
from pomopro_cli.services.storage_service import get_focus_repository
from pomopro_cli.utils.typer_helpers import SuggestingGroup
from pomopro_cli.utils.ui.formatters import get_console, get_progress_bar

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Focus achievements and gamification")


def _celebrate(achievements: list[Achievement]) -> None:
    for achievement in achievements:
        console.print(
            Panel(
                f"[bold cyan]{achievement.icon} {achievement.title}[/bold cyan]\n"
                f"{achievement.description}",
                title="[bold green]🎉 Achievement Unlocked! 🎉[/bold green]",
                border_style="green",
            )
        )


def _unlocked_on(achievement: Achievement) -> str:
    if not achievement.unlocked_at:
        return ""
    day = datetime.fromisoformat(achievement.unlocked_at).strftime("%Y-%m-%d")
    return f" [dim](unlocked {day})[/dim]"


@app.command("list")
@command_wrapper
def list_achievements(
    show_all: bool = typer.Option(
        False, "--all", help="Show all achievements including locked ones"
    ),
) -> None:
    """Show unlocked achievements."""
    tracker = AchievementTracker(get_focus_repository())
    _celebrate(tracker.check_achievements())

    achievements = tracker.repository.load_achievements()
    unlocked = [a for a in achievements if a.unlocked]

    if not unlocked and not show_all:
        console.print(
            "[yellow]No achievements unlocked yet. Start focusing to earn badges![/yellow]"
        )
        console.print("\nTip: Use [cyan]--all[/cyan] to see available achievements")
        return

    console.print(
        f"\n[bold cyan]🏆 Achievements[/bold cyan] "
        f"({len(unlocked)} of {len(achievements)} unlocked)\n"
    )
    for achievement in unlocked:
        console.print(
            f"  {achievement.icon} [bold]{achievement.title}[/bold] - "
            f"{achievement.description}{_unlocked_on(achievement)}"
        )

    if show_all:
        progress = tracker.get_progress()
        locked = [a for a in achievements if not a.unlocked]
        if locked:
            console.print("\n[bold]Locked[/bold]")
        for achievement in locked:
            console.print(
                f"  [dim]{achievement.icon} {achievement.title} - {achievement.description}[/dim]"
            )
            console.print(
                f"    {get_progress_bar(progress[achievement.id], 20)} "
                f"{achievement.progress}/{achievement.target}"
            )
    console.print()


@app.command("check")
@command_wrapper
def check_achievements() -> None:
    """Re-evaluate achievements against the session log."""
    newly = AchievementTracker(get_focus_repository()).check_achievements()
    if not newly:
        console.print("[dim]No new achievements.[/dim]")
        return
    _celebrate(newly)
