"""Timer settings commands."""

import typer
from rich.table import Table

from pomopro_cli.models.focus.settings import AMBIENT_SOUNDS, TimerSettings
from pomopro_cli.services.timer_service import get_focus_timer
from pomopro_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pomopro_cli.utils.typer_helpers import SuggestingGroup
from pomopro_cli.utils.ui.formatters import format_error, format_success, get_console

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Pomodoro durations, goals and automation")

UNITS = {
    "focus_time": "min",
    "short_break_time": "min",
    "long_break_time": "min",
    "long_break_interval": "sessions",
    "daily_goal": "sessions",
}


def _display(settings: TimerSettings) -> None:
    table = Table(title="Timer Settings", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="bold")
    table.add_column("Description", style="dim")

    for name, field in TimerSettings.model_fields.items():
        value = getattr(settings, name)
        if name == "ambient_sound":
            shown = AMBIENT_SOUNDS[value]
        elif name in UNITS:
            shown = f"{value} {UNITS[name]}"
        else:
            shown = str(value)
        table.add_row(name, shown, field.description or "")

    console.print(table)


@app.command("show")
@command_wrapper
def show_settings() -> None:
    """Show the current timer settings."""
    _display(get_focus_timer().settings)


@app.command("set")
@command_wrapper
def set_setting(
    key: str = typer.Argument(..., help="Setting name (e.g. focus_time)"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change a timer setting. Out-of-range numbers are clamped."""
    key = key.replace("-", "_")
    if key not in TimerSettings.model_fields:
        format_error(
            f"Unknown setting '{key}'. Valid: {', '.join(TimerSettings.model_fields)}"
        )
        raise typer.Exit(ERROR_INVALID_ARGS)

    settings = get_focus_timer().update_settings(**{key: value})
    format_success(f"{key} set to {getattr(settings, key)}")


@app.command("reset")
@command_wrapper
def reset_settings(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Restore the default timer settings."""
    if not yes and not typer.confirm("Reset all timer settings to defaults?"):
        format_error("Cancelled")
        raise typer.Exit(0)

    get_focus_timer().update_settings(**TimerSettings().model_dump())
    format_success("Timer settings reset to defaults")
