"""Main entry point for PomoPro CLI."""

import typer

from pomopro_cli import __version__
from pomopro_cli.commands import (
    achievements_command,
    config,
    settings,
    stats,
    tasks,
    timer,
)
from pomopro_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
    get_exit_code_description,
)
from pomopro_cli.utils.typer_helpers import SuggestingGroup
from pomopro_cli.utils.ui.formatters import get_console

EXIT_CODES_EPILOG = "Exit codes: " + "; ".join(
    f"{code} {get_exit_code_description(code).lower()}"
    for code in (ERROR_GENERAL, ERROR_INVALID_ARGS, ERROR_STORAGE, ERROR_NOT_FOUND)
)

app = typer.Typer(
    name="pomopro",
    cls=SuggestingGroup,
    help="A Pomodoro focus timer for the command line",
    epilog=EXIT_CODES_EPILOG,
    no_args_is_help=True,
)

console = get_console()


app.add_typer(timer.app, name="timer", help="Pomodoro timer for focus sessions")
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(stats.app, name="stats", help="Focus statistics and insights")
app.add_typer(
    achievements_command.app, name="achievements", help="Focus achievements"
)
app.add_typer(settings.app, name="settings", help="Timer settings")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]PomoPro CLI[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
