"""Configuration management commands."""

from typing import Optional

import typer
from rich.table import Table

from pomopro_cli.config import get_config_manager
from pomopro_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from pomopro_cli.utils.logger import get_log_file
from pomopro_cli.utils.typer_helpers import SuggestingGroup
from pomopro_cli.utils.ui.formatters import format_error, format_success, get_console

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


def _flatten(data: dict, prefix: str = "") -> list[tuple[str, object]]:
    rows = []
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            rows.extend(_flatten(value, f"{name}."))
        else:
            rows.append((name, value))
    return rows


@app.command("view")
@command_wrapper
def view_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """View current configuration."""
    config_manager = get_config_manager(profile)
    table = Table(title=f"Configuration ({profile})", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in _flatten(config_manager.config.model_dump()):
        table.add_row(key, "—" if value is None else str(value))
    console.print(table)
    console.print(f"[dim]Data: {config_manager.data_dir}[/dim]")
    console.print(f"[dim]Log:  {get_log_file()}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., timer.tick_interval)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Get a configuration value."""
    value = get_config_manager(profile).get(key)
    if value is None:
        format_error(f"Configuration key '{key}' not found")
        raise typer.Exit(ERROR_NOT_FOUND)
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., timer.tick_interval)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_manager(profile).set(key, value)
    except ValueError as e:
        format_error(str(e))
        raise typer.Exit(ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_error("Cancelled")
            raise typer.Exit(0)

    get_config_manager(profile).reset(key)
    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
