"""Typer helper utilities."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from pomopro_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pomopro_cli.utils.ui.formatters import get_console


def suggest_commands(attempted: str, names: list[str], limit: int = 3) -> list[str]:
    """Command names close to *attempted*; prefix matches come first."""
    prefixed = [name for name in names if name.startswith(attempted)]
    close = get_close_matches(attempted, names, n=limit, cutoff=0.6)
    return list(dict.fromkeys(prefixed + close))[:limit]


class SuggestingGroup(TyperGroup):
    """Typer group that answers an unknown command with close matches."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            suggestions = suggest_commands(args[0], sorted(self.commands)) if args else []
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] unknown command "{args[0]}" for "{ctx.info_name}"'
            )
            if len(suggestions) == 1:
                console.print("\n[yellow]Did you mean this?[/yellow]")
            else:
                console.print("\n[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
