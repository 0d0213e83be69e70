"""Unit tests for command decorators."""

import pytest
import typer
from typer.testing import CliRunner

from pomopro_cli.commands.decorators import AppError, command_wrapper
from pomopro_cli.models.focus.exceptions import (
    InvalidTransitionError,
    StorageUnavailableError,
    TaskNotFoundError,
)

runner = CliRunner()


def _app_raising(error: Exception) -> typer.Typer:
    app = typer.Typer()

    @app.command()
    @command_wrapper
    def boom() -> None:
        raise error

    return app


class TestCommandWrapper:
    """Tests for error-to-exit-code mapping."""

    def test_success_returns_value(self):
        @command_wrapper
        def ok():
            return 42

        assert ok() == 42

    def test_preserves_name(self):
        @command_wrapper
        def my_command():
            pass

        assert my_command.__name__ == "my_command"

    @pytest.mark.parametrize(
        "error, code",
        [
            (AppError("custom", exit_code=3), 3),
            (TaskNotFoundError("abc"), 5),
            (StorageUnavailableError("disk full"), 4),
            (InvalidTransitionError("Timer is already running"), 2),
            (ValueError("bad value"), 2),
            (RuntimeError("surprise"), 1),
        ],
    )
    def test_exit_codes(self, error, code):
        result = runner.invoke(_app_raising(error))
        assert result.exit_code == code

    def test_known_error_message(self):
        result = runner.invoke(_app_raising(TaskNotFoundError("abc")))
        assert "Error: Task not found: abc" in result.stdout

    def test_unexpected_error_message(self):
        result = runner.invoke(_app_raising(RuntimeError("surprise")))
        assert "An unexpected error occurred: surprise" in result.stdout

    def test_typer_exit_passes_through(self):
        result = runner.invoke(_app_raising(typer.Exit(7)))
        assert result.exit_code == 7

    def test_logs_start_and_end(self, mocker):
        logger = mocker.MagicMock()
        mocker.patch("pomopro_cli.commands.decorators.get_logger", return_value=logger)

        @command_wrapper
        def ok():
            return None

        ok()

        messages = [c.args[0] for c in logger.info.call_args_list]
        assert messages == ["command started: %s", "command completed: %s (%.3fs)"]

    def test_failure_log_names_exit_code(self, mocker):
        logger = mocker.MagicMock()
        mocker.patch("pomopro_cli.commands.decorators.get_logger", return_value=logger)

        runner.invoke(_app_raising(StorageUnavailableError("disk full")))

        assert "ERROR_STORAGE" in logger.error.call_args.args
