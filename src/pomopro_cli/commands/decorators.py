"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from pomopro_cli.models.focus.exceptions import (
    InvalidTransitionError,
    StorageUnavailableError,
    TaskNotFoundError,
)
from pomopro_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
    get_exit_code_name,
)
from pomopro_cli.utils.logger import get_logger
from pomopro_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _exit_code_for(error: Exception) -> int:
    if isinstance(error, AppError):
        return error.exit_code
    if isinstance(error, TaskNotFoundError):
        return ERROR_NOT_FOUND
    if isinstance(error, StorageUnavailableError):
        return ERROR_STORAGE
    if isinstance(error, (InvalidTransitionError, ValueError)):
        return ERROR_INVALID_ARGS
    return ERROR_GENERAL


def command_wrapper(func: Callable) -> Callable:
    """Log command start and end and turn known errors into exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except typer.Exit:
            raise

        except (AppError, TaskNotFoundError, StorageUnavailableError, ValueError) as e:
            elapsed = time.monotonic() - start
            code = _exit_code_for(e)
            logger.error(
                "command failed: %s (%.3fs) [%s] - %s",
                cmd,
                elapsed,
                get_exit_code_name(code),
                str(e),
            )
            format_error(str(e))
            raise typer.Exit(code=code) from e

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
