"""
Exit codes for PomoPro CLI.

Scripts can tell a bad argument from a missing task or a full disk.
"""

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2  # also rejected timer transitions
ERROR_STORAGE = 4
ERROR_NOT_FOUND = 5

_EXIT_CODES: dict[int, tuple[str, str]] = {
    SUCCESS: ("SUCCESS", "Command executed successfully"),
    ERROR_GENERAL: ("ERROR_GENERAL", "A general error occurred"),
    ERROR_INVALID_ARGS: ("ERROR_INVALID_ARGS", "Invalid arguments or timer operation"),
    ERROR_STORAGE: ("ERROR_STORAGE", "Data could not be saved - check the data directory"),
    ERROR_NOT_FOUND: ("ERROR_NOT_FOUND", "Resource not found"),
}


def get_exit_code_name(code: int) -> str:
    """Symbolic name of *code*, e.g. ``ERROR_STORAGE``."""
    if code in _EXIT_CODES:
        return _EXIT_CODES[code][0]
    return f"UNKNOWN({code})"


def get_exit_code_description(code: int) -> str:
    """Human-readable description of *code*."""
    if code in _EXIT_CODES:
        return _EXIT_CODES[code][1]
    return "Unknown error"
