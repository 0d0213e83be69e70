"""Application logger.

Everything goes to one rotating file under ``platformdirs.user_log_dir``;
nothing is printed to the terminal, which belongs to the live timer display.
Set ``POMOPRO_LOG_LEVEL`` (e.g. ``INFO``) to raise the threshold.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "pomopro_cli"
LOG_FILE_NAME = "pomopro.log"
LEVEL_ENV_VAR = "POMOPRO_LOG_LEVEL"

_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def get_log_file() -> Path:
    """Path of the active log file."""
    return Path(user_log_dir(LOGGER_NAME)) / LOG_FILE_NAME


def _level_from_env() -> int:
    name = os.environ.get(LEVEL_ENV_VAR, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.DEBUG
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.DEBUG


def get_logger() -> logging.Logger:
    """Return the application logger, attaching the file handler on first use."""
    global _logger
    if _logger is not None:
        return _logger

    log_file = get_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level_from_env())
    logger.propagate = False
    if not any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    ):
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        logger.addHandler(handler)

    _logger = logger
    return _logger
