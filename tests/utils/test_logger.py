"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest

import pomopro_cli.utils.logger as logger_mod


@pytest.fixture()
def log_dir(tmp_path):
    """Point user_log_dir at a fresh directory and reset the singleton."""
    target = tmp_path / "a" / "b" / "logs"
    logger_mod._logger = None
    logging.getLogger("pomopro_cli").handlers.clear()
    with patch("pomopro_cli.utils.logger.user_log_dir", return_value=str(target)):
        yield target


def test_creates_log_file_and_parent_dirs(log_dir):
    logger = logger_mod.get_logger()

    assert log_dir.is_dir()
    assert (log_dir / "pomopro.log").exists()
    assert isinstance(logger, logging.Logger)


def test_file_handler_added_alongside_existing_handlers(log_dir):
    stream = logging.StreamHandler()
    logging.getLogger("pomopro_cli").addHandler(stream)

    logger = logger_mod.get_logger()

    assert stream in logger.handlers
    assert any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    )
    assert (log_dir / "pomopro.log").exists()


def test_file_handler_not_duplicated(log_dir):
    logger_mod.get_logger()
    logger_mod._logger = None

    logger = logger_mod.get_logger()

    file_handlers = [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1


def test_returns_singleton(log_dir):
    assert logger_mod.get_logger() is logger_mod.get_logger()


def test_writes_message(log_dir):
    logger = logger_mod.get_logger()
    logger.warning("session %s skipped", "abc")
    for handler in logger.handlers:
        handler.flush()

    content = (log_dir / "pomopro.log").read_text(encoding="utf-8")
    assert "WARNING" in content
    assert "[pomopro_cli] session abc skipped" in content


def test_rotating_handler_configuration(log_dir):
    logger = logger_mod.get_logger()

    [handler] = [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert isinstance(handler, logging.handlers.RotatingFileHandler)
    assert handler.maxBytes == 5 * 1024 * 1024
    assert handler.backupCount == 3
    assert logger.propagate is False
    assert logger.level == logging.DEBUG


def test_get_log_file(log_dir):
    assert logger_mod.get_log_file() == log_dir / "pomopro.log"


@pytest.mark.parametrize(
    "value, level",
    [("INFO", logging.INFO), ("warning", logging.WARNING), ("bogus", logging.DEBUG)],
)
def test_level_from_environment(log_dir, monkeypatch, value, level):
    monkeypatch.setenv("POMOPRO_LOG_LEVEL", value)

    assert logger_mod.get_logger().level == level
