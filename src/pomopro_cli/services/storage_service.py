"""Wiring of the configured store into a repository."""

from __future__ import annotations

from pomopro_cli.adapters.json_store import JsonFileStore
from pomopro_cli.config import ConfigManager, get_config_manager
from pomopro_cli.repositories.focus_repository import FocusRepository


def get_focus_repository(config_manager: ConfigManager | None = None) -> FocusRepository:
    """Repository over the JSON store in the configured data directory."""
    config_manager = config_manager or get_config_manager()
    return FocusRepository(JsonFileStore(config_manager.data_dir))
