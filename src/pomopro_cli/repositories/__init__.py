"""Storage ports for PomoPro CLI.

Adapters implementing ``Store`` live in ``pomopro_cli.adapters``.
"""

from .focus_repository import FocusRepository
from .store import MemoryStore, Store

__all__ = ["Store", "MemoryStore", "FocusRepository"]
