"""Key-value store abstraction for PomoPro CLI.

The store is the single durable port of the application. Values are
JSON-compatible structures (dicts, lists, scalars) addressed by a string key.

Contract:
    * ``read`` never raises by default. A missing key or a value that cannot
      be decoded is logged and replaced by the caller-supplied default. With
      ``strict=True`` an undecodable value raises ``CorruptValueError``
      instead, for callers that would otherwise overwrite it.
    * ``write`` raises ``StorageUnavailableError`` when the value could not be
      committed. Callers on the timer path catch, log and continue.
"""

from __future__ import annotations

import copy
import json
from abc import ABC, abstractmethod
from typing import Any

from pomopro_cli.models.focus.exceptions import CorruptValueError, StorageUnavailableError
from pomopro_cli.utils.logger import get_logger


class Store(ABC):
    """Abstract base class for durable key-value storage."""

    @abstractmethod
    def read(self, key: str, default: Any = None, strict: bool = False) -> Any:
        """Return the decoded value stored under *key*, or *default*.

        Raises:
            CorruptValueError: If *strict* and the stored value is undecodable
            StorageUnavailableError: If *strict* and the value cannot be read
        """
        raise NotImplementedError("Store.read() must be implemented by adapter")

    @abstractmethod
    def write(self, key: str, value: Any) -> None:
        """Commit *value* under *key*.

        Raises:
            StorageUnavailableError: If the value could not be persisted
        """
        raise NotImplementedError("Store.write() must be implemented by adapter")

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove *key* if present."""
        raise NotImplementedError("Store.delete() must be implemented by adapter")


class MemoryStore(Store):
    """In-process store that keeps serialized JSON text per key.

    Values are encoded on write and decoded on read, so callers never share
    mutable objects with the store.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str, default: Any = None, strict: bool = False) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return copy.deepcopy(default)
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            if strict:
                raise CorruptValueError(key) from None
            get_logger().warning("Corrupt value for key %r, using default", key)
            return copy.deepcopy(default)

    def write(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageUnavailableError(f"Cannot serialize value for {key!r}: {e}") from e

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
