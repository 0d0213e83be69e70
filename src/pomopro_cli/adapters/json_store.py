"""JSON file adapter for the key-value store.

Each key is stored in its own ``<key>.json`` file under a data directory.
Writes go to a temporary file in the same directory which then atomically
replaces the target, so readers only ever see a fully written value.
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from pomopro_cli.models.focus.exceptions import CorruptValueError, StorageUnavailableError
from pomopro_cli.repositories.store import Store
from pomopro_cli.utils.logger import get_logger


class JsonFileStore(Store):
    """File-backed store keeping one JSON document per key."""

    def __init__(self, data_dir: Path | None = None):
        """Initialize the store, creating *data_dir* if needed."""
        if data_dir is None:
            from platformdirs import user_data_dir

            data_dir = Path(user_data_dir("pomopro-cli")) / "store"

        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def read(self, key: str, default: Any = None, strict: bool = False) -> Any:
        path = self._path(key)
        if not path.exists():
            return copy.deepcopy(default)

        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            if strict:
                raise CorruptValueError(key) from e
            get_logger().warning("Could not read %s, using default: %s", path, e)
            return copy.deepcopy(default)
        except OSError as e:
            if strict:
                raise StorageUnavailableError(f"Cannot read {path}: {e}") from e
            get_logger().warning("Could not read %s, using default: %s", path, e)
            return copy.deepcopy(default)

    def write(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            payload = json.dumps(value, indent=2)
        except (TypeError, ValueError) as e:
            raise StorageUnavailableError(f"Cannot serialize value for {key!r}: {e}") from e

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageUnavailableError(f"Cannot write {path}: {e}") from e

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
