"""Unit tests for JsonFileStore (json_store.py)."""

from __future__ import annotations

import os
import stat
from unittest.mock import patch

import pytest

from pomopro_cli.adapters.json_store import JsonFileStore
from pomopro_cli.models.focus.exceptions import CorruptValueError, StorageUnavailableError
from pomopro_cli.repositories.focus_repository import FocusRepository


@pytest.fixture()
def json_store(tmp_path) -> JsonFileStore:
    return JsonFileStore(tmp_path / "store")


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


class TestRead:
    def test_creates_data_dir(self, tmp_path):
        JsonFileStore(tmp_path / "nested" / "store")
        assert (tmp_path / "nested" / "store").is_dir()

    def test_missing_key_returns_default(self, json_store):
        assert json_store.read("settings", {"a": 1}) == {"a": 1}

    def test_default_is_copied(self, json_store):
        default: list = []
        json_store.read("sessions", default).append("x")
        assert default == []

    def test_corrupt_file_returns_default(self, json_store):
        (json_store.data_dir / "sessions.json").write_text("{not json", encoding="utf-8")
        assert json_store.read("sessions", []) == []

    def test_strict_read_raises_on_corrupt_file(self, json_store):
        (json_store.data_dir / "sessions.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(CorruptValueError):
            json_store.read("sessions", [], strict=True)

    def test_truncated_session_log_survives_append(self, json_store, make_session):
        path = json_store.data_dir / "sessions.json"
        path.write_text('[\n  {\n    "id": "a",\n    "date": ', encoding="utf-8")

        with pytest.raises(StorageUnavailableError):
            FocusRepository(json_store).append_session(make_session())

        assert '"id": "a"' in path.read_text(encoding="utf-8")

    def test_roundtrip(self, json_store):
        json_store.write("tasks", [{"id": "1", "title": "A"}])
        assert json_store.read("tasks") == [{"id": "1", "title": "A"}]


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


class TestWrite:
    def test_one_file_per_key(self, json_store):
        json_store.write("timer-state", {"timer_state": "idle"})
        assert (json_store.data_dir / "timer-state.json").exists()

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
    def test_file_is_private(self, json_store):
        json_store.write("settings", {})
        mode = stat.S_IMODE((json_store.data_dir / "settings.json").stat().st_mode)
        assert mode == 0o600

    def test_overwrite_leaves_no_temp_files(self, json_store):
        json_store.write("settings", {"focus_time": 25})
        json_store.write("settings", {"focus_time": 30})

        assert json_store.read("settings") == {"focus_time": 30}
        assert [p.name for p in json_store.data_dir.iterdir()] == ["settings.json"]

    def test_unserializable_value(self, json_store):
        with pytest.raises(StorageUnavailableError, match="Cannot serialize"):
            json_store.write("settings", {"bad": object()})

    def test_os_error_keeps_previous_value(self, json_store):
        json_store.write("sessions", [1])

        with patch(
            "pomopro_cli.adapters.json_store.os.replace", side_effect=OSError("disk full")
        ):
            with pytest.raises(StorageUnavailableError, match="disk full"):
                json_store.write("sessions", [1, 2])

        assert json_store.read("sessions") == [1]
        assert [p.name for p in json_store.data_dir.iterdir()] == ["sessions.json"]


def test_delete(json_store):
    json_store.write("tasks", [])
    json_store.delete("tasks")
    json_store.delete("tasks")
    assert json_store.read("tasks", None) is None
