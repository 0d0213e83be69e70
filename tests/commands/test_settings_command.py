"""Tests for timer settings commands."""
# pylint: disable=redefined-outer-name

import pytest
from typer.testing import CliRunner

from pomopro_cli.commands.settings import app
from pomopro_cli.models.focus.settings import TimerSettings
from pomopro_cli.models.focus.state import TimerSnapshot
from pomopro_cli.services.storage_service import get_focus_repository

runner = CliRunner()


@pytest.fixture
def repo(app_dirs):
    return get_focus_repository()


class TestSettingsShow:
    def test_show_defaults(self, repo):
        result = runner.invoke(app, ["show"])

        assert result.exit_code == 0
        assert "focus_time" in result.stdout
        assert "25 min" in result.stdout
        assert "None" in result.stdout


class TestSettingsSet:
    def test_set_value(self, repo):
        result = runner.invoke(app, ["set", "focus-time", "45"])

        assert result.exit_code == 0
        assert "focus_time set to 45" in result.stdout
        assert repo.load_settings().focus_time == 45
        assert repo.load_snapshot().time_left == 45 * 60

    def test_out_of_range_is_clamped(self, repo):
        result = runner.invoke(app, ["set", "focus_time", "500"])

        assert "focus_time set to 60" in result.stdout
        assert repo.load_settings().focus_time == 60

    def test_flag(self, repo):
        runner.invoke(app, ["set", "auto_start_breaks", "yes"])

        assert repo.load_settings().auto_start_breaks is True

    def test_unknown_key(self, repo):
        result = runner.invoke(app, ["set", "volume", "11"])

        assert result.exit_code == 2
        assert "Unknown setting" in result.stdout

    def test_paused_snapshot_is_restored_idle(self, repo):
        repo.save_snapshot(TimerSnapshot("paused", "focus", 100, 0, None))

        runner.invoke(app, ["set", "short_break_time", "10"])

        assert repo.load_snapshot().time_left == 25 * 60
        assert repo.load_snapshot().timer_state == "idle"


class TestSettingsReset:
    def test_reset_with_yes(self, repo):
        repo.save_settings(TimerSettings(focus_time=50, daily_goal=3))

        result = runner.invoke(app, ["reset", "--yes"])

        assert result.exit_code == 0
        assert repo.load_settings() == TimerSettings()

    def test_reset_cancelled(self, repo):
        repo.save_settings(TimerSettings(focus_time=50))

        result = runner.invoke(app, ["reset"], input="n\n")

        assert "Cancelled" in result.stdout
        assert repo.load_settings().focus_time == 50
