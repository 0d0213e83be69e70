"""Unit tests for config management commands (view, get, set, reset)."""

import json

from typer.testing import CliRunner

from pomopro_cli.commands.config import app

runner = CliRunner()


class TestConfigView:
    def test_view_defaults(self, app_dirs):
        result = runner.invoke(app, ["view"])

        assert result.exit_code == 0
        assert "timer.tick_interval" in result.stdout
        assert "notifications.enabled" in result.stdout


class TestConfigGet:
    def test_get_value(self, app_dirs):
        result = runner.invoke(app, ["get", "timer.auto_start_delay"])

        assert result.exit_code == 0
        assert "2.0" in result.stdout

    def test_get_unknown(self, app_dirs):
        result = runner.invoke(app, ["get", "timer.nope"])

        assert result.exit_code == 5
        assert "not found" in result.stdout


class TestConfigSet:
    def test_set_persists(self, app_dirs):
        result = runner.invoke(app, ["set", "timer.tick_interval", "0.5"])

        assert result.exit_code == 0
        saved = json.loads((app_dirs / "config" / "default.json").read_text())
        assert saved["timer"]["tick_interval"] == 0.5

    def test_set_invalid_value(self, app_dirs):
        result = runner.invoke(app, ["set", "timer.tick_interval", "0"])

        assert result.exit_code == 2
        assert "Invalid value" in result.stdout

    def test_set_unknown_key(self, app_dirs):
        result = runner.invoke(app, ["set", "colors.theme", "dark"])

        assert result.exit_code == 2
        assert "Unknown configuration key" in result.stdout


class TestConfigReset:
    def test_reset_key(self, app_dirs):
        runner.invoke(app, ["set", "notifications.enabled", "false"])

        result = runner.invoke(app, ["reset", "notifications.enabled", "--yes"])

        assert result.exit_code == 0
        saved = json.loads((app_dirs / "config" / "default.json").read_text())
        assert saved["notifications"]["enabled"] is True

    def test_reset_all_cancelled(self, app_dirs):
        result = runner.invoke(app, ["reset"], input="n\n")

        assert "Cancelled" in result.stdout
