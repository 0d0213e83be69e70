"""Unit tests for timer settings validation."""

from __future__ import annotations

import pytest

from pomopro_cli.models.focus.settings import TimerSettings, clamp_int


class TestClampInt:
    """Tests for the numeric input coercion helper."""

    @pytest.mark.parametrize(
        "value,expected",
        [(30, 30), ("45", 45), (0, 25), ("", 25), ("abc", 25), (None, 25), (99, 60), (-3, 1)],
    )
    def test_clamp(self, value, expected) -> None:
        assert clamp_int(value, 25, 1, 60) == expected

    def test_bool_is_not_a_number(self) -> None:
        assert clamp_int(True, 25, 1, 60) == 25


class TestTimerSettings:
    """Tests for TimerSettings."""

    def test_defaults(self) -> None:
        settings = TimerSettings()

        assert settings.focus_time == 25
        assert settings.short_break_time == 5
        assert settings.long_break_time == 15
        assert settings.long_break_interval == 4
        assert settings.daily_goal == 8
        assert settings.sound_enabled is True
        assert settings.ambient_sound == "none"
        assert settings.auto_start_breaks is False
        assert settings.auto_start_pomodoros is False
        assert settings.theme == "default"

    def test_out_of_range_values_are_clamped(self) -> None:
        """Input is never rejected, only clamped to the accepted range."""
        settings = TimerSettings(
            focus_time=120,
            short_break_time=0,
            long_break_time=-4,
            long_break_interval=20,
            daily_goal=50,
        )

        assert settings.focus_time == 60
        assert settings.short_break_time == 5  # zero falls back to the default
        assert settings.long_break_time == 1
        assert settings.long_break_interval == 8
        assert settings.daily_goal == 20

    def test_unknown_ambient_sound_falls_back(self) -> None:
        assert TimerSettings(ambient_sound="thunder").ambient_sound == "none"
        assert TimerSettings(ambient_sound="Rain").ambient_sound == "rain"

    @pytest.mark.parametrize("raw,expected", [("yes", True), ("off", False), ("1", True)])
    def test_flags_parse_strings(self, raw, expected) -> None:
        assert TimerSettings(auto_start_breaks=raw).auto_start_breaks is expected

    def test_duration_for_returns_seconds(self) -> None:
        settings = TimerSettings(focus_time=50, short_break_time=10, long_break_time=30)

        assert settings.duration_for("focus") == 3000
        assert settings.duration_for("short-break") == 600
        assert settings.duration_for("long-break") == 1800

    def test_should_auto_start(self) -> None:
        """Breaks follow auto_start_breaks, focus follows auto_start_pomodoros."""
        settings = TimerSettings(auto_start_breaks=True)

        assert settings.should_auto_start("short-break") is True
        assert settings.should_auto_start("long-break") is True
        assert settings.should_auto_start("focus") is False

    def test_updated_validates_changes(self) -> None:
        settings = TimerSettings().updated(focus_time="90", theme="")

        assert settings.focus_time == 60
        assert settings.theme == "default"

    def test_from_stored_ignores_unknown_keys(self) -> None:
        settings = TimerSettings.from_stored({"focus_time": 40, "colour": "red"})

        assert settings.focus_time == 40

    def test_from_stored_non_mapping_gives_defaults(self) -> None:
        assert TimerSettings.from_stored(["nope"]) == TimerSettings()
