"""Tests for settings loading and saving."""

from __future__ import annotations

from pathlib import Path

import pytest

from fitplan.config.settings import Settings, reload_settings
from fitplan.errors import ValidationError
from fitplan.models import ActivityLevel


class TestSettingsLoad:
    """Tests for Settings.load."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        settings = Settings.load(tmp_path / "config.yaml")
        assert settings.activity.multipliers[ActivityLevel.MODERATELY] == 1.55
        assert settings.safety.min_daily_calories == 1200
        assert settings.tracking.smoothing == 0.1
        assert settings.projection.include_water_weight is True

    def test_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "activity:\n"
            "  multipliers:\n"
            "    Moderately: 1.5\n"
            "safety:\n"
            "  min_daily_calories: 1400\n"
            "tracking:\n"
            "  smoothing: 0.2\n"
            "  streak_window_days: 60\n"
            "projection:\n"
            "  include_water_weight: false\n"
        )
        settings = Settings.load(path)
        assert settings.activity.multipliers[ActivityLevel.MODERATELY] == 1.5
        assert settings.activity.multipliers[ActivityLevel.VERY] == 1.725
        assert settings.safety.min_daily_calories == 1400
        assert settings.tracking.smoothing == 0.2
        assert settings.tracking.streak_window_days == 60
        assert settings.projection.include_water_weight is False

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Settings.load(path).safety.min_daily_calories == 1200

    def test_invalid_smoothing(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("tracking:\n  smoothing: 1.5\n")
        with pytest.raises(ValueError, match="smoothing"):
            Settings.load(path)

    def test_unknown_activity_level(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("activity:\n  multipliers:\n    extreme: 2.0\n")
        with pytest.raises(ValidationError):
            Settings.load(path)

    @pytest.mark.parametrize("value", [0, 500, 1199])
    def test_calorie_floor_cannot_be_lowered(self, tmp_path: Path, value: int) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(f"safety:\n  min_daily_calories: {value}\n")
        with pytest.raises(ValueError, match="min_daily_calories"):
            Settings.load(path)

    @pytest.mark.parametrize("value", ["0", "-1", "0.0"])
    def test_non_positive_multiplier(self, tmp_path: Path, value: str) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(f"activity:\n  multipliers:\n    Sedentary: {value}\n")
        with pytest.raises(ValueError, match="activity.multipliers.Sedentary"):
            Settings.load(path)


class TestSettingsSave:
    """Tests for Settings.save."""

    def test_save_then_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.yaml"
        settings = Settings()
        settings.safety.min_daily_calories = 1500
        settings.activity.multipliers[ActivityLevel.SEDENTARY] = 1.25
        settings.save(path)

        loaded = Settings.load(path)
        assert loaded.safety.min_daily_calories == 1500
        assert loaded.activity.multipliers[ActivityLevel.SEDENTARY] == 1.25

    def test_defaults_are_not_shared(self) -> None:
        first = Settings()
        first.activity.multipliers[ActivityLevel.VERY] = 2.0
        assert Settings().activity.multipliers[ActivityLevel.VERY] == 1.725


class TestReloadSettings:
    def test_reload_from_path(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("safety:\n  min_daily_calories: 1300\n")
        assert reload_settings(path).safety.min_daily_calories == 1300
