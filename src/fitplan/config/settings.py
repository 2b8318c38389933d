"""Application settings and configuration management.

Settings are read by the command-line layer only. Engine functions take every
tunable as an explicit argument, so the same inputs always give the same plan
regardless of what configuration happens to be loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from fitplan.models import ActivityLevel, parse_enum
from fitplan.planning.deficit import MIN_DAILY_CALORIES
from fitplan.profiles.body_calc import ACTIVITY_MULTIPLIERS
from fitplan.projection.trajectory import WATER_WEIGHT_FRACTION
from fitplan.tracking.adherence import DEFAULT_WEEKLY_TARGET, STREAK_WINDOW_DAYS
from fitplan.tracking.ema import DEFAULT_SMOOTHING
from fitplan.tracking.progress import MIN_DAYS_IN_WINDOW, WINDOW_DAYS


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".fitplan"


def default_config_path() -> Path:
    """Return the default config.yaml path."""
    return _default_config_dir() / "config.yaml"


@dataclass
class ActivityConfig:
    """Activity multiplier table used for every maintenance calculation."""

    multipliers: dict[ActivityLevel, float] = field(
        default_factory=lambda: dict(ACTIVITY_MULTIPLIERS)
    )


@dataclass
class SafetyConfig:
    """Safety limits."""

    min_daily_calories: int = MIN_DAILY_CALORIES


@dataclass
class TrackingConfig:
    """Trend, progress and adherence parameters."""

    smoothing: float = DEFAULT_SMOOTHING
    progress_window_days: int = WINDOW_DAYS
    progress_min_days: int = MIN_DAYS_IN_WINDOW
    streak_window_days: int = STREAK_WINDOW_DAYS
    weekly_adherence_target: float = DEFAULT_WEEKLY_TARGET


@dataclass
class ProjectionConfig:
    """Trajectory projection defaults."""

    include_water_weight: bool = True
    water_weight_fraction: float = WATER_WEIGHT_FRACTION


@dataclass
class Settings:
    """Main application settings."""

    activity: ActivityConfig = field(default_factory=ActivityConfig)
    safety: SafetyConfig = field(default_factory=SafetyConfig)
    tracking: TrackingConfig = field(default_factory=TrackingConfig)
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.fitplan/config.yaml

        Returns:
            Settings instance

        Raises:
            ValueError: If a value in the file is invalid
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse activity config
        if "activity" in data:
            act_data = data["activity"] or {}
            for level, multiplier in (act_data.get("multipliers") or {}).items():
                key = parse_enum(ActivityLevel, "activity.multipliers", level)
                value = float(multiplier)
                if value <= 0:
                    raise ValueError(
                        f"activity.multipliers.{key.value} must be > 0, got {value}"
                    )
                settings.activity.multipliers[key] = value

        # Parse safety config
        if "safety" in data:
            safety_data = data["safety"] or {}
            if "min_daily_calories" in safety_data:
                min_calories = int(safety_data["min_daily_calories"])
                if min_calories < MIN_DAILY_CALORIES:
                    raise ValueError(
                        f"safety.min_daily_calories must be >= {MIN_DAILY_CALORIES}, "
                        f"got {min_calories}"
                    )
                settings.safety.min_daily_calories = min_calories

        # Parse tracking config
        if "tracking" in data:
            trk_data = data["tracking"] or {}
            if "smoothing" in trk_data:
                smoothing = float(trk_data["smoothing"])
                if not 0 < smoothing <= 1:
                    raise ValueError(f"tracking.smoothing must be in (0, 1], got {smoothing}")
                settings.tracking.smoothing = smoothing
            for key in ("progress_window_days", "progress_min_days", "streak_window_days"):
                if key in trk_data:
                    setattr(settings.tracking, key, int(trk_data[key]))
            if "weekly_adherence_target" in trk_data:
                settings.tracking.weekly_adherence_target = float(
                    trk_data["weekly_adherence_target"]
                )

        # Parse projection config
        if "projection" in data:
            proj_data = data["projection"] or {}
            if "include_water_weight" in proj_data:
                settings.projection.include_water_weight = bool(
                    proj_data["include_water_weight"]
                )
            if "water_weight_fraction" in proj_data:
                settings.projection.water_weight_fraction = float(
                    proj_data["water_weight_fraction"]
                )

        return settings

    def to_dict(self) -> dict:
        return {
            "activity": {
                "multipliers": {
                    level.value: multiplier
                    for level, multiplier in self.activity.multipliers.items()
                },
            },
            "safety": {
                "min_daily_calories": self.safety.min_daily_calories,
            },
            "tracking": {
                "smoothing": self.tracking.smoothing,
                "progress_window_days": self.tracking.progress_window_days,
                "progress_min_days": self.tracking.progress_min_days,
                "streak_window_days": self.tracking.streak_window_days,
                "weekly_adherence_target": self.tracking.weekly_adherence_target,
            },
            "projection": {
                "include_water_weight": self.projection.include_water_weight,
                "water_weight_fraction": self.projection.water_weight_fraction,
            },
        }

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.fitplan/config.yaml
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
