"""Load plan files and log histories from disk.

Plan files are YAML with a ``profile`` and a ``goal`` section:

    profile:
      age: 30
      gender: male
      height: 180
      weight: 80
      activity_level: moderately
    goal:
      target_weight: 70
      time_frame_weeks: 12
      deficit_rate: 0.5
      start_date: 2025-01-06      # optional, used by tracking commands

Daily logs and body stats are CSV files with a ``date`` column.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar

import pandas as pd
import yaml

from fitplan.errors import ValidationError
from fitplan.models import Goal, Profile
from fitplan.tracking.models import BodyStatEntry, LogEntry, coerce_entries, parse_entry_date

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", LogEntry, BodyStatEntry)


@dataclass
class PlanFile:
    """Parsed contents of a plan file."""

    profile: Profile
    goal: Goal
    start_date: Optional[date] = None


@dataclass
class LoadResult(Generic[EntryT]):
    """Entries loaded from a CSV file plus the number of rows skipped."""

    entries: list[EntryT] = field(default_factory=list)
    skipped: int = 0

    @property
    def warnings(self) -> list[str]:
        if not self.skipped:
            return []
        return [f"Skipped {self.skipped} malformed row(s)"]


def load_plan_file(path: Path) -> PlanFile:
    """Read and validate a YAML plan file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If a section is missing or a field is invalid
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValidationError("plan", "must be a mapping with profile and goal sections")
    for section in ("profile", "goal"):
        if not isinstance(data.get(section), dict):
            raise ValidationError(section, "section is required")

    goal_data = dict(data["goal"])
    start_value = goal_data.pop("start_date", None)
    start_date = None
    if start_value is not None:
        start_date = parse_entry_date(start_value)
        if start_date is None:
            raise ValidationError("start_date", f"unparseable date {start_value!r}")

    return PlanFile(
        profile=Profile.from_dict(data["profile"]),
        goal=Goal.from_dict(goal_data),
        start_date=start_date,
    )


def _read_records(csv_path: Path, required: list[str]) -> list[dict[str, Any]]:
    df = pd.read_csv(csv_path, dtype={"date": str})

    missing = set(required) - set(df.columns)
    if missing:
        raise ValueError(
            f"Missing required columns: {sorted(missing)}. "
            f"Required columns are: {required}"
        )

    # Blank cells arrive as NaN; the models expect None for "not recorded"
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def _load(csv_path: Path, entry_cls: type[EntryT], required: list[str]) -> LoadResult[EntryT]:
    records = _read_records(csv_path, required)
    entries, skipped = coerce_entries(records, entry_cls)
    if skipped:
        logger.warning("%s: skipped %d malformed row(s)", csv_path, skipped)
    return LoadResult(entries=entries, skipped=skipped)


def load_daily_logs(csv_path: Path) -> LoadResult[LogEntry]:
    """Load daily logs from CSV.

    CSV format:
        date,calories_in,protein_in,fat_in,carbs_in,bmr,weight_training_minutes,cardio_minutes,step_count
        2025-01-15,2100,160,70,200,1780,45,20,9000

    Only ``date`` and ``calories_in`` are required. Rows with an unparseable
    date or invalid values are skipped and counted; a repeated date keeps
    the last row.

    Raises:
        ValueError: If required columns are missing
    """
    return _load(csv_path, LogEntry, ["date", "calories_in"])


def load_body_stats(csv_path: Path) -> LoadResult[BodyStatEntry]:
    """Load body stats from CSV.

    CSV format:
        date,weight,body_fat,muscle_mass,notes
        2025-01-15,80.4,21.5,,after travel

    Raises:
        ValueError: If required columns are missing
    """
    return _load(csv_path, BodyStatEntry, ["date", "weight"])
