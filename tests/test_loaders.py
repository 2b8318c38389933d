"""Tests for plan file and CSV loading."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
import yaml

from fitplan.data.loaders import load_body_stats, load_daily_logs, load_plan_file
from fitplan.errors import ValidationError
from fitplan.models import ActivityLevel


def write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text)
    return path


class TestLoadPlanFile:
    """Tests for YAML plan files."""

    def test_valid(self, plan_file: Path) -> None:
        plan = load_plan_file(plan_file)
        assert plan.profile.activity_level == ActivityLevel.MODERATELY
        assert plan.goal.target_weight == 70
        assert plan.start_date == date(2025, 2, 1)

    def test_start_date_optional(self, tmp_path: Path, plan_data: dict) -> None:
        del plan_data["goal"]["start_date"]
        path = write(tmp_path, "plan.yaml", yaml.safe_dump(plan_data))
        assert load_plan_file(path).start_date is None

    def test_missing_section(self, tmp_path: Path, plan_data: dict) -> None:
        del plan_data["goal"]
        path = write(tmp_path, "plan.yaml", yaml.safe_dump(plan_data))
        with pytest.raises(ValidationError) as exc_info:
            load_plan_file(path)
        assert exc_info.value.field == "goal"

    def test_invalid_field(self, tmp_path: Path, plan_data: dict) -> None:
        plan_data["profile"]["age"] = 12
        path = write(tmp_path, "plan.yaml", yaml.safe_dump(plan_data))
        with pytest.raises(ValidationError) as exc_info:
            load_plan_file(path)
        assert exc_info.value.field == "age"

    def test_bad_start_date(self, tmp_path: Path, plan_data: dict) -> None:
        plan_data["goal"]["start_date"] = "next monday"
        path = write(tmp_path, "plan.yaml", yaml.safe_dump(plan_data))
        with pytest.raises(ValidationError):
            load_plan_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_plan_file(tmp_path / "missing.yaml")


class TestLoadDailyLogs:
    """Tests for daily log CSVs."""

    def test_valid_rows(self, tmp_path: Path) -> None:
        path = write(
            tmp_path,
            "logs.csv",
            "date,calories_in,bmr,weight_training_minutes,cardio_minutes,step_count\n"
            "2025-01-15,2100,1780,45,20,9000\n"
            "2025-01-16,1950,1780,,,\n",
        )
        result = load_daily_logs(path)
        assert len(result.entries) == 2
        assert result.skipped == 0
        assert result.entries[0].deficit == 465
        assert result.entries[1].cardio_minutes is None
        assert result.warnings == []

    def test_bad_rows_skipped(self, tmp_path: Path) -> None:
        path = write(
            tmp_path,
            "logs.csv",
            "date,calories_in\n"
            "2025-01-15,2100\n"
            "15/01/2025,2000\n"
            "2025-01-17,-100\n"
            "2025-01-18,\n",
        )
        result = load_daily_logs(path)
        assert [e.date for e in result.entries] == [date(2025, 1, 15)]
        assert result.skipped == 3
        assert result.warnings

    def test_repeated_date_keeps_last(self, tmp_path: Path) -> None:
        path = write(
            tmp_path,
            "logs.csv",
            "date,calories_in\n2025-01-15,2100\n2025-01-15,1800\n",
        )
        result = load_daily_logs(path)
        assert len(result.entries) == 1
        assert result.entries[0].calories_in == 1800

    def test_missing_column(self, tmp_path: Path) -> None:
        path = write(tmp_path, "logs.csv", "date,protein_in\n2025-01-15,150\n")
        with pytest.raises(ValueError, match="calories_in"):
            load_daily_logs(path)


class TestLoadBodyStats:
    """Tests for body stat CSVs."""

    def test_valid_rows(self, tmp_path: Path) -> None:
        path = write(
            tmp_path,
            "stats.csv",
            "date,weight,body_fat,notes\n"
            "2025-01-16,80.1,,\n"
            "2025-01-15,80.4,21.5,after travel\n",
        )
        result = load_body_stats(path)
        assert [e.weight for e in result.entries] == [80.4, 80.1]
        assert result.entries[0].body_fat == 21.5
        assert result.entries[0].notes == "after travel"
        assert result.entries[1].body_fat is None

    def test_out_of_range_row_skipped(self, tmp_path: Path) -> None:
        path = write(
            tmp_path,
            "stats.csv",
            "date,weight\n2025-01-15,80.4\n2025-01-16,8.0\n",
        )
        result = load_body_stats(path)
        assert len(result.entries) == 1
        assert result.skipped == 1

    def test_missing_column(self, tmp_path: Path) -> None:
        path = write(tmp_path, "stats.csv", "date,body_fat\n2025-01-15,21.5\n")
        with pytest.raises(ValueError, match="weight"):
            load_body_stats(path)
