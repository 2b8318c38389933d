"""Tests for progress assessment."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from fitplan.tracking.models import BodyStatEntry
from fitplan.tracking.progress import ProgressStatus, assess_progress, classify_ratio


def daily_weights(as_of: date, days: int, start: float, per_week: float) -> list[BodyStatEntry]:
    """One weigh-in per day for `days` days ending at as_of, losing per_week kg/week."""
    return [
        BodyStatEntry(
            date=as_of - timedelta(days=days - 1 - i),
            weight=start - per_week / 7 * i,
        )
        for i in range(days)
    ]


def assess(entries, as_of: date, **overrides):
    params = dict(start_weight=80, target_weight=70, time_frame_weeks=10, as_of=as_of)
    params.update(overrides)
    return assess_progress(entries, **params)


class TestGathering:
    """Too little recent data to judge."""

    def test_few_entries(self, as_of: date) -> None:
        result = assess(daily_weights(as_of, 6, 80, 1.0), as_of)
        assert result.status == ProgressStatus.GATHERING
        assert result.days_in_window == 6
        assert result.weekly_loss is None

    def test_old_entries_do_not_count(self, as_of: date) -> None:
        old = daily_weights(as_of - timedelta(days=30), 20, 85, 1.0)
        recent = daily_weights(as_of, 3, 80, 1.0)
        result = assess(old + recent, as_of)
        assert result.status == ProgressStatus.GATHERING
        assert result.days_in_window == 3

    def test_no_entries(self, as_of: date) -> None:
        assert assess([], as_of).status == ProgressStatus.GATHERING

    def test_future_entries_ignored(self, as_of: date) -> None:
        future = daily_weights(as_of + timedelta(days=10), 10, 80, 1.0)
        assert assess(future, as_of).status == ProgressStatus.GATHERING


class TestClassification:
    """Trend rate compared with the planned rate."""

    def test_on_track(self, as_of: date) -> None:
        """Losing 1 kg/week against a 1 kg/week plan."""
        result = assess(daily_weights(as_of, 60, 90, 1.0), as_of)
        assert result.status == ProgressStatus.ON_TRACK
        assert result.expected_weekly_loss == pytest.approx(1.0)
        assert result.weekly_loss == pytest.approx(1.0, abs=0.05)
        assert result.days_in_window == 14

    def test_slow(self, as_of: date) -> None:
        result = assess(daily_weights(as_of, 30, 80, 0.0), as_of)
        assert result.status == ProgressStatus.SLOW
        assert result.ratio == pytest.approx(0.0)

    def test_fast(self, as_of: date) -> None:
        result = assess(daily_weights(as_of, 60, 110, 3.0), as_of)
        assert result.status == ProgressStatus.FAST
        assert result.ratio > 1.5

    def test_maintenance_goal_is_on_track(self, as_of: date) -> None:
        entries = daily_weights(as_of, 30, 80, 2.0)
        result = assess(entries, as_of, target_weight=80)
        assert result.status == ProgressStatus.ON_TRACK
        assert result.ratio is None

    def test_message_matches_status(self, as_of: date) -> None:
        result = assess(daily_weights(as_of, 30, 80, 0.0), as_of)
        assert "slower" in result.message


class TestClassifyRatio:
    """Tests for the ratio thresholds."""

    @pytest.mark.parametrize(
        "ratio, status",
        [
            (0.2, ProgressStatus.SLOW),
            (0.5, ProgressStatus.ON_TRACK),
            (1.0, ProgressStatus.ON_TRACK),
            (1.5, ProgressStatus.ON_TRACK),
            (1.6, ProgressStatus.FAST),
        ],
    )
    def test_thresholds(self, ratio: float, status: ProgressStatus) -> None:
        assert classify_ratio(ratio) == status


class TestMalformedEntries:
    """Malformed records are skipped and counted."""

    def test_skipped_count(self, as_of: date) -> None:
        entries: list = [e.to_dict() for e in daily_weights(as_of, 10, 80, 0.0)]
        entries.append({"date": "not-a-date", "weight": 79})
        entries.append({"date": as_of.isoformat()})
        result = assess(entries, as_of)
        assert result.skipped_entries == 2
        assert result.days_in_window == 10

    def test_to_dict(self, as_of: date) -> None:
        data = assess(daily_weights(as_of, 30, 80, 0.0), as_of).to_dict()
        assert data["status"] == "slow"
        assert data["expected_weekly_loss"] == pytest.approx(1.0)
