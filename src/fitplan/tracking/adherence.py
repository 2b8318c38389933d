"""Logging adherence: streaks and consistency scores.

Adherence measures whether the user keeps logging, independent of whether
the weight trend is moving as planned.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any, Iterable, Optional, Union

from fitplan.tracking.models import LogEntry, coerce_entries

DEFAULT_WEEKLY_TARGET = 80
STREAK_WINDOW_DAYS = 30
ON_TARGET_TOLERANCE = 0.10
MIN_WEEKLY_LOGS = 3
NEEDS_ATTENTION_FRACTION = 0.7


class AdherenceStatus(Enum):
    ON_TRACK = "on-track"
    NEEDS_ATTENTION = "needs-attention"
    OFF_TRACK = "off-track"


@dataclass(frozen=True)
class AdherenceReport:
    """Consistency verdict for a log history."""

    streak: int
    weekly_adherence: int
    total_adherence: int
    days_logged: int
    days_on_target: int
    status: AdherenceStatus
    skipped_entries: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "streak": self.streak,
            "weekly_adherence": self.weekly_adherence,
            "total_adherence": self.total_adherence,
            "days_logged": self.days_logged,
            "days_on_target": self.days_on_target,
            "status": self.status.value,
            "skipped_entries": self.skipped_entries,
        }


def is_on_target(calories_in: float, daily_calorie_target: float) -> bool:
    """Whether intake is within 10% of the daily calorie target."""
    return abs(calories_in - daily_calorie_target) <= ON_TARGET_TOLERANCE * daily_calorie_target


def count_streak(
    logged_days: set[date],
    as_of: date,
    window_days: int = STREAK_WINDOW_DAYS,
) -> int:
    """Consecutive logged days ending at as_of.

    Today (``as_of``) may be missing without breaking the streak, since the
    user may simply not have logged yet. The scan looks back at most
    ``window_days`` days.
    """
    streak = 0
    for offset in range(window_days):
        if as_of - timedelta(days=offset) in logged_days:
            streak += 1
        elif offset != 0:
            break
    return streak


def weekly_adherence(logged_days: set[date], as_of: date) -> int:
    """Percent of the last 7 days (as_of included) that have a log.

    Fewer than 3 logged days reports 0 rather than a low percentage built
    on one or two data points.
    """
    week_start = as_of - timedelta(days=6)
    count = sum(1 for day in logged_days if week_start <= day <= as_of)
    if count < MIN_WEEKLY_LOGS:
        return 0
    return round(count / 7 * 100)


def classify_adherence(weekly: float, target: float) -> AdherenceStatus:
    if weekly >= target:
        return AdherenceStatus.ON_TRACK
    if weekly >= NEEDS_ATTENTION_FRACTION * target:
        return AdherenceStatus.NEEDS_ATTENTION
    return AdherenceStatus.OFF_TRACK


def assess_adherence(
    logs: Iterable[Union[LogEntry, dict[str, Any]]],
    start_date: date,
    daily_calorie_target: float,
    weekly_adherence_target: float = DEFAULT_WEEKLY_TARGET,
    as_of: Optional[date] = None,
    streak_window_days: int = STREAK_WINDOW_DAYS,
) -> AdherenceReport:
    """Score logging consistency for a plan.

    Args:
        logs: Log entries or plain records, any order
        start_date: First day of the plan
        daily_calorie_target: Plan's daily calorie target
        weekly_adherence_target: Weekly adherence (%) counted as on-track
        as_of: Day the report is computed for (default: today)
        streak_window_days: How far back the streak scan looks

    Returns:
        AdherenceReport. Malformed records are excluded and counted in
        ``skipped_entries``.
    """
    as_of = as_of or date.today()
    entries, skipped = coerce_entries(logs, LogEntry)
    entries = [e for e in entries if e.date <= as_of]
    logged_days = {e.date for e in entries}

    days_on_target = sum(
        1 for e in entries if is_on_target(e.calories_in, daily_calorie_target)
    )
    weekly = weekly_adherence(logged_days, as_of)

    # Inclusive count of plan days, start day and as_of both included
    days_since_start = (as_of - start_date).days + 1
    logs_since_start = sum(1 for day in logged_days if day >= start_date)
    total = round(logs_since_start / max(1, days_since_start) * 100)

    return AdherenceReport(
        streak=count_streak(logged_days, as_of, streak_window_days),
        weekly_adherence=weekly,
        total_adherence=total,
        days_logged=len(entries),
        days_on_target=days_on_target,
        status=classify_adherence(weekly, weekly_adherence_target),
        skipped_entries=skipped,
    )
