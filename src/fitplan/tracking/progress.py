"""Actual-vs-expected progress assessment.

Compares the weekly loss implied by the smoothed weight trend over the most
recent two weeks against the average weekly loss the goal requires.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any, Iterable, Optional, Union

from fitplan.tracking.ema import DEFAULT_SMOOTHING, calculate_trend
from fitplan.tracking.models import BodyStatEntry, coerce_entries

logger = logging.getLogger(__name__)

WINDOW_DAYS = 14
MIN_DAYS_IN_WINDOW = 7
SLOW_RATIO = 0.5
FAST_RATIO = 1.5


class ProgressStatus(Enum):
    GATHERING = "gathering"
    SLOW = "slow"
    ON_TRACK = "on-track"
    FAST = "fast"


PROGRESS_MESSAGES = {
    ProgressStatus.GATHERING: (
        "Gathering data... Log your weight daily for more accurate tracking."
    ),
    ProgressStatus.SLOW: (
        "Progress is slower than planned. Consider adjusting your calories "
        "or increasing activity."
    ),
    ProgressStatus.FAST: (
        "Progress is faster than planned. This may be unsustainable - "
        "consider increasing calories slightly."
    ),
    ProgressStatus.ON_TRACK: (
        "You're on track with your weight loss goals. Keep going!"
    ),
}


@dataclass(frozen=True)
class ProgressAssessment:
    """Verdict on the recent rate of change."""

    status: ProgressStatus
    message: str
    days_in_window: int
    weekly_loss: Optional[float] = None
    expected_weekly_loss: Optional[float] = None
    ratio: Optional[float] = None
    skipped_entries: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "days_in_window": self.days_in_window,
            "weekly_loss": _rounded(self.weekly_loss),
            "expected_weekly_loss": _rounded(self.expected_weekly_loss),
            "ratio": _rounded(self.ratio),
            "skipped_entries": self.skipped_entries,
        }


def _rounded(value: Optional[float]) -> Optional[float]:
    return None if value is None else round(value, 2)


def classify_ratio(ratio: float) -> ProgressStatus:
    if ratio < SLOW_RATIO:
        return ProgressStatus.SLOW
    if ratio > FAST_RATIO:
        return ProgressStatus.FAST
    return ProgressStatus.ON_TRACK


def assess_progress(
    body_stats: Iterable[Union[BodyStatEntry, dict[str, Any]]],
    start_weight: float,
    target_weight: float,
    time_frame_weeks: int,
    as_of: Optional[date] = None,
    window_days: int = WINDOW_DAYS,
    min_days: int = MIN_DAYS_IN_WINDOW,
    smoothing: float = DEFAULT_SMOOTHING,
) -> ProgressAssessment:
    """Classify recent progress as gathering, slow, on-track or fast.

    The trend is smoothed over the full history, then only the entries in
    the ``window_days`` calendar days ending at ``as_of`` are compared.

    Args:
        body_stats: Body stat entries or plain records, any order
        start_weight: Weight at plan start (kg)
        target_weight: Target weight (kg)
        time_frame_weeks: Plan length in weeks
        as_of: Last day of the window (default: today)
        window_days: Window length in calendar days
        min_days: Logged days needed in the window before judging
        smoothing: Trend smoothing factor

    Returns:
        ProgressAssessment
    """
    as_of = as_of or date.today()
    entries, skipped = coerce_entries(body_stats, BodyStatEntry)
    entries = [e for e in entries if e.date <= as_of]

    trends = calculate_trend([e.weight for e in entries], smoothing)
    window_start = as_of - timedelta(days=window_days - 1)
    window = [
        (entry.date, trend)
        for entry, trend in zip(entries, trends)
        if entry.date >= window_start
    ]

    def verdict(status: ProgressStatus, **extra: Any) -> ProgressAssessment:
        return ProgressAssessment(
            status=status,
            message=PROGRESS_MESSAGES[status],
            days_in_window=len(window),
            skipped_entries=skipped,
            **extra,
        )

    if len(window) < min_days:
        return verdict(ProgressStatus.GATHERING)

    (first_date, first_trend), (last_date, last_trend) = window[0], window[-1]
    span_days = max(1, (last_date - first_date).days)
    weekly_loss = (first_trend - last_trend) / (span_days / 7)
    expected = (start_weight - target_weight) / time_frame_weeks

    if expected <= 0:
        # Maintenance goal: there is no rate to be slow or fast against
        logger.debug("expected weekly loss %.3f <= 0; maintenance goal", expected)
        return verdict(
            ProgressStatus.ON_TRACK,
            weekly_loss=weekly_loss,
            expected_weekly_loss=expected,
        )

    ratio = weekly_loss / expected
    return verdict(
        classify_ratio(ratio),
        weekly_loss=weekly_loss,
        expected_weekly_loss=expected,
        ratio=ratio,
    )
