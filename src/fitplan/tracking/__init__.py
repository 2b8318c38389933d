"""Weight trend, progress and adherence tracking.

This module implements Hacker's Diet-style exponentially smoothed moving
average (EMA) for weight trend tracking, and compares logged reality with
the plan.

Key components:
- EMA trend calculation (10% smoothing, ~10 day time constant)
- Progress assessment (trend rate vs. goal rate over the last 14 days)
- Adherence scoring (streaks and weekly/total logging consistency)
- Log and body stat models
"""

from __future__ import annotations

from fitplan.tracking.adherence import AdherenceReport, assess_adherence
from fitplan.tracking.ema import calculate_trend, update_trend
from fitplan.tracking.models import BodyStatEntry, LogBook, LogEntry
from fitplan.tracking.progress import ProgressAssessment, assess_progress

__all__ = [
    "AdherenceReport",
    "BodyStatEntry",
    "LogBook",
    "LogEntry",
    "ProgressAssessment",
    "assess_adherence",
    "assess_progress",
    "calculate_trend",
    "update_trend",
]
