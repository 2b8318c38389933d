"""Plan file and log history loaders."""

from __future__ import annotations

from fitplan.data.loaders import (
    LoadResult,
    PlanFile,
    load_body_stats,
    load_daily_logs,
    load_plan_file,
)

__all__ = [
    "LoadResult",
    "PlanFile",
    "load_body_stats",
    "load_daily_logs",
    "load_plan_file",
]
