"""Projected weight trajectories."""

from __future__ import annotations

from fitplan.projection.trajectory import (
    ProjectionPoint,
    landing_rate,
    project_weight_loss,
    weeks_to_goal,
)

__all__ = ["ProjectionPoint", "landing_rate", "project_weight_loss", "weeks_to_goal"]
