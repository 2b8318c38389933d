"""Projected weight trajectory.

Weight loss is modelled as a fixed percentage of the *current* weight per
week, not of the starting weight, so the absolute weekly loss shrinks as the
weight falls and the curve bends toward the target instead of running in a
straight line:

    W_i = max(target, W_{i-1} - rate × W_{i-1}),  rate = deficit_rate / 100

An optional water-weight drop (glycogen and water lost at deficit onset) is
applied once, in week 1 only.

The series always has ``time_frame_weeks + 1`` points. Once the target is
reached the remaining weeks repeat it, so charts keep a continuous x-axis.
"""

from __future__ import annotations

from dataclasses import dataclass

# Extra week-1 loss as a fraction of start weight (commonly 1-2%)
WATER_WEIGHT_FRACTION = 0.015

# Safety limit for weeks_to_goal simulations (two years)
MAX_SIMULATED_WEEKS = 104


@dataclass(frozen=True)
class ProjectionPoint:
    """Projected weight at the end of a plan week."""

    week: int
    projected_weight: float

    def to_dict(self) -> dict:
        return {"week": self.week, "projected_weight": round(self.projected_weight, 1)}


def landing_rate(
    start_weight: float,
    target_weight: float,
    time_frame_weeks: int,
) -> float:
    """Deficit rate (percent per week) whose curve ends exactly on the target.

    Returns:
        Percent of current weight lost per week, 0 for maintenance goals
    """
    if target_weight >= start_weight or time_frame_weeks <= 0:
        return 0.0
    return (1 - (target_weight / start_weight) ** (1 / time_frame_weeks)) * 100


def project_weight_loss(
    start_weight: float,
    target_weight: float,
    time_frame_weeks: int,
    deficit_rate: float,
    include_water_weight: bool = False,
    water_weight_fraction: float = WATER_WEIGHT_FRACTION,
) -> list[ProjectionPoint]:
    """Project weekly weights from start toward target.

    Args:
        start_weight: Weight at week 0 (kg)
        target_weight: Target weight (kg); a target at or above start gives
            a flat series
        time_frame_weeks: Number of weeks to project
        deficit_rate: Weekly loss in percent of current weight (0.5 = 0.5%)
        include_water_weight: Apply the week-1 water-weight drop
        water_weight_fraction: Week-1 extra loss as a fraction of start weight

    Returns:
        ``time_frame_weeks + 1`` points, monotonically non-increasing and
        never below the target
    """
    floor = min(start_weight, target_weight)
    rate = deficit_rate / 100

    points = [ProjectionPoint(0, start_weight)]
    weight = start_weight
    for week in range(1, time_frame_weeks + 1):
        loss = rate * weight
        if week == 1 and include_water_weight and target_weight < start_weight:
            loss += water_weight_fraction * start_weight
        weight = max(floor, weight - loss)
        points.append(ProjectionPoint(week, weight))

    return points


def weeks_to_goal(
    current_weight: float,
    target_weight: float,
    deficit_rate: float,
) -> int:
    """Number of weeks the weekly-percentage model needs to reach a target.

    Args:
        current_weight: Current weight (kg)
        target_weight: Target weight (kg)
        deficit_rate: Weekly loss in percent of body weight (0.5 = 0.5%)

    Returns:
        Weeks until within 0.1 kg of target, capped at MAX_SIMULATED_WEEKS;
        0 when the target is not below the current weight
    """
    if target_weight >= current_weight or deficit_rate <= 0:
        return 0

    weight = current_weight
    weeks = 0
    while weight > target_weight and weeks < MAX_SIMULATED_WEEKS:
        weight -= weight * deficit_rate / 100
        weeks += 1
        if weight <= target_weight + 0.1:
            break

    return weeks
