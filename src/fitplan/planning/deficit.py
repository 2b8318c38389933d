"""Daily calorie deficit scheduling.

Spreads the energy deficit needed to reach the target weight over the days
that actually carry a deficit (diet-break weeks and refeed days excluded),
then applies two safety rules:

- the daily deficit is capped at ``deficit_rate × 1000`` kcal, which keeps
  the loss near or below ~1% of body weight per week;
- the daily calorie target never drops below MIN_DAILY_CALORIES.

Declared activity calories offset the deficit before it is taken out of
food, so an active plan eats closer to maintenance.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)

# 7700 kcal ≈ 1 kg of adipose tissue
KCAL_PER_KG = 7700
MIN_DAILY_CALORIES = 1200
REFEED_MULTIPLIER = 1.05


@dataclass(frozen=True)
class DeficitPlan:
    """Result of deficit scheduling."""

    total_weight_loss: float
    total_calorie_deficit: float
    total_days_with_deficit: float
    raw_daily_deficit: int
    daily_deficit_cap: int
    daily_deficit: int
    daily_calorie_target: int
    is_aggressive: bool
    refeed_day_calories: int
    diet_break_calories: int

    @property
    def is_maintenance(self) -> bool:
        return self.daily_deficit == 0

    @property
    def weekly_deficit(self) -> int:
        return self.daily_deficit * 7

    @property
    def weekly_fat_loss_kg(self) -> float:
        """Expected fat loss per deficit week from the capped deficit."""
        return round(self.weekly_deficit / KCAL_PER_KG, 2)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["weekly_deficit"] = self.weekly_deficit
        data["weekly_fat_loss_kg"] = self.weekly_fat_loss_kg
        return data


def floor_calorie_target(
    calories: float,
    min_calories: int = MIN_DAILY_CALORIES,
) -> int:
    """Round a calorie target and enforce the safety minimum.

    ``min_calories`` can raise the floor above MIN_DAILY_CALORIES but never
    lower it.
    """
    floor = max(MIN_DAILY_CALORIES, min_calories)
    target = round(calories)
    if target < floor:
        logger.debug("calorie target %d raised to safety floor %d", target, floor)
        return floor
    return target


def schedule_deficit(
    current_weight: float,
    target_weight: float,
    time_frame_weeks: int,
    maintenance_calories: int,
    daily_activity_calories: int,
    deficit_rate: float,
    refeed_days: int = 0,
    diet_break_weeks: int = 0,
    min_calories: int = MIN_DAILY_CALORIES,
) -> DeficitPlan:
    """Compute the daily deficit and calorie target for a goal.

    Args:
        current_weight: Current weight in kg
        target_weight: Target weight in kg
        time_frame_weeks: Total plan length in weeks, diet breaks included
        maintenance_calories: Maintenance calories (TDEE)
        daily_activity_calories: Average daily calories from planned activity
        deficit_rate: Weekly loss rate in percent of body weight (0.25-1.0)
        refeed_days: Refeed days per deficit week
        diet_break_weeks: Weeks eaten at maintenance
        min_calories: Safety floor for the daily calorie target

    Returns:
        DeficitPlan. A goal at or above current weight, or one whose diet
        breaks and refeeds leave no deficit days, is a maintenance plan with
        a zero deficit.
    """
    # A target at or above current weight is a maintenance/recomposition plan
    total_weight_loss = max(0.0, current_weight - target_weight)
    total_calorie_deficit = total_weight_loss * KCAL_PER_KG

    effective_days = (time_frame_weeks - diet_break_weeks) * 7
    refeed_days_total = refeed_days * (effective_days / 7)
    total_days_with_deficit = effective_days - refeed_days_total

    daily_deficit_cap = round(deficit_rate * 1000)

    if total_days_with_deficit <= 0:
        logger.debug(
            "no deficit days (%d weeks, %d diet-break weeks, %d refeed days); "
            "treating as maintenance",
            time_frame_weeks, diet_break_weeks, refeed_days,
        )
        raw_daily_deficit = 0
        daily_deficit = 0
    else:
        raw_daily_deficit = round(total_calorie_deficit / total_days_with_deficit)
        daily_deficit = min(raw_daily_deficit, daily_deficit_cap)
        if daily_deficit < raw_daily_deficit:
            logger.debug(
                "daily deficit %d capped at %d", raw_daily_deficit, daily_deficit_cap
            )

    # Activity calories cover part of the deficit; food covers the rest
    food_deficit = max(0, daily_deficit - daily_activity_calories)
    daily_calorie_target = floor_calorie_target(
        maintenance_calories - food_deficit, min_calories
    )

    return DeficitPlan(
        total_weight_loss=total_weight_loss,
        total_calorie_deficit=total_calorie_deficit,
        total_days_with_deficit=max(0.0, float(total_days_with_deficit)),
        raw_daily_deficit=raw_daily_deficit,
        daily_deficit_cap=daily_deficit_cap,
        daily_deficit=daily_deficit,
        daily_calorie_target=daily_calorie_target,
        is_aggressive=raw_daily_deficit > daily_deficit_cap,
        refeed_day_calories=round(maintenance_calories * REFEED_MULTIPLIER),
        diet_break_calories=maintenance_calories,
    )
