"""Plan derivation: profile + goal → calorie and macro targets.

``derive_goal`` is the only producer of derived goal fields. Interactive
previews, the CLI and any persistence layer all call it, and every edit to a
profile or goal re-runs the whole chain instead of patching stored values:

    BMR → maintenance → activity calories → deficit schedule → macros
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Optional

from fitplan.models import ActivityLevel, Goal, Profile
from fitplan.planning.deficit import (
    MIN_DAILY_CALORIES,
    floor_calorie_target,
    schedule_deficit,
)
from fitplan.planning.macros import MacroTargets, allocate_macros
from fitplan.profiles.activity import calculate_activity_calories
from fitplan.profiles.body_calc import calculate_maintenance


@dataclass(frozen=True)
class DerivedGoal:
    """Derived plan fields, a pure function of {Profile, Goal}.

    ``daily_deficit`` is the scheduled deficit after the rate cap.
    ``implied_daily_deficit`` is the net deficit the calorie target delivers
    once planned activity calories are counted.
    """

    bmr: int
    maintenance_calories: int
    daily_calorie_target: int
    daily_deficit: int
    implied_daily_deficit: int
    protein_grams: int
    fat_grams: int
    carb_grams: int
    weekly_activity_calories: float
    daily_activity_calories: int
    refeed_day_calories: int
    diet_break_calories: int
    is_aggressive: bool
    total_days_with_deficit: float
    weekly_fat_loss_kg: float

    def to_dict(self) -> dict:
        return asdict(self)


def implied_deficit(
    maintenance_calories: int,
    daily_activity_calories: int,
    daily_calorie_target: int,
) -> int:
    """Net daily deficit of eating daily_calorie_target, activity included."""
    return max(0, maintenance_calories + daily_activity_calories - daily_calorie_target)


def derive_goal(
    profile: Profile,
    goal: Goal,
    multipliers: Optional[dict[ActivityLevel, float]] = None,
    min_calories: int = MIN_DAILY_CALORIES,
) -> DerivedGoal:
    """Run the full planning chain for a profile and goal.

    Args:
        profile: Validated profile
        goal: Validated goal
        multipliers: Optional activity multiplier override table
        min_calories: Safety floor for the daily calorie target

    Returns:
        DerivedGoal
    """
    current_weight = goal.resolve_current_weight(profile)
    bmr = profile.bmr
    maintenance = calculate_maintenance(bmr, profile.activity_level, multipliers)
    activity = calculate_activity_calories(
        goal.lifting_sessions, goal.cardio_sessions, goal.steps_per_day
    )

    deficit = schedule_deficit(
        current_weight=current_weight,
        target_weight=goal.target_weight,
        time_frame_weeks=goal.time_frame_weeks,
        maintenance_calories=maintenance,
        daily_activity_calories=activity.daily_activity_calories,
        deficit_rate=goal.effective_deficit_rate,
        refeed_days=goal.refeed_days,
        diet_break_weeks=goal.diet_break_weeks,
        min_calories=min_calories,
    )

    macros = allocate_macros(
        current_weight=current_weight,
        daily_calorie_target=deficit.daily_calorie_target,
        body_fat_percentage=profile.body_fat_percentage,
        dietary_preference=profile.dietary_preference,
    )

    return DerivedGoal(
        bmr=bmr,
        maintenance_calories=maintenance,
        daily_calorie_target=deficit.daily_calorie_target,
        daily_deficit=deficit.daily_deficit,
        implied_daily_deficit=implied_deficit(
            maintenance, activity.daily_activity_calories, deficit.daily_calorie_target
        ),
        protein_grams=macros.protein_grams,
        fat_grams=macros.fat_grams,
        carb_grams=macros.carb_grams,
        weekly_activity_calories=activity.weekly_activity_calories,
        daily_activity_calories=activity.daily_activity_calories,
        refeed_day_calories=deficit.refeed_day_calories,
        diet_break_calories=deficit.diet_break_calories,
        is_aggressive=deficit.is_aggressive,
        total_days_with_deficit=deficit.total_days_with_deficit,
        weekly_fat_loss_kg=deficit.weekly_fat_loss_kg,
    )


def adjust_calorie_target(
    profile: Profile,
    goal: Goal,
    derived: DerivedGoal,
    requested_calories: float,
    min_calories: int = MIN_DAILY_CALORIES,
) -> DerivedGoal:
    """Apply a user-chosen calorie target to a derived plan.

    The requested value is floored at the safety minimum and the macros are
    re-allocated for it. The scheduled ``daily_deficit`` is unchanged;
    ``implied_daily_deficit`` is recomputed for the new target.
    """
    target = floor_calorie_target(requested_calories, min_calories)
    macros = allocate_macros(
        current_weight=goal.resolve_current_weight(profile),
        daily_calorie_target=target,
        body_fat_percentage=profile.body_fat_percentage,
        dietary_preference=profile.dietary_preference,
    )
    return replace(
        derived,
        daily_calorie_target=target,
        implied_daily_deficit=implied_deficit(
            derived.maintenance_calories, derived.daily_activity_calories, target
        ),
        protein_grams=macros.protein_grams,
        fat_grams=macros.fat_grams,
        carb_grams=macros.carb_grams,
    )


def refeed_day_macros(profile: Profile, goal: Goal, derived: DerivedGoal) -> MacroTargets:
    """Macro targets for a refeed day at the plan's refeed calories."""
    return allocate_macros(
        current_weight=goal.resolve_current_weight(profile),
        daily_calorie_target=derived.refeed_day_calories,
        body_fat_percentage=profile.body_fat_percentage,
        dietary_preference=profile.dietary_preference,
        refeed_day=True,
    )
