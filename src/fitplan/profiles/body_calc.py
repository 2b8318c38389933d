"""Body composition calculator for energy expenditure.

Calculates BMR and maintenance calories (TDEE) from body metrics, plus a few
body composition indicators (lean/fat mass, BMI, Navy body fat estimate).

Uses Mifflin-St Jeor equation for BMR as it's widely validated for
calculating resting metabolic rate.
"""

from __future__ import annotations

import math
from typing import Optional

from fitplan.models import ActivityLevel, Gender

# Activity level multipliers (Harris-Benedict activity factors).
# Every maintenance calculation goes through activity_multiplier(); callers
# that need different factors pass their own table rather than a constant.
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY: 1.375,
    ActivityLevel.MODERATELY: 1.55,
    ActivityLevel.VERY: 1.725,
}


def calculate_bmr(
    weight: float,
    height: float,
    age: int,
    gender: Gender,
) -> int:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        weight: Weight in kg
        height: Height in cm
        age: Age in years
        gender: Biological sex

    Returns:
        BMR in calories per day, rounded to the nearest integer
    """
    if gender == Gender.MALE:
        bmr = (10 * weight) + (6.25 * height) - (5 * age) + 5
    else:
        bmr = (10 * weight) + (6.25 * height) - (5 * age) - 161

    return round(bmr)


def activity_multiplier(
    activity_level: ActivityLevel,
    multipliers: Optional[dict[ActivityLevel, float]] = None,
) -> float:
    """Look up the TDEE multiplier for an activity level.

    Args:
        activity_level: Declared activity level
        multipliers: Optional override table (e.g. from settings); levels
            missing from it fall back to ACTIVITY_MULTIPLIERS

    Returns:
        Multiplier applied to BMR
    """
    if multipliers and activity_level in multipliers:
        return multipliers[activity_level]
    return ACTIVITY_MULTIPLIERS[activity_level]


def calculate_maintenance(
    bmr: float,
    activity_level: ActivityLevel,
    multipliers: Optional[dict[ActivityLevel, float]] = None,
) -> int:
    """Calculate maintenance calories (Total Daily Energy Expenditure).

    Args:
        bmr: Basal Metabolic Rate
        activity_level: Activity level
        multipliers: Optional override table, see activity_multiplier()

    Returns:
        TDEE in calories per day
    """
    return round(bmr * activity_multiplier(activity_level, multipliers))


def calculate_lean_mass(weight: float, body_fat_percentage: float) -> float:
    """Lean (fat-free) mass in kg, to one decimal."""
    return round(weight * (100 - body_fat_percentage) / 100, 1)


def calculate_fat_mass(weight: float, body_fat_percentage: float) -> float:
    """Fat mass in kg, to one decimal."""
    return round(weight * body_fat_percentage / 100, 1)


def calculate_bmi(weight: float, height: float) -> float:
    """Body Mass Index (kg/m²), to one decimal."""
    height_m = height / 100
    return round(weight / (height_m * height_m), 1)


def calculate_waist_to_height(waist: float, height: float) -> float:
    """Waist-to-height ratio, to two decimals."""
    return round(waist / height, 2)


def estimate_navy_body_fat(
    gender: Gender,
    waist: float,
    neck: float,
    height: float,
    hip: Optional[float] = None,
) -> Optional[float]:
    """Estimate body fat percentage with the U.S. Navy circumference method.

    All measurements in cm. Women need a hip measurement; without one (or with
    measurements that put the log argument at or below zero) the estimate is
    undefined and None is returned.
    """
    if gender == Gender.MALE:
        span = waist - neck
        if span <= 0:
            return None
        density = 1.0324 - 0.19077 * math.log10(span) + 0.15456 * math.log10(height)
    else:
        if hip is None:
            return None
        span = waist + hip - neck
        if span <= 0:
            return None
        density = 1.29579 - 0.35004 * math.log10(span) + 0.22100 * math.log10(height)

    return round(495 / density - 450, 1)
