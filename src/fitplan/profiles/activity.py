"""Activity energy estimates.

These are additive approximations with fixed burn rates, not measured
values:

- Weight lifting session: 250 kcal
- Cardio session: 300 kcal
- Steps: 400 kcal per 10,000 steps per day

For a single logged day the rates are per minute / per step instead.
"""

from __future__ import annotations

from dataclasses import dataclass

LIFTING_SESSION_KCAL = 250
CARDIO_SESSION_KCAL = 300
KCAL_PER_10K_STEPS = 400

# Per-day logging rates
LIFTING_KCAL_PER_MINUTE = 5
CARDIO_KCAL_PER_MINUTE = 10
KCAL_PER_STEP = 0.04


@dataclass(frozen=True)
class ActivityEnergy:
    """Calories attributed to the declared weekly activity plan."""

    weekly_activity_calories: float
    daily_activity_calories: int


def calculate_activity_calories(
    lifting_sessions: int,
    cardio_sessions: int,
    steps_per_day: int,
) -> ActivityEnergy:
    """Estimate calories burned by a weekly exercise plan."""
    lifting = lifting_sessions * LIFTING_SESSION_KCAL
    cardio = cardio_sessions * CARDIO_SESSION_KCAL
    steps = (steps_per_day / 10000) * KCAL_PER_10K_STEPS * 7

    weekly = lifting + cardio + steps
    return ActivityEnergy(
        weekly_activity_calories=weekly,
        daily_activity_calories=round(weekly / 7),
    )


def calculate_exercise_calories(
    weight_training_minutes: float = 0,
    cardio_minutes: float = 0,
    step_count: float = 0,
) -> int:
    """Estimate calories burned by one day's logged exercise."""
    return round(
        weight_training_minutes * LIFTING_KCAL_PER_MINUTE
        + cardio_minutes * CARDIO_KCAL_PER_MINUTE
        + step_count * KCAL_PER_STEP
    )
