"""Exponentially smoothed moving average for weight tracking.

This implements the Hacker's Diet trend calculation:
    T_0 = W_0
    T_n = α × W_n + (1 - α) × T_{n-1}

With α = 0.1 (10%), this is a low-pass filter with roughly a 10-day time
constant. It removes daily noise from hydration, sodium, meal timing and
scale error while tracking the underlying fat-loss signal.

Reference: https://www.fourmilab.ch/hackdiet/
"""

from __future__ import annotations

from typing import Sequence

# Classic Hacker's Diet smoothing factor
DEFAULT_SMOOTHING = 0.1


def update_trend(
    prev_trend: float,
    today_weight: float,
    smoothing: float = DEFAULT_SMOOTHING,
) -> float:
    """
    Calculate a new trend value from the previous trend and today's weight.

    Args:
        prev_trend: Previous trend value (T_{n-1})
        today_weight: Today's scale weight (W_n)
        smoothing: Smoothing factor α, default 0.1
                   Higher values = more responsive, more noise
                   Lower values = smoother, more lag

    Returns:
        Today's trend value (T_n)

    Example:
        >>> round(update_trend(80.0, 79.0), 2)
        79.9
    """
    return smoothing * today_weight + (1 - smoothing) * prev_trend


def calculate_trend(
    weights: Sequence[float],
    smoothing: float = DEFAULT_SMOOTHING,
) -> list[float]:
    """
    Calculate trend values for a chronological series of daily weights.

    The first weight is used as the initial trend value.

    Args:
        weights: Weight measurements in chronological order
        smoothing: Smoothing factor α, default 0.1

    Returns:
        List of trend values, same length as weights (empty for empty input)

    Example:
        >>> [round(t, 3) for t in calculate_trend([80.0, 79.0, 79.5])]
        [80.0, 79.9, 79.86]
    """
    if not weights:
        return []

    trends = [float(weights[0])]
    for weight in weights[1:]:
        trends.append(update_trend(trends[-1], weight, smoothing))
    return trends


def estimate_weekly_change(trend_start: float, trend_end: float, days: float = 7) -> float:
    """
    Estimate weekly weight change from two trend values.

    Args:
        trend_start: Trend value at start of period
        trend_end: Trend value at end of period
        days: Days between the two values (must be > 0)

    Returns:
        Estimated weekly change in kg (negative = losing)
    """
    return (trend_end - trend_start) / days * 7
