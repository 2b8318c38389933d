"""Tests for activity calorie estimates."""

from __future__ import annotations

import pytest

from fitplan.profiles.activity import calculate_activity_calories, calculate_exercise_calories


class TestActivityCalories:
    """Tests for the weekly activity plan estimate."""

    def test_reference_plan(self) -> None:
        """3 lifting + 2 cardio + 10k steps: 750 + 600 + 2800."""
        energy = calculate_activity_calories(3, 2, 10000)
        assert energy.weekly_activity_calories == pytest.approx(4150)
        assert energy.daily_activity_calories == 593

    def test_steps_only(self) -> None:
        energy = calculate_activity_calories(0, 0, 1000)
        assert energy.weekly_activity_calories == pytest.approx(280)
        assert energy.daily_activity_calories == 40

    def test_daily_is_weekly_over_seven(self) -> None:
        energy = calculate_activity_calories(7, 7, 25000)
        assert energy.daily_activity_calories == round(energy.weekly_activity_calories / 7)


class TestExerciseCalories:
    """Tests for one day's logged exercise."""

    def test_logged_day(self) -> None:
        """45 min lifting + 20 min cardio + 9000 steps: 225 + 200 + 360."""
        assert calculate_exercise_calories(45, 20, 9000) == 785

    def test_nothing_logged(self) -> None:
        assert calculate_exercise_calories() == 0
