"""Pytest fixtures for fitplan tests."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
import yaml

from fitplan.models import ActivityLevel, Gender, Goal, Profile

AS_OF = date(2025, 3, 1)


@pytest.fixture
def profile() -> Profile:
    """80 kg, 180 cm, 30 year old moderately active male."""
    return Profile(
        age=30,
        gender=Gender.MALE,
        height=180,
        weight=80,
        activity_level=ActivityLevel.MODERATELY,
    )


@pytest.fixture
def goal() -> Goal:
    """Lose 10 kg in 12 weeks at 0.5%/week with a 3+2 session plan."""
    return Goal(
        target_weight=70,
        time_frame_weeks=12,
        deficit_rate=0.5,
        lifting_sessions=3,
        cardio_sessions=2,
        steps_per_day=10000,
    )


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def plan_data() -> dict:
    return {
        "profile": {
            "age": 30,
            "gender": "male",
            "height": 180,
            "weight": 80,
            "activity_level": "moderately",
        },
        "goal": {
            "target_weight": 70,
            "time_frame_weeks": 12,
            "deficit_rate": 0.5,
            "lifting_sessions": 3,
            "cardio_sessions": 2,
            "steps_per_day": 10000,
            "start_date": "2025-02-01",
        },
    }


@pytest.fixture
def plan_file(tmp_path: Path, plan_data: dict) -> Path:
    """Write the standard plan to a YAML file."""
    path = tmp_path / "plan.yaml"
    path.write_text(yaml.safe_dump(plan_data))
    return path
