"""Fitness transformation planning and projection engine.

Derives calorie and macro targets from a profile and goal, projects the
expected weight curve, smooths logged weights into a trend, and scores
progress and logging adherence against the plan.
"""

from __future__ import annotations

__version__ = "0.1.0"
