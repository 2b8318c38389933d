"""Calorie deficit scheduling and macro allocation.

Key components:
- Deficit scheduling with a rate cap and a 1200 kcal floor
- Macro allocation with a body-weight protein floor
- The derive_goal chain that produces every derived goal field
- An explicit, fingerprint-keyed cache of derived plans
"""

from __future__ import annotations

from fitplan.planning.cache import PlanCache, plan_fingerprint
from fitplan.planning.engine import DerivedGoal, adjust_calorie_target, derive_goal

__all__ = [
    "DerivedGoal",
    "PlanCache",
    "adjust_calorie_target",
    "derive_goal",
    "plan_fingerprint",
]
