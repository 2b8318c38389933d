"""Tests for the derived-plan cache."""

from __future__ import annotations

import pytest

from fitplan.errors import StaleRevisionError
from fitplan.models import ActivityLevel, Goal, Profile
from fitplan.planning.cache import PlanCache, plan_fingerprint


class TestPlanFingerprint:
    """Tests for input fingerprints."""

    def test_stable(self, profile: Profile, goal: Goal) -> None:
        assert plan_fingerprint(profile, goal) == plan_fingerprint(profile, goal)

    def test_changes_with_profile(self, profile: Profile, goal: Goal) -> None:
        edited = profile.updated(weight=79.5)
        assert plan_fingerprint(edited, goal) != plan_fingerprint(profile, goal)

    def test_changes_with_goal(self, profile: Profile, goal: Goal) -> None:
        edited = goal.updated(cardio_sessions=3)
        assert plan_fingerprint(profile, edited) != plan_fingerprint(profile, goal)


class TestPlanCacheGet:
    """Tests for cache hits and misses."""

    def test_hit_returns_cached_plan(self, profile: Profile, goal: Goal) -> None:
        cache = PlanCache()
        first = cache.get(1, profile, goal)
        assert cache.get(1, profile, goal) is first
        assert len(cache) == 1

    def test_changed_input_recomputes(self, profile: Profile, goal: Goal) -> None:
        cache = PlanCache()
        before = cache.get(1, profile, goal)
        after = cache.get(1, profile.updated(activity_level=ActivityLevel.SEDENTARY), goal)
        assert after.maintenance_calories == 2136
        assert after is not before

    def test_users_are_independent(self, profile: Profile, goal: Goal) -> None:
        cache = PlanCache()
        cache.get(1, profile, goal)
        cache.get(2, profile, goal.updated(target_weight=75))
        assert len(cache) == 2

    def test_settings_are_applied(self, profile: Profile, goal: Goal) -> None:
        cache = PlanCache(multipliers={ActivityLevel.MODERATELY: 1.2}, min_calories=1500)
        assert cache.get(1, profile, goal).maintenance_calories == 2136

    def test_invalidate(self, profile: Profile, goal: Goal) -> None:
        cache = PlanCache()
        first = cache.get(1, profile, goal)
        assert cache.invalidate(1)
        assert not cache.invalidate(1)
        assert cache.peek(1) is None
        assert cache.get(1, profile, goal) is not first

    def test_clear(self, profile: Profile, goal: Goal) -> None:
        cache = PlanCache()
        cache.get(1, profile, goal)
        cache.clear()
        assert len(cache) == 0


class TestPlanCacheCommit:
    """Tests for revisioned commits."""

    def test_commit_bumps_revision(self, profile: Profile, goal: Goal) -> None:
        cache = PlanCache()
        assert cache.revision(1) == 0
        entry = cache.commit(1, profile, goal, expected_revision=0)
        assert entry.revision == 1
        assert cache.revision(1) == 1
        assert cache.get(1, profile, goal) is entry.derived

    def test_stale_commit_rejected(self, profile: Profile, goal: Goal) -> None:
        """Two edits read revision 0; the second commit must not win."""
        cache = PlanCache()
        cache.commit(1, profile, goal.updated(target_weight=75), expected_revision=0)

        with pytest.raises(StaleRevisionError) as exc_info:
            cache.commit(1, profile, goal.updated(target_weight=72), expected_revision=0)

        assert exc_info.value.actual == 1
        assert cache.peek(1).derived == cache.get(1, profile, goal.updated(target_weight=75))

    def test_commit_under_user_lock(self, profile: Profile, goal: Goal) -> None:
        cache = PlanCache()
        with cache.user_lock(1):
            revision = cache.revision(1)
            entry = cache.commit(1, profile, goal, expected_revision=revision)
        assert entry.revision == revision + 1

    def test_user_lock_is_per_user(self) -> None:
        cache = PlanCache()
        assert cache.user_lock(1) is cache.user_lock(1)
        assert cache.user_lock(1) is not cache.user_lock(2)

    def test_invalidate_drops_user_lock(self, profile: Profile, goal: Goal) -> None:
        """Lock table shrinks with the entries instead of growing forever."""
        cache = PlanCache()
        old = cache.user_lock(1)
        cache.get(1, profile, goal)
        cache.invalidate(1)
        assert cache.user_lock(1) is not old
        assert cache.user_lock(2) is cache.user_lock(2)

    def test_invalidate_keeps_revision(self, profile: Profile, goal: Goal) -> None:
        cache = PlanCache()
        cache.commit(1, profile, goal, expected_revision=0)
        cache.invalidate(1)
        assert cache.revision(1) == 1
        with pytest.raises(StaleRevisionError):
            cache.commit(1, profile, goal, expected_revision=0)

    def test_clear_drops_user_locks(self) -> None:
        cache = PlanCache()
        old = cache.user_lock(1)
        cache.clear()
        assert cache.user_lock(1) is not old
