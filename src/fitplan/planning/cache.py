"""Explicit cache for derived plans.

Entries are keyed by user and validated against a fingerprint of the exact
{Profile, Goal} inputs that produced them, so a stale plan is never served
after either input changes. Writers must either hold ``user_lock`` or use
``commit`` with the revision they read; a commit built on an older revision
is rejected instead of overwriting a newer edit.
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fitplan.errors import StaleRevisionError
from fitplan.models import ActivityLevel, Goal, Profile
from fitplan.planning.engine import DerivedGoal, derive_goal

logger = logging.getLogger(__name__)


def plan_fingerprint(profile: Profile, goal: Goal) -> str:
    """Stable SHA-256 digest of the inputs that determine a plan."""
    payload = {"profile": profile.to_dict(), "goal": goal.to_dict()}
    encoded = json.dumps(
        payload,
        sort_keys=True,
        default=lambda o: o.value if isinstance(o, Enum) else str(o),
    )
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class CachedPlan:
    """A derived plan with the fingerprint and revision it was stored under."""

    fingerprint: str
    revision: int
    derived: DerivedGoal


class PlanCache:
    """In-memory key→value store of derived plans, one entry per user."""

    def __init__(
        self,
        multipliers: Optional[dict[ActivityLevel, float]] = None,
        min_calories: Optional[int] = None,
    ):
        self._multipliers = multipliers
        self._min_calories = min_calories
        self._entries: dict[int, CachedPlan] = {}
        self._revisions: dict[int, int] = {}
        self._lock = threading.Lock()
        self._user_locks: dict[int, threading.RLock] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _derive(self, profile: Profile, goal: Goal) -> DerivedGoal:
        if self._min_calories is None:
            return derive_goal(profile, goal, self._multipliers)
        return derive_goal(profile, goal, self._multipliers, self._min_calories)

    def user_lock(self, user_id: int) -> threading.RLock:
        """Lock serializing read-modify-write of one user's plan."""
        with self._lock:
            lock = self._user_locks.get(user_id)
            if lock is None:
                lock = self._user_locks[user_id] = threading.RLock()
            return lock

    def revision(self, user_id: int) -> int:
        """Current revision for a user (0 before the first commit)."""
        with self._lock:
            return self._revisions.get(user_id, 0)

    def peek(self, user_id: int) -> Optional[CachedPlan]:
        with self._lock:
            return self._entries.get(user_id)

    def get(self, user_id: int, profile: Profile, goal: Goal) -> DerivedGoal:
        """Return the cached plan when inputs match, recomputing otherwise."""
        fingerprint = plan_fingerprint(profile, goal)
        with self._lock:
            entry = self._entries.get(user_id)
        if entry is not None and entry.fingerprint == fingerprint:
            return entry.derived

        logger.debug("plan cache miss for user %s", user_id)
        derived = self._derive(profile, goal)
        with self._lock:
            revision = self._revisions.get(user_id, 0)
            self._entries[user_id] = CachedPlan(fingerprint, revision, derived)
        return derived

    def commit(
        self,
        user_id: int,
        profile: Profile,
        goal: Goal,
        expected_revision: int,
    ) -> CachedPlan:
        """Recompute and store a user's plan after a profile or goal edit.

        Args:
            user_id: User whose plan changed
            profile: Profile after the edit
            goal: Goal after the edit
            expected_revision: Revision the caller read before editing

        Returns:
            The stored CachedPlan with its new revision

        Raises:
            StaleRevisionError: another commit landed after the caller's read
        """
        derived = self._derive(profile, goal)
        fingerprint = plan_fingerprint(profile, goal)
        with self.user_lock(user_id):
            with self._lock:
                current = self._revisions.get(user_id, 0)
                if current != expected_revision:
                    raise StaleRevisionError(user_id, expected_revision, current)
                entry = CachedPlan(fingerprint, current + 1, derived)
                self._revisions[user_id] = entry.revision
                self._entries[user_id] = entry
        return entry

    def invalidate(self, user_id: int) -> bool:
        """Drop a user's cached plan and lock. Returns True if a plan was present.

        A thread already holding the old lock keeps its reference; the next
        ``user_lock`` call for the user gets a fresh one. Revisions are kept, so
        a commit built on a revision read before the call is still checked.
        """
        with self._lock:
            self._user_locks.pop(user_id, None)
            return self._entries.pop(user_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._user_locks.clear()
