"""Exceptions raised by the planning engine."""

from __future__ import annotations


class ValidationError(ValueError):
    """An input field is missing, of the wrong type, or out of range.

    Attributes:
        field: Name of the offending field
        constraint: Human-readable description of the violated constraint
    """

    def __init__(self, field: str, constraint: str):
        self.field = field
        self.constraint = constraint
        super().__init__(f"{field}: {constraint}")

    def to_dict(self) -> dict:
        return {"field": self.field, "constraint": self.constraint}


class StaleRevisionError(RuntimeError):
    """A plan commit was based on an outdated revision."""

    def __init__(self, user_id: int, expected: int, actual: int):
        self.user_id = user_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"user {user_id}: commit based on revision {expected}, "
            f"current revision is {actual}"
        )
