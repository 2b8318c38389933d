"""Data models for daily logs and body stats."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Iterable, Iterator, Optional, TypeVar, Union

from fitplan.errors import ValidationError
from fitplan.models import BODY_FAT_RANGE, WEIGHT_RANGE, check_range
from fitplan.profiles.activity import calculate_exercise_calories

logger = logging.getLogger(__name__)

MUSCLE_MASS_RANGE = (10.0, 100.0)


def parse_entry_date(value: Any) -> Optional[date]:
    """Parse a log date, returning None when it cannot be understood.

    Accepts date/datetime objects and ISO-8601 strings (a time part, as in
    ``2025-01-15T07:30:00``, is dropped).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def _optional_non_negative(field: str, value: Optional[float]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != value:
        raise ValidationError(field, f"must be a number, got {value!r}")
    if value < 0:
        raise ValidationError(field, f"must be >= 0, got {value!r}")


@dataclass(frozen=True)
class LogEntry:
    """One day's food and activity log."""

    date: date
    calories_in: int
    bmr: int = 0
    protein_in: Optional[int] = None
    fat_in: Optional[int] = None
    carbs_in: Optional[int] = None
    weight_training_minutes: Optional[int] = None
    cardio_minutes: Optional[int] = None
    step_count: Optional[int] = None
    weight: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.date, date):
            raise ValidationError("date", f"must be a date, got {self.date!r}")
        if self.calories_in is None:
            raise ValidationError("calories_in", "is required")
        for name in (
            "calories_in",
            "bmr",
            "protein_in",
            "fat_in",
            "carbs_in",
            "weight_training_minutes",
            "cardio_minutes",
            "step_count",
        ):
            _optional_non_negative(name, getattr(self, name))
        if self.weight is not None:
            check_range("weight", self.weight, WEIGHT_RANGE)

    @property
    def exercise_calories(self) -> int:
        return calculate_exercise_calories(
            self.weight_training_minutes or 0,
            self.cardio_minutes or 0,
            self.step_count or 0,
        )

    @property
    def calories_out(self) -> int:
        return self.bmr + self.exercise_calories

    @property
    def deficit(self) -> int:
        return self.calories_out - self.calories_in

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEntry":
        entry_date = parse_entry_date(data.get("date"))
        if entry_date is None:
            raise ValidationError("date", f"unparseable date {data.get('date')!r}")
        fields = {
            k: v for k, v in data.items()
            if k in cls.__dataclass_fields__ and k != "date" and v is not None
        }
        return cls(date=entry_date, **fields)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        data["calories_out"] = self.calories_out
        data["deficit"] = self.deficit
        return data


@dataclass(frozen=True)
class BodyStatEntry:
    """One day's body measurements."""

    date: date
    weight: float
    body_fat: Optional[float] = None
    muscle_mass: Optional[float] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.date, date):
            raise ValidationError("date", f"must be a date, got {self.date!r}")
        check_range("weight", self.weight, WEIGHT_RANGE)
        if self.body_fat is not None:
            check_range("body_fat", self.body_fat, BODY_FAT_RANGE)
        if self.muscle_mass is not None:
            check_range("muscle_mass", self.muscle_mass, MUSCLE_MASS_RANGE)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BodyStatEntry":
        entry_date = parse_entry_date(data.get("date"))
        if entry_date is None:
            raise ValidationError("date", f"unparseable date {data.get('date')!r}")
        if data.get("weight") is None:
            raise ValidationError("weight", "is required")
        fields = {
            k: v for k, v in data.items()
            if k in cls.__dataclass_fields__ and k != "date" and v is not None
        }
        return cls(date=entry_date, **fields)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data


EntryT = TypeVar("EntryT", LogEntry, BodyStatEntry)


def coerce_entries(
    records: Iterable[Union[EntryT, dict[str, Any]]],
    entry_cls: type[EntryT],
) -> tuple[list[EntryT], int]:
    """Turn mixed records into validated entries, one per date.

    Plain dict records are parsed with ``entry_cls.from_dict``; records that
    fail (unparseable date, bad values) are skipped and counted rather than
    aborting the whole computation. Later records for the same date replace
    earlier ones.

    Returns:
        Tuple of (entries sorted by date, number of skipped records)
    """
    by_date: dict[date, EntryT] = {}
    skipped = 0
    for record in records:
        if isinstance(record, entry_cls):
            entry = record
        else:
            try:
                entry = entry_cls.from_dict(dict(record))
            except (ValidationError, TypeError, ValueError) as exc:
                logger.warning("skipping malformed %s: %s", entry_cls.__name__, exc)
                skipped += 1
                continue
        by_date[entry.date] = entry

    return [by_date[d] for d in sorted(by_date)], skipped


class LogBook:
    """A user's daily logs, one entry per date.

    Writing a second entry for the same date replaces the first, so a day
    can be corrected but never double-counted.
    """

    def __init__(self, user_id: int, entries: Iterable[LogEntry] = ()):
        self.user_id = user_id
        self._entries: dict[date, LogEntry] = {}
        for entry in entries:
            self.upsert(entry)

    def upsert(self, entry: LogEntry) -> Optional[LogEntry]:
        """Store an entry, returning the one it replaced (if any)."""
        previous = self._entries.get(entry.date)
        self._entries[entry.date] = entry
        return previous

    def get(self, day: date) -> Optional[LogEntry]:
        return self._entries.get(day)

    def remove(self, day: date) -> bool:
        return self._entries.pop(day, None) is not None

    def entries(self, since: Optional[date] = None) -> list[LogEntry]:
        """Entries in chronological order, optionally from a date on."""
        days = sorted(d for d in self._entries if since is None or d >= since)
        return [self._entries[d] for d in days]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries())

    def __contains__(self, day: object) -> bool:
        return day in self._entries
