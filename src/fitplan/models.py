"""Profile and goal input models.

Both models are immutable and validate every field on construction, so the
engine never sees an out-of-range value. Use ``from_dict`` to build them from
plain records (YAML, JSON, database rows) and ``updated`` to apply an edit.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Optional

from fitplan.errors import ValidationError


class Gender(Enum):
    """Biological sex for BMR calculation."""
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Declared day-to-day activity level."""
    SEDENTARY = "sedentary"      # Little or no exercise
    LIGHTLY = "lightly"          # Light exercise 1-3 days/week
    MODERATELY = "moderately"    # Moderate exercise 3-5 days/week
    VERY = "very"                # Hard exercise 6-7 days/week


class DietaryPreference(Enum):
    """Dietary pattern used to seed the macro split."""
    STANDARD = "standard"
    KETO = "keto"
    PALEO = "paleo"
    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    MEDITERRANEAN = "mediterranean"


class DeficitType(Enum):
    """Named deficit rates (percent of body weight per week)."""
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


DEFICIT_TYPE_RATES = {
    DeficitType.MODERATE: 0.5,
    DeficitType.AGGRESSIVE: 1.0,
}

# Inclusive bounds shared by validation and the CLI help text
AGE_RANGE = (18, 120)
HEIGHT_RANGE = (100.0, 250.0)
WEIGHT_RANGE = (30.0, 300.0)
BODY_FAT_RANGE = (3.0, 60.0)
TIME_FRAME_RANGE = (1, 52)
DEFICIT_RATE_RANGE = (0.25, 1.0)
SESSIONS_RANGE = (0, 7)
STEPS_RANGE = (1000, 25000)
REFEED_RANGE = (0, 7)


def check_range(
    field: str,
    value: Any,
    bounds: tuple[float, float],
    integer: bool = False,
) -> None:
    """Raise ValidationError unless value is a number inside bounds."""
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(field, f"must be a number, got {value!r}")
    if integer and not float(value).is_integer():
        raise ValidationError(field, f"must be a whole number, got {value!r}")
    if value != value or not (low <= value <= high):
        raise ValidationError(field, f"must be between {low} and {high}, got {value!r}")


def parse_enum(enum_cls: type[Enum], field: str, value: Any) -> Enum:
    """Coerce a string (case-insensitive) or enum member to enum_cls."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    choices = ", ".join(member.value for member in enum_cls)
    raise ValidationError(field, f"must be one of {choices}, got {value!r}")


def _check_member(enum_cls: type[Enum], field: str, value: Any) -> None:
    if not isinstance(value, enum_cls):
        raise ValidationError(field, f"must be a {enum_cls.__name__}, got {value!r}")


def _plain(data: dict[str, Any]) -> dict[str, Any]:
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in data.items()}


@dataclass(frozen=True)
class Profile:
    """Anthropometric profile captured at onboarding.

    ``bmr`` is computed from age, gender, height and weight on every access,
    so it cannot drift from the fields that produce it.
    """

    age: int
    gender: Gender
    height: float  # cm
    weight: float  # kg
    activity_level: ActivityLevel
    body_fat_percentage: Optional[float] = None
    dietary_preference: Optional[DietaryPreference] = None

    def __post_init__(self) -> None:
        check_range("age", self.age, AGE_RANGE, integer=True)
        _check_member(Gender, "gender", self.gender)
        check_range("height", self.height, HEIGHT_RANGE)
        check_range("weight", self.weight, WEIGHT_RANGE)
        _check_member(ActivityLevel, "activity_level", self.activity_level)
        if self.body_fat_percentage is not None:
            check_range("body_fat_percentage", self.body_fat_percentage, BODY_FAT_RANGE)
        if self.dietary_preference is not None:
            _check_member(DietaryPreference, "dietary_preference", self.dietary_preference)

    @property
    def bmr(self) -> int:
        from fitplan.profiles.body_calc import calculate_bmr

        return calculate_bmr(self.weight, self.height, self.age, self.gender)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Build a Profile from a plain record, coercing enum strings.

        A ``bmr`` key in the record is ignored; it is always derived.
        """
        for required in ("age", "gender", "height", "weight", "activity_level"):
            if data.get(required) is None:
                raise ValidationError(required, "is required")

        preference = data.get("dietary_preference")
        return cls(
            age=data["age"],
            gender=parse_enum(Gender, "gender", data["gender"]),
            height=data["height"],
            weight=data["weight"],
            activity_level=parse_enum(
                ActivityLevel, "activity_level", data["activity_level"]
            ),
            body_fat_percentage=data.get("body_fat_percentage"),
            dietary_preference=(
                parse_enum(DietaryPreference, "dietary_preference", preference)
                if preference is not None
                else None
            ),
        )

    def updated(self, **changes: Any) -> "Profile":
        """Return a new, re-validated Profile with changes applied."""
        if "bmr" in changes:
            raise ValidationError("bmr", "is derived and cannot be edited")
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data = _plain(asdict(self))
        data["bmr"] = self.bmr
        return data


@dataclass(frozen=True)
class Goal:
    """Weight goal and weekly activity plan.

    ``current_weight`` may be left unset, in which case the profile's weight
    is used when the plan is derived. ``deficit_rate`` is the intended loss in
    percent of body weight per week; when unset, ``deficit_type`` names one.
    """

    target_weight: float
    time_frame_weeks: int
    current_weight: Optional[float] = None
    deficit_rate: Optional[float] = None
    deficit_type: DeficitType = DeficitType.MODERATE
    lifting_sessions: int = 0
    cardio_sessions: int = 0
    steps_per_day: int = 10000
    refeed_days: int = 0
    diet_break_weeks: int = 0

    def __post_init__(self) -> None:
        check_range("target_weight", self.target_weight, WEIGHT_RANGE)
        check_range("time_frame_weeks", self.time_frame_weeks, TIME_FRAME_RANGE, integer=True)
        if self.current_weight is not None:
            check_range("current_weight", self.current_weight, WEIGHT_RANGE)
        if self.deficit_rate is not None:
            check_range("deficit_rate", self.deficit_rate, DEFICIT_RATE_RANGE)
        _check_member(DeficitType, "deficit_type", self.deficit_type)
        check_range("lifting_sessions", self.lifting_sessions, SESSIONS_RANGE, integer=True)
        check_range("cardio_sessions", self.cardio_sessions, SESSIONS_RANGE, integer=True)
        check_range("steps_per_day", self.steps_per_day, STEPS_RANGE, integer=True)
        check_range("refeed_days", self.refeed_days, REFEED_RANGE, integer=True)
        check_range(
            "diet_break_weeks",
            self.diet_break_weeks,
            (0, self.time_frame_weeks),
            integer=True,
        )

    @property
    def effective_deficit_rate(self) -> float:
        """Explicit deficit rate, or the rate named by deficit_type."""
        if self.deficit_rate is not None:
            return self.deficit_rate
        return DEFICIT_TYPE_RATES[self.deficit_type]

    def resolve_current_weight(self, profile: Profile) -> float:
        return self.current_weight if self.current_weight is not None else profile.weight

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Goal":
        """Build a Goal from a plain record.

        Accepts the persisted field names (``time_frame``,
        ``weight_lifting_sessions``) as aliases.
        """
        data = dict(data)
        aliases = {
            "time_frame": "time_frame_weeks",
            "weight_lifting_sessions": "lifting_sessions",
        }
        for alias, name in aliases.items():
            if alias in data and name not in data:
                data[name] = data.pop(alias)

        for required in ("target_weight", "time_frame_weeks"):
            if data.get(required) is None:
                raise ValidationError(required, "is required")

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(unknown[0], "is not a goal field")

        if "deficit_type" in data and data["deficit_type"] is not None:
            data["deficit_type"] = parse_enum(DeficitType, "deficit_type", data["deficit_type"])
        else:
            data.pop("deficit_type", None)
        return cls(**{k: v for k, v in data.items() if v is not None})

    def updated(self, **changes: Any) -> "Goal":
        """Return a new, re-validated Goal with changes applied."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))
