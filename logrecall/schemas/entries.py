"""Read-only projections of logged entries and saved templates.

These carry only the fields the matching engine looks at. Numeric fields never
fail validation: anything that does not parse as a number becomes zero, so a
malformed entry degrades to "no match" instead of an error.
"""

import math
from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

OLDEST = datetime.min.replace(tzinfo=UTC)


def as_aware(value: datetime | None) -> datetime:
    """Make a timestamp comparable: naive means UTC, missing means oldest."""
    if value is None:
        return OLDEST
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def coerce_number(value: Any) -> float:
    """Parse a number leniently, returning 0.0 for anything unusable."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _coerce_id(value: Any) -> Any:
    # Hosts hand us UUID strings, ints or UUID objects
    if value is None or isinstance(value, str):
        return value
    return str(value)


class EntryModel(BaseModel):
    """Base for engine inputs: immutable, tolerant of extra fields."""

    model_config = ConfigDict(frozen=True, extra="ignore", from_attributes=True)


class FoodItem(EntryModel):
    """One food line inside an entry or a saved meal."""

    description: str = ""
    name: str | None = None
    portion: str | None = None
    calories: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def fill_description(cls, data: Any) -> Any:
        """Derive a description from name/portion when none was stored."""
        if isinstance(data, dict) and not data.get("description"):
            name = data.get("name") or ""
            portion = data.get("portion")
            data = {**data, "description": f"{name} ({portion})" if name and portion else name}
        return data

    @field_validator("calories", mode="before")
    @classmethod
    def parse_calories(cls, value: Any) -> float:
        return coerce_number(value)


class FoodEntry(EntryModel):
    """A previously logged food entry."""

    id: str
    eaten_date: date | None = None
    created_at: datetime | None = None
    raw_input: str | None = None
    food_items: list[FoodItem] = Field(default_factory=list)
    total_calories: float = 0.0
    source_meal_id: str | None = None

    @model_validator(mode="before")
    @classmethod
    def fill_total_calories(cls, data: Any) -> Any:
        """Sum item calories when the total was not supplied."""
        if isinstance(data, dict) and data.get("total_calories") is None:
            items = data.get("food_items") or []
            total = sum(
                coerce_number(
                    item.get("calories") if isinstance(item, dict) else getattr(item, "calories", 0)
                )
                for item in items
            )
            data = {**data, "total_calories": total}
        return data

    @field_validator("id", "source_meal_id", mode="before")
    @classmethod
    def parse_ids(cls, value: Any) -> Any:
        return _coerce_id(value)

    @field_validator("total_calories", mode="before")
    @classmethod
    def parse_total(cls, value: Any) -> float:
        return coerce_number(value)

    @property
    def from_saved_meal(self) -> bool:
        """Check if this entry was created by logging a saved meal."""
        return bool(self.source_meal_id)

    @property
    def items_description(self) -> str:
        return " ".join(item.description for item in self.food_items)


class ExerciseSet(EntryModel):
    """One exercise with its numeric parameters."""

    exercise_key: str
    description: str = ""
    sets: int = 0
    reps: int = 0
    weight_lbs: float = 0.0
    duration_minutes: float | None = None
    distance_miles: float | None = None

    @field_validator("sets", "reps", mode="before")
    @classmethod
    def parse_counts(cls, value: Any) -> int:
        return int(coerce_number(value))

    @field_validator("weight_lbs", mode="before")
    @classmethod
    def parse_weight(cls, value: Any) -> float:
        return coerce_number(value)

    @field_validator("duration_minutes", "distance_miles", mode="before")
    @classmethod
    def parse_optional(cls, value: Any) -> float | None:
        if value is None:
            return None
        return coerce_number(value)


class ExerciseSetRow(EntryModel):
    """A flat per-exercise row as stored by the persistence layer."""

    entry_id: str
    logged_date: date | None = None
    exercise_key: str
    source_routine_id: str | None = None

    @field_validator("entry_id", "source_routine_id", mode="before")
    @classmethod
    def parse_ids(cls, value: Any) -> Any:
        return _coerce_id(value)


class ExerciseEntry(EntryModel):
    """A previously logged exercise entry, reduced to its exercise keys."""

    entry_id: str
    logged_date: date | None = None
    exercise_keys: frozenset[str] = frozenset()
    source_routine_id: str | None = None

    @field_validator("entry_id", "source_routine_id", mode="before")
    @classmethod
    def parse_ids(cls, value: Any) -> Any:
        return _coerce_id(value)

    @property
    def from_saved_routine(self) -> bool:
        """Check if this entry was created by logging a saved routine."""
        return bool(self.source_routine_id)


class SavedRoutine(EntryModel):
    """A user-saved routine. Read only; the host owns its lifecycle."""

    id: str
    name: str
    exercise_sets: list[ExerciseSet] = Field(default_factory=list)
    use_count: int = 0
    last_used_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def parse_id(cls, value: Any) -> Any:
        return _coerce_id(value)

    @field_validator("use_count", mode="before")
    @classmethod
    def parse_use_count(cls, value: Any) -> int:
        return int(coerce_number(value))

    @property
    def exercise_keys(self) -> frozenset[str]:
        return frozenset(exercise.exercise_key for exercise in self.exercise_sets)
