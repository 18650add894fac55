"""Detect manually repeated entries worth saving as a meal or routine.

A suggestion fires once the same food combination or workout has been logged
by hand at least twice before. Entries created from a saved meal or routine
are ignored: reusing a template is not an organic repetition.
"""

import hashlib
import logging
from collections.abc import Iterable, Sequence, Set

from logrecall.schemas.entries import (
    ExerciseEntry,
    ExerciseSet,
    ExerciseSetRow,
    FoodEntry,
    FoodItem,
)
from logrecall.schemas.suggestions import ExerciseSaveSuggestion, FoodSaveSuggestion
from logrecall.services.text_similarity import jaccard_similarity, preprocess_text

logger = logging.getLogger(__name__)

MIN_PRIOR_MATCHES = 2
FOOD_TEXT_SIMILARITY = 0.4
# Relative calorie difference tolerated between two logs of the "same" food
FOOD_CALORIE_TOLERANCE = 0.4
EXERCISE_KEY_SIMILARITY = 0.7


def _short_hash(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest()[:16]


def hash_signature(signature: str) -> str:
    """Create a stable hash for a food signature."""
    return _short_hash(signature)


def hash_exercise_keys(keys: Iterable[str]) -> str:
    """Create a stable, order-independent hash for a set of exercise keys."""
    return _short_hash("|".join(sorted(set(keys))))


def key_set_similarity(a: Set[str], b: Set[str]) -> float:
    """Jaccard similarity of two exercise-key sets (0 when both are empty)."""
    union = len(a | b)
    return len(a & b) / union if union else 0.0


def group_exercise_rows(rows: Iterable[ExerciseSetRow]) -> list[ExerciseEntry]:
    """Group per-exercise rows into entries by entry_id.

    The first row seen for an entry decides its date and routine source.
    """
    grouped: dict[str, dict] = {}
    for row in rows:
        existing = grouped.get(row.entry_id)
        if existing:
            existing["exercise_keys"].add(row.exercise_key)
        else:
            grouped[row.entry_id] = {
                "entry_id": row.entry_id,
                "logged_date": row.logged_date,
                "exercise_keys": {row.exercise_key},
                "source_routine_id": row.source_routine_id,
            }
    return [ExerciseEntry(**data) for data in grouped.values()]


def _calories_close(new_calories: float, history_calories: float) -> bool:
    calorie_diff = abs(new_calories - history_calories) / max(history_calories, 1)
    return calorie_diff <= FOOD_CALORIE_TOLERANCE


def detect_repeated_food_entry(
    new_items: Sequence[FoodItem],
    recent_entries: Sequence[FoodEntry],
    min_matches: int = MIN_PRIOR_MATCHES,
) -> FoodSaveSuggestion | None:
    """Detect if new food items repeat a combination logged 2+ times before.

    A past entry counts when both hold:
    1. Jaccard similarity of the signatures is at least 0.4
    2. Its total calories are within 40% of the new items' calories
    """
    if not new_items or not recent_entries:
        return None

    new_signature = preprocess_text(" ".join(item.description for item in new_items))
    new_calories = sum(item.calories for item in new_items)

    matches = [
        entry
        for entry in recent_entries
        if not entry.from_saved_meal
        and jaccard_similarity(new_signature, preprocess_text(entry.items_description))
        >= FOOD_TEXT_SIMILARITY
        and _calories_close(new_calories, entry.total_calories)
    ]

    if len(matches) < min_matches:
        return None

    logger.info(f"Repeated food entry '{new_signature}' found {len(matches)} prior matches")
    return FoodSaveSuggestion(
        match_count=len(matches) + 1,  # includes the entry just logged
        signature_hash=hash_signature(new_signature),
        items=list(new_items),
        matched_entry_ids=[entry.id for entry in matches],
    )


def detect_repeated_weight_entry(
    new_exercises: Sequence[ExerciseSet],
    recent_entries: Sequence[ExerciseEntry],
    min_matches: int = MIN_PRIOR_MATCHES,
) -> ExerciseSaveSuggestion | None:
    """Detect if new exercises repeat a workout logged 2+ times before.

    Only the set of exercise keys is compared (Jaccard >= 0.7); sets, reps and
    weight are ignored so that progression still counts as the same workout.
    """
    if not new_exercises or not recent_entries:
        return None

    new_keys = frozenset(exercise.exercise_key for exercise in new_exercises)

    matches = [
        entry
        for entry in recent_entries
        if not entry.from_saved_routine
        and key_set_similarity(new_keys, entry.exercise_keys) >= EXERCISE_KEY_SIMILARITY
    ]

    if len(matches) < min_matches:
        return None

    logger.info(f"Repeated workout {sorted(new_keys)} found {len(matches)} prior matches")
    return ExerciseSaveSuggestion(
        match_count=len(matches) + 1,
        signature_hash=hash_exercise_keys(new_keys),
        exercises=list(new_exercises),
        matched_entry_ids=[entry.entry_id for entry in matches],
    )
