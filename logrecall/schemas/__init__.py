"""Pydantic schemas for engine inputs, verdicts, and API requests."""

from logrecall.schemas.dismissal import (
    DismissalCheckResponse,
    DismissalCreate,
    DismissalStatusResponse,
)
from logrecall.schemas.entries import (
    ExerciseEntry,
    ExerciseSet,
    ExerciseSetRow,
    FoodEntry,
    FoodItem,
    SavedRoutine,
)
from logrecall.schemas.suggestions import (
    ExerciseDiff,
    ExerciseSaveSuggestion,
    FoodSaveSuggestion,
    HistoryReference,
    MatchingRoutine,
    SaveSuggestionVerdict,
    SimilarEntryMatch,
)

__all__ = [
    "FoodItem",
    "FoodEntry",
    "ExerciseSet",
    "ExerciseSetRow",
    "ExerciseEntry",
    "SavedRoutine",
    "HistoryReference",
    "SimilarEntryMatch",
    "FoodSaveSuggestion",
    "ExerciseSaveSuggestion",
    "ExerciseDiff",
    "MatchingRoutine",
    "SaveSuggestionVerdict",
    "DismissalCreate",
    "DismissalCheckResponse",
    "DismissalStatusResponse",
]
