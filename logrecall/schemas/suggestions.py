"""Save suggestion and verdict schemas."""

from typing import Literal

from pydantic import BaseModel, Field

from logrecall.models.enums import ConfidenceTier, SuggestionReason
from logrecall.schemas.entries import ExerciseEntry, ExerciseSet, FoodEntry, FoodItem, SavedRoutine


class HistoryReference(BaseModel):
    """Whether a phrase refers to a past entry, and how strongly."""

    has_reference: bool
    confidence: ConfidenceTier
    matched_patterns: list[str] = Field(default_factory=list)


class SimilarEntryMatch(BaseModel):
    """The past food entry a history-referencing phrase most likely means."""

    entry: FoodEntry
    score: float
    match_type: Literal["items", "input"]


class FoodSaveSuggestion(BaseModel):
    """Offer to save a repeatedly logged food combination as a meal."""

    match_count: int
    signature_hash: str
    items: list[FoodItem]
    matched_entry_ids: list[str] = Field(default_factory=list)


class ExerciseSaveSuggestion(BaseModel):
    """Offer to save a repeatedly logged workout as a routine."""

    match_count: int
    signature_hash: str
    exercises: list[ExerciseSet]
    matched_entry_ids: list[str] = Field(default_factory=list)


class ExerciseDiff(BaseModel):
    """Signed change of one new exercise against its saved counterpart.

    A field is None when the value did not change.
    """

    index: int
    exercise_key: str
    sets: int | None = None
    reps: int | None = None
    weight_lbs: float | None = None


class MatchingRoutine(BaseModel):
    """A saved routine the new workout closely resembles."""

    id: str
    name: str
    similarity: float
    diffs: list[ExerciseDiff] = Field(default_factory=list)


class SaveSuggestionVerdict(BaseModel):
    """Final suggest/suppress decision handed back to the logging flow."""

    suggest: bool
    reason: SuggestionReason
    suggestion: FoodSaveSuggestion | ExerciseSaveSuggestion | None = None
    matching_routine: MatchingRoutine | None = None
    show_opt_out_link: bool = False


class FoodSuggestionRequest(BaseModel):
    """A just-logged food entry and recent food history."""

    new_items: list[FoodItem]
    recent_entries: list[FoodEntry] = Field(default_factory=list)
    from_saved_meal: bool = False


class ExerciseSuggestionRequest(BaseModel):
    """A just-logged workout, recent workouts and saved routines."""

    new_exercises: list[ExerciseSet]
    recent_entries: list[ExerciseEntry] = Field(default_factory=list)
    saved_routines: list[SavedRoutine] = Field(default_factory=list)
    from_saved_routine: bool = False


class RoutineMatchRequest(BaseModel):
    """A workout to compare against saved routines."""

    new_exercises: list[ExerciseSet]
    saved_routines: list[SavedRoutine] = Field(default_factory=list)
