"""Decide whether to offer "save as meal/routine" after an entry is logged."""

import logging
from collections.abc import Sequence

from logrecall.models.enums import SuggestionReason
from logrecall.schemas.entries import ExerciseEntry, ExerciseSet, FoodEntry, FoodItem, SavedRoutine
from logrecall.schemas.suggestions import SaveSuggestionVerdict
from logrecall.services.dismissals import DismissalTracker
from logrecall.services.repeated_entry import (
    detect_repeated_food_entry,
    detect_repeated_weight_entry,
)
from logrecall.services.routine_matching import find_matching_saved_routine

logger = logging.getLogger(__name__)


class SaveSuggestionService:
    """Service combining repetition detection with the user's dismissals."""

    def __init__(self, tracker: DismissalTracker):
        self.tracker = tracker

    def _verdict(self, reason: SuggestionReason, **kwargs) -> SaveSuggestionVerdict:
        return SaveSuggestionVerdict(
            suggest=reason.is_shown(),
            reason=reason,
            show_opt_out_link=self.tracker.should_show_opt_out_link(),
            **kwargs,
        )

    def evaluate_food(
        self,
        new_items: Sequence[FoodItem],
        recent_entries: Sequence[FoodEntry],
        from_saved_meal: bool = False,
    ) -> SaveSuggestionVerdict:
        """Evaluate a just-logged food entry."""
        if from_saved_meal:
            return self._verdict(SuggestionReason.FROM_TEMPLATE)

        suggestion = detect_repeated_food_entry(new_items, recent_entries)
        if suggestion is None:
            return self._verdict(SuggestionReason.NO_PATTERN)

        if self.tracker.is_dismissed(suggestion.signature_hash):
            logger.debug(f"Suppressing dismissed food suggestion {suggestion.signature_hash}")
            return self._verdict(SuggestionReason.DISMISSED)

        return self._verdict(SuggestionReason.SUGGEST, suggestion=suggestion)

    def evaluate_exercise(
        self,
        new_exercises: Sequence[ExerciseSet],
        recent_entries: Sequence[ExerciseEntry],
        saved_routines: Sequence[SavedRoutine] = (),
        from_saved_routine: bool = False,
    ) -> SaveSuggestionVerdict:
        """Evaluate a just-logged workout.

        When the workout also resembles a saved routine, the match is attached
        so the caller can offer to update that routine instead of saving a new one.
        """
        if from_saved_routine:
            return self._verdict(SuggestionReason.FROM_TEMPLATE)

        suggestion = detect_repeated_weight_entry(new_exercises, recent_entries)
        if suggestion is None:
            return self._verdict(SuggestionReason.NO_PATTERN)

        if self.tracker.is_dismissed(suggestion.signature_hash):
            logger.debug(f"Suppressing dismissed workout suggestion {suggestion.signature_hash}")
            return self._verdict(SuggestionReason.DISMISSED)

        return self._verdict(
            SuggestionReason.SUGGEST,
            suggestion=suggestion,
            matching_routine=find_matching_saved_routine(new_exercises, saved_routines),
        )
