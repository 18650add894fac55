"""Save suggestion API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from logrecall.api.dependencies import get_suggestion_service
from logrecall.schemas.suggestions import (
    ExerciseSuggestionRequest,
    FoodSuggestionRequest,
    SaveSuggestionVerdict,
)
from logrecall.services.suggestions import SaveSuggestionService

router = APIRouter(prefix="/api/v1/suggestions", tags=["suggestions"])


@router.post("/food", response_model=SaveSuggestionVerdict, response_model_exclude_none=True)
def evaluate_food_entry(
    request: FoodSuggestionRequest,
    service: Annotated[SaveSuggestionService, Depends(get_suggestion_service)],
):
    """Decide whether to offer saving a just-logged food entry as a meal."""
    return service.evaluate_food(
        request.new_items,
        request.recent_entries,
        from_saved_meal=request.from_saved_meal,
    )


@router.post("/exercise", response_model=SaveSuggestionVerdict, response_model_exclude_none=True)
def evaluate_exercise_entry(
    request: ExerciseSuggestionRequest,
    service: Annotated[SaveSuggestionService, Depends(get_suggestion_service)],
):
    """Decide whether to offer saving a just-logged workout as a routine."""
    return service.evaluate_exercise(
        request.new_exercises,
        request.recent_entries,
        saved_routines=request.saved_routines,
        from_saved_routine=request.from_saved_routine,
    )
