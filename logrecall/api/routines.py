"""Saved routine matching API endpoints."""

from fastapi import APIRouter

from logrecall.schemas.suggestions import MatchingRoutine, RoutineMatchRequest
from logrecall.services.routine_matching import find_matching_saved_routine

router = APIRouter(prefix="/api/v1/routines", tags=["routines"])


@router.post("/match", response_model=MatchingRoutine | None, response_model_exclude_none=True)
def match_saved_routine(request: RoutineMatchRequest):
    """Find the saved routine a workout matches, with per-exercise changes."""
    return find_matching_saved_routine(request.new_exercises, request.saved_routines)
