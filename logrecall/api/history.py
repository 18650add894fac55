"""History reference API endpoints."""

from fastapi import APIRouter

from logrecall.schemas.history import (
    HistoryMatchRequest,
    HistoryMatchResponse,
    HistoryReferenceRequest,
    HistoryReferenceResponse,
)
from logrecall.services.history_lookup import find_similar_entry
from logrecall.services.history_patterns import detect_history_reference, min_similarity_for

router = APIRouter(prefix="/api/v1/history", tags=["history"])


@router.post("/reference", response_model=HistoryReferenceResponse)
def detect_reference(request: HistoryReferenceRequest):
    """Detect whether text refers to a previously logged entry."""
    reference = detect_history_reference(request.text)
    return HistoryReferenceResponse(
        **reference.model_dump(),
        min_similarity=min_similarity_for(reference.confidence),
    )


@router.post("/match", response_model=HistoryMatchResponse)
def match_reference(request: HistoryMatchRequest):
    """Resolve a history-referencing phrase to one of the recent entries.

    The similarity bar depends on how strongly the phrase implies history.
    """
    reference = detect_history_reference(request.text)
    if not reference.has_reference:
        return HistoryMatchResponse(reference=reference)

    match = find_similar_entry(
        request.text,
        request.recent_entries,
        min_similarity_for(reference.confidence),
    )
    return HistoryMatchResponse(reference=reference, match=match)
