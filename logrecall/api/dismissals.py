"""Dismissal API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from logrecall.api.dependencies import get_dismissal_tracker
from logrecall.schemas.dismissal import (
    DismissalCheckResponse,
    DismissalCreate,
    DismissalStatusResponse,
)
from logrecall.services.dismissals import DismissalTracker

router = APIRouter(prefix="/api/v1/dismissals", tags=["dismissals"])


def _status(tracker: DismissalTracker) -> DismissalStatusResponse:
    return DismissalStatusResponse(
        count=tracker.get_dismissal_count(),
        show_opt_out_link=tracker.should_show_opt_out_link(),
    )


@router.get("", response_model=DismissalStatusResponse)
def get_dismissal_status(
    tracker: Annotated[DismissalTracker, Depends(get_dismissal_tracker)],
):
    """Get the dismissal count and whether to offer the opt-out link."""
    return _status(tracker)


@router.get("/{signature_hash}", response_model=DismissalCheckResponse)
def check_dismissal(
    signature_hash: str,
    tracker: Annotated[DismissalTracker, Depends(get_dismissal_tracker)],
):
    """Check whether a suggestion has been dismissed."""
    return DismissalCheckResponse(
        signature_hash=signature_hash,
        dismissed=tracker.is_dismissed(signature_hash),
    )


@router.post("", response_model=DismissalStatusResponse, status_code=status.HTTP_201_CREATED)
def dismiss_suggestion(
    dismissal: DismissalCreate,
    tracker: Annotated[DismissalTracker, Depends(get_dismissal_tracker)],
):
    """Dismiss a save suggestion."""
    tracker.dismiss(dismissal.signature_hash)
    return _status(tracker)
