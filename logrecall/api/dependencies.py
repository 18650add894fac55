"""FastAPI dependencies for the database-backed services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from logrecall.database import get_db
from logrecall.services.dismissals import DismissalTracker, SQLKeyValueStore
from logrecall.services.suggestions import SaveSuggestionService


def get_dismissal_tracker(
    db: Annotated[Session, Depends(get_db)],
) -> DismissalTracker:
    """Get dismissal tracker backed by the database."""
    return DismissalTracker(SQLKeyValueStore(db))


def get_suggestion_service(
    tracker: Annotated[DismissalTracker, Depends(get_dismissal_tracker)],
) -> SaveSuggestionService:
    """Get save suggestion service with dependencies."""
    return SaveSuggestionService(tracker)
