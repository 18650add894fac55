"""History reference schemas."""

from pydantic import BaseModel, Field

from logrecall.schemas.entries import FoodEntry
from logrecall.schemas.suggestions import HistoryReference, SimilarEntryMatch


class HistoryReferenceRequest(BaseModel):
    """Text typed into the food log."""

    text: str = Field(..., max_length=2000)


class HistoryReferenceResponse(HistoryReference):
    """Detected reference plus the similarity a match must reach."""

    min_similarity: float


class HistoryMatchRequest(BaseModel):
    """Text plus the recent entries it may refer to."""

    text: str = Field(..., max_length=2000)
    recent_entries: list[FoodEntry] = Field(default_factory=list)


class HistoryMatchResponse(BaseModel):
    """Detected reference and the entry it resolved to, if any."""

    reference: HistoryReference
    match: SimilarEntryMatch | None = None
