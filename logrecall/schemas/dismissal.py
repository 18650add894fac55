"""Dismissal schemas."""

from pydantic import BaseModel, Field


class DismissalCreate(BaseModel):
    """Dismiss a save suggestion."""

    signature_hash: str = Field(..., min_length=1, max_length=128)


class DismissalCheckResponse(BaseModel):
    """Whether one suggestion has been dismissed."""

    signature_hash: str
    dismissed: bool


class DismissalStatusResponse(BaseModel):
    """Overall dismissal state."""

    count: int
    show_opt_out_link: bool
