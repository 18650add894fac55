"""Enums shared by models and schemas."""

from enum import Enum


class ConfidenceTier(str, Enum):
    """How strongly a phrase implies a reference to a past entry."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SuggestionReason(str, Enum):
    """Why a save suggestion was or was not surfaced."""

    SUGGEST = "suggest"
    NO_PATTERN = "no_pattern"
    DISMISSED = "dismissed"
    FROM_TEMPLATE = "from_template"

    def is_shown(self) -> bool:
        """Check if this reason means the prompt should be displayed."""
        return self == SuggestionReason.SUGGEST
