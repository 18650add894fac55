"""Detect phrases that refer back to previously logged entries.

Patterns live in one registry of (name, tier, compiled regex). Detection walks
the tiers from strongest to weakest evidence and stops at the first tier that
has any match, reporting every pattern that matched within that tier.
"""

import logging
import re
from typing import NamedTuple

from logrecall.models.enums import ConfidenceTier
from logrecall.schemas.suggestions import HistoryReference

logger = logging.getLogger(__name__)

DAYS_OF_WEEK = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

MONTHS = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)  # fmt: skip

MEALS = ("breakfast", "lunch", "dinner", "brunch")

TIER_ORDER = (ConfidenceTier.HIGH, ConfidenceTier.MEDIUM, ConfidenceTier.LOW)

# Strong evidence of a history reference allows looser text matching; weak
# evidence has to be backed by a near-identical description.
MIN_SIMILARITY_REQUIRED = {
    ConfidenceTier.HIGH: 0.35,
    ConfidenceTier.MEDIUM: 0.45,
    ConfidenceTier.LOW: 0.55,
}


class HistoryPattern(NamedTuple):
    """A named history-reference pattern and the tier it belongs to."""

    name: str
    tier: ConfidenceTier
    regex: re.Pattern[str]


def _month_alternation() -> str:
    # "jan(?:uary)?", "may", plus the common "sept"
    names = [month[:3] + (f"(?:{month[3:]})?" if len(month) > 3 else "") for month in MONTHS]
    return "|".join(["sept", *names])


def _pattern(name: str, tier: ConfidenceTier, regex: str) -> HistoryPattern:
    return HistoryPattern(name, tier, re.compile(regex, re.IGNORECASE))


_DAYS = "|".join(DAYS_OF_WEEK)
_MONTHS = "|".join(MONTHS)
_MONTH_NAMES = _month_alternation()
_MEALS = "|".join(MEALS)

HISTORY_PATTERNS: tuple[HistoryPattern, ...] = (
    # HIGH: explicit dates
    _pattern("day_of_week", ConfidenceTier.HIGH, rf"\b(?:{_DAYS})\b"),
    _pattern("yesterday", ConfidenceTier.HIGH, r"\byesterday(?:['’]?s)?\b"),
    _pattern(
        "month_day", ConfidenceTier.HIGH, rf"\b(?:{_MONTH_NAMES})\.?\s+\d{{1,2}}(?:st|nd|rd|th)?\b"
    ),
    _pattern("numeric_date", ConfidenceTier.HIGH, r"\b(?:from|on)\s*\d{1,2}/\d{1,2}\b"),
    _pattern("day_before", ConfidenceTier.HIGH, r"\bday\s+before\s+yesterday\b"),
    # HIGH: continuing a portion that was already logged
    _pattern("other_half", ConfidenceTier.HIGH, r"\bother\s+half\b"),
    _pattern("rest_of", ConfidenceTier.HIGH, r"\brest\s+of\b"),
    _pattern("leftover", ConfidenceTier.HIGH, r"\bleftovers?\b"),
    _pattern("remaining", ConfidenceTier.HIGH, r"\bremaining\b"),
    _pattern("finished", ConfidenceTier.HIGH, r"\bfinished\b"),
    # MEDIUM: vague time references
    _pattern("other_day", ConfidenceTier.MEDIUM, r"\bthe\s+other\s+day\b"),
    _pattern("earlier", ConfidenceTier.MEDIUM, r"\bearlier\b"),
    _pattern("recently", ConfidenceTier.MEDIUM, r"\brecent(?:ly)?\b"),
    _pattern("last_time", ConfidenceTier.MEDIUM, r"\blast\s+time\b"),
    _pattern("last_week", ConfidenceTier.MEDIUM, r"\blast\s+week\b"),
    _pattern(
        "few_days_ago", ConfidenceTier.MEDIUM, r"\b(?:a\s+)?(?:few|couple(?:\s+of)?)\s+days\s+ago\b"
    ),
    _pattern("a_while_ago", ConfidenceTier.MEDIUM, r"\ba\s+while\s+ago\b"),
    _pattern("had_before", ConfidenceTier.MEDIUM, r"\b(?:had|ate|from)\s+before\b"),
    _pattern("in_month", ConfidenceTier.MEDIUM, rf"\b(?:in|back\s+in|during)\s+(?:{_MONTHS})\b"),
    # MEDIUM: repetition
    _pattern("same_thing", ConfidenceTier.MEDIUM, r"\b(?:same\s+thing|same\s+as|the\s+same)\b"),
    _pattern("again", ConfidenceTier.MEDIUM, r"\b(?:that|it)\s+again\b"),
    _pattern("another", ConfidenceTier.MEDIUM, r"\banother\b"),
    _pattern("repeat", ConfidenceTier.MEDIUM, r"\brepeat\b"),
    _pattern("more_of", ConfidenceTier.MEDIUM, r"\bmore\s+of\s+(?:the|that|those)\b"),
    # LOW: meal times, which may just say when something new was eaten
    _pattern("from_meal", ConfidenceTier.LOW, rf"\bfrom\s+(?:{_MEALS})\b"),
    _pattern("this_morning", ConfidenceTier.LOW, r"\bthis\s+morning\b"),
    _pattern("earlier_today", ConfidenceTier.LOW, r"\bearlier\s+today\b"),
    _pattern("last_night", ConfidenceTier.LOW, r"\blast\s+night\b"),
)


def patterns_for_tier(tier: ConfidenceTier) -> list[HistoryPattern]:
    """Get the registered patterns of one tier, in registry order."""
    return [pattern for pattern in HISTORY_PATTERNS if pattern.tier == tier]


def min_similarity_for(tier: ConfidenceTier) -> float:
    """Minimum hybrid score a candidate entry needs for a given tier."""
    return MIN_SIMILARITY_REQUIRED[tier]


def detect_history_reference(text: str | None) -> HistoryReference:
    """Detect if input text refers to a past entry.

    Examples:
    - "the pizza from yesterday" -> high (yesterday)
    - "another tilapia" -> medium (another)
    - "eggs from breakfast" -> low (from_meal)
    - "2 eggs and toast" -> no reference
    """
    text = text or ""

    for tier in TIER_ORDER:
        matched = [pattern.name for pattern in patterns_for_tier(tier) if pattern.regex.search(text)]
        if matched:
            logger.debug(f"History reference in '{text}': {tier.value} {matched}")
            return HistoryReference(has_reference=True, confidence=tier, matched_patterns=matched)

    return HistoryReference(has_reference=False, confidence=ConfidenceTier.LOW, matched_patterns=[])
