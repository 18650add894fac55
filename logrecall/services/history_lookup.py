"""Resolve history-referencing phrases to a past food entry."""

import logging
from collections.abc import Sequence
from datetime import date

from logrecall.schemas.entries import FoodEntry, as_aware
from logrecall.schemas.suggestions import SimilarEntryMatch
from logrecall.services.history_patterns import detect_history_reference, min_similarity_for
from logrecall.services.text_similarity import extract_candidate_words, hybrid_similarity_score

logger = logging.getLogger(__name__)

# Scores closer than this are a tie, and the more recent entry wins
SCORE_TOLERANCE = 0.05

# Barcode scans store the code, not words, as raw input
SCANNED_INPUT_PREFIX = "Scanned:"


def _recency(entry: FoodEntry) -> tuple:
    return (entry.eaten_date or date.min, as_aware(entry.created_at))


def _is_better_match(
    candidate_score: float,
    candidate: FoodEntry,
    best: SimilarEntryMatch | None,
) -> bool:
    if best is None:
        return True

    score_diff = candidate_score - best.score
    if score_diff > SCORE_TOLERANCE:
        return True
    if score_diff < -SCORE_TOLERANCE:
        return False

    return _recency(candidate) > _recency(best.entry)


def find_similar_entry(
    input_text: str | None,
    recent_entries: Sequence[FoodEntry],
    min_similarity: float,
) -> SimilarEntryMatch | None:
    """Find the past entry that best matches the food words in the input.

    Each entry is scored twice with the hybrid score: against its combined item
    descriptions and against the raw text the user originally typed. Only
    scores at or above min_similarity count.
    """
    candidate_words = extract_candidate_words(input_text)
    if not candidate_words:
        return None

    best: SimilarEntryMatch | None = None

    for entry in recent_entries:
        items_score = hybrid_similarity_score(candidate_words, entry.items_description)
        if items_score >= min_similarity and _is_better_match(items_score, entry, best):
            best = SimilarEntryMatch(entry=entry, score=items_score, match_type="items")

        raw_input = entry.raw_input
        if raw_input and not raw_input.startswith(SCANNED_INPUT_PREFIX):
            raw_score = hybrid_similarity_score(candidate_words, raw_input)
            if raw_score >= min_similarity and _is_better_match(raw_score, entry, best):
                best = SimilarEntryMatch(entry=entry, score=raw_score, match_type="input")

    return best


def match_history_reference(
    input_text: str | None,
    recent_entries: Sequence[FoodEntry],
) -> SimilarEntryMatch | None:
    """Find the entry a phrase like "leftover pizza" refers to.

    Returns None when the phrase does not reference history at all, or when no
    entry clears the similarity bar of the detected confidence tier.
    """
    reference = detect_history_reference(input_text)
    if not reference.has_reference:
        return None

    threshold = min_similarity_for(reference.confidence)
    match = find_similar_entry(input_text, recent_entries, threshold)

    if match:
        logger.info(
            f"History reference '{input_text}' ({reference.confidence.value}) matched entry "
            f"{match.entry.id} with score {match.score:.2f}"
        )
    return match
