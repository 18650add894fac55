"""Text normalization and similarity scoring for logged entries."""

import logging
import re
from collections.abc import Iterable, Sequence

from rapidfuzz.distance import Levenshtein

from logrecall.schemas.entries import FoodItem

logger = logging.getLogger(__name__)

STOP_WORDS = frozenset(
    {
        "a", "an", "the", "with", "of", "from", "and", "at", "in", "on", "for",
        "to", "my", "some", "like", "about", "around", "i",
    }
)  # fmt: skip

# Words that signal a history reference but never describe the food itself
HISTORY_REFERENCE_WORDS = frozenset(
    {
        # Time references
        "yesterday", "yesterdays", "today", "monday", "tuesday", "wednesday",
        "thursday", "friday", "saturday", "sunday", "earlier", "recently",
        "recent", "before", "last", "week", "night", "morning", "evening",
        "afternoon", "time", "day", "days", "ago", "while",
        # Portion and repetition
        "another", "more", "same", "again", "repeat", "leftover", "leftovers",
        "remaining", "finished", "rest", "half", "other", "those", "that",
        "thing", "one", "ones",
        # Meals
        "breakfast", "lunch", "dinner", "brunch", "meal", "snack",
        # Eating verbs
        "had", "have", "ate", "eaten", "eating", "eat",
        "made", "make", "cooked", "ordered", "got", "grabbed", "picked",
    }
)  # fmt: skip

# Expanded before punctuation is stripped so the dotted forms still match
MULTI_WORD_ABBREVIATIONS = {
    "fl. oz.": "fluid ounce",
    "fl. oz": "fluid ounce",
    "fl oz": "fluid ounce",
}

SINGLE_WORD_ABBREVIATIONS = {
    # Shorthand
    "pb": "peanut butter",
    "w": "with",
    # Volume
    "tb": "tablespoon",
    "tbsp": "tablespoon",
    "tsp": "teaspoon",
    "c": "cup",
    "ml": "milliliter",
    "l": "liter",
    "ltr": "liter",
    "pt": "pint",
    "qt": "quart",
    "gal": "gallon",
    # Weight
    "g": "gram",
    "kg": "kilogram",
    "mg": "milligram",
    "oz": "ounce",
    "lb": "pound",
    "lbs": "pounds",
    # Food
    "choc": "chocolate",
    "veg": "vegetable",
    "veggies": "vegetables",
}

_MULTI_WORD_RE = [
    (re.compile(rf"\b{re.escape(abbr)}(?!\w)", re.IGNORECASE), full)
    for abbr, full in MULTI_WORD_ABBREVIATIONS.items()
]
_SINGLE_WORD_RE = re.compile(
    r"\b("
    + "|".join(re.escape(abbr) for abbr in sorted(SINGLE_WORD_ABBREVIATIONS, key=len, reverse=True))
    + r")\b",
    re.IGNORECASE,
)
_PUNCTUATION_RE = re.compile(r"[^\w\s]")
# "8oz" -> "8 oz" so the unit is recognised once digits are gone
_DIGIT_LETTER_BOUNDARY_RE = re.compile(r"(?<=\d)(?=[^\W\d_])|(?<=[^\W\d_])(?=\d)")
_DIGITS_RE = re.compile(r"\d+")


def _expand_and_strip(text: str | None) -> str:
    """Lowercase, expand abbreviations, and drop punctuation and digits."""
    result = (text or "").lower()

    for pattern, full in _MULTI_WORD_RE:
        result = pattern.sub(full, result)

    result = _PUNCTUATION_RE.sub(" ", result)
    result = _DIGIT_LETTER_BOUNDARY_RE.sub(" ", result)
    result = _SINGLE_WORD_RE.sub(lambda m: SINGLE_WORD_ABBREVIATIONS[m.group(1).lower()], result)

    # Portions vary between uses, so quantities never count
    return _DIGITS_RE.sub("", result)


def preprocess_text(text: str | None) -> str:
    """Build the order-independent signature of a piece of text.

    Steps, in order: lowercase, multi-word abbreviations, punctuation removal,
    single-word abbreviations, number removal, stop-word removal, alphabetical
    sort. "2 tbsp PB" and "peanut butter, 3 tablespoon" share a signature.
    """
    words = [w for w in _expand_and_strip(text).split() if w not in STOP_WORDS]
    words.sort()
    return " ".join(words)


normalize = preprocess_text


def create_items_signature(items: Iterable[FoodItem]) -> str:
    """Create a signature from food item descriptions, as stored on saved meals."""
    return preprocess_text(" ".join(item.description for item in items))


def extract_candidate_words(text: str | None) -> list[str]:
    """Keep only words that might describe the food or exercise itself.

    Strips stop words plus the vocabulary of history references, so
    "another tilapia like from yesterday" -> ["tilapia"].
    """
    return [
        w
        for w in _expand_and_strip(text).split()
        if w not in STOP_WORDS and w not in HISTORY_REFERENCE_WORDS
    ]


def jaccard_similarity(a: str, b: str) -> float:
    """Jaccard similarity of two signatures: 0 for disjoint, 1 for identical."""
    set_a = set(a.split())
    set_b = set(b.split())

    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0

    return len(set_a & set_b) / len(set_a | set_b)


def is_fuzzy_match(word1: str, word2: str) -> bool:
    """Check if two words are equal up to a small typo.

    Words of five letters or fewer tolerate one edit, longer words two.
    """
    if word1 == word2:
        return True
    max_distance = 1 if min(len(word1), len(word2)) <= 5 else 2
    return Levenshtein.distance(word1, word2, score_cutoff=max_distance) <= max_distance


def _fuzzy_set_has(word: str, targets: set[str]) -> bool:
    return word in targets or any(is_fuzzy_match(word, target) for target in targets)


def hybrid_similarity_score(candidate_words: Sequence[str], target_text: str | None) -> float:
    """Score how well short candidate words are covered by a longer text.

    Containment (share of candidate words found in the target, typo tolerant)
    is weighted 0.7; a fuzzy Jaccard over the word sets is weighted 0.3 and
    only serves to rank otherwise similar targets.
    """
    if not candidate_words:
        return 0.0

    target_set = {
        w for w in _PUNCTUATION_RE.sub(" ", (target_text or "").lower()).split() if w not in STOP_WORDS
    }
    input_set = set(candidate_words)

    matched_count = sum(1 for word in candidate_words if _fuzzy_set_has(word, target_set))
    containment = matched_count / len(candidate_words)

    intersection = sum(1 for word in input_set if _fuzzy_set_has(word, target_set))
    union_size = len(input_set) + len(target_set) - intersection
    jaccard = intersection / union_size if union_size > 0 else 0.0

    score = containment * 0.7 + jaccard * 0.3
    logger.debug(
        f"Hybrid score {score:.3f} for {list(candidate_words)} vs '{target_text}' "
        f"(containment={containment:.2f}, jaccard={jaccard:.2f})"
    )
    return score
