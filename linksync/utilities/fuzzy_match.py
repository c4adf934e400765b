"""Fuzzy string scoring for near-miss diagnostics.

Uses rapidfuzz for fast, order-independent scoring. Scores are only ever
reported in logs and pass results; they never decide a match.
"""

import re
from dataclasses import dataclass

from rapidfuzz import fuzz
from unidecode import unidecode


@dataclass
class FuzzyScore:
    """Score of one candidate string against a query."""

    score: float
    candidate: str


def normalize_text(value: str) -> str:
    """Normalize text for fuzzy scoring.

    Applies: unidecode, lowercase, strip punctuation, normalize whitespace.
    """
    # Normalize: transliterate (é→e, ß→ss), lowercase
    normalized = unidecode(value or "").lower().strip()
    # Remove punctuation (hyphens become spaces)
    normalized = re.sub(r"[^\w\s]", " ", normalized)
    normalized = " ".join(normalized.split())
    return normalized


def score_names(query: str, candidate: str) -> FuzzyScore:
    """Score two event names with token_set_ratio (0-100).

    "Barcelona vs Real Madrid" scores high against "FC Barcelona v Real Madrid CF".
    """
    score = fuzz.token_set_ratio(normalize_text(query), normalize_text(candidate))
    return FuzzyScore(score=score, candidate=candidate)
