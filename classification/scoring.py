# classification/scoring.py
"""
Weighted lexical scoring shared by the three classification dimensions.

Scoring rules per label:
1. Single-word term present            -> + freq * EXACT_MATCH_WEIGHT
2. Multi-word phrase, all words present -> + sum(freqs) / len(words)
3. Token containing the label's name    -> + freq * substring_weight

Scores are then normalized so that one dimension sums to 1.0
(or stays all-zero when nothing matched).
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from .constants import CONFIDENCE_WEIGHTS, EXACT_MATCH_WEIGHT

L = TypeVar("L", bound=Enum)


def _term_score(term: str, frequencies: Mapping[str, int]) -> float:
    words = term.split()
    if len(words) == 1:
        return frequencies.get(term, 0) * EXACT_MATCH_WEIGHT

    counts = [frequencies.get(w, 0) for w in words]
    if all(counts):
        return sum(counts) / len(words)
    return 0.0


def score_dimension(
    frequencies: Mapping[str, int],
    term_table: Mapping[L, Sequence[str]],
    substring_weight: float = 0.0,
) -> Dict[L, float]:
    """
    Raw (unnormalized) score of every label in a term table.

    Label order of the returned dict follows the table's declaration order.
    """
    scores: Dict[L, float] = {}
    for label, terms in term_table.items():
        score = 0.0
        for term in terms:
            score += _term_score(term, frequencies)

        if substring_weight:
            name = str(label.value).lower()
            score += sum(
                freq * substring_weight
                for token, freq in frequencies.items()
                if name in token
            )
        scores[label] = score
    return scores


def normalize_scores(scores: Mapping[L, float]) -> Dict[L, float]:
    """Divide by the total; all-zero input stays all-zero."""
    total = sum(scores.values())
    if total <= 0:
        return {label: 0.0 for label in scores}
    return {label: value / total for label, value in scores.items()}


# ============================================================================
# SELECTION
# ============================================================================
def select_top(scores: Mapping[L, float], default: L) -> L:
    """Argmax; ties go to the first declared label, all-zero -> default."""
    best: Optional[L] = None
    best_score = 0.0
    for label, score in scores.items():
        if score > best_score:
            best, best_score = label, score
    return default if best is None else best


def select_top_n(scores: Mapping[L, float], limit: int) -> List[L]:
    """Up to `limit` labels with score > 0, best first (stable on ties)."""
    if limit <= 0:
        return []
    ranked = sorted(
        (label for label, score in scores.items() if score > 0),
        key=lambda label: scores[label],
        reverse=True,
    )
    return ranked[:limit]


# ============================================================================
# CONFIDENCE
# ============================================================================
def estimate_confidence(category_score: float, subject_scores: Iterable[float]) -> float:
    """
    0.6 * winning category score + 0.4 * mean of winning subject scores,
    clamped to [0, 1]. No subjects -> subject term is 0.
    """
    subject_scores = list(subject_scores)
    subject_mean = sum(subject_scores) / len(subject_scores) if subject_scores else 0.0

    confidence = (
        CONFIDENCE_WEIGHTS["category"] * category_score
        + CONFIDENCE_WEIGHTS["subject"] * subject_mean
    )
    return max(0.0, min(1.0, confidence))


__all__ = [
    "score_dimension",
    "normalize_scores",
    "select_top",
    "select_top_n",
    "estimate_confidence",
]
