# classification/similarity.py
"""
Document similarity over term-frequency profiles.

Canonical metric: cosine similarity of raw term counts.
    sim(a, b) = dot(fa, fb) / sqrt(|fa|^2 * |fb|^2)

Counts stay integers until the final division so that sim(a, a) is exactly
1.0 and sim(a, b) == sim(b, a) bit for bit.
"""
from __future__ import annotations
from typing import Any, Dict, Hashable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .cleaning import extract_text, term_frequencies, tokenize
from .constants import MAX_RELATED_DOCUMENTS, MIN_RELATED_SIMILARITY


def _vectors(fa: Mapping[str, int], fb: Mapping[str, int]) -> Tuple[np.ndarray, np.ndarray]:
    vocab = sorted(set(fa) | set(fb))
    va = np.array([fa.get(t, 0) for t in vocab], dtype=np.int64)
    vb = np.array([fb.get(t, 0) for t in vocab], dtype=np.int64)
    return va, vb


def cosine_similarity(fa: Mapping[str, int], fb: Mapping[str, int]) -> float:
    """Cosine similarity of two frequency maps; 0.0 if either is empty."""
    if not fa or not fb:
        return 0.0

    va, vb = _vectors(fa, fb)
    dot = int(va @ vb)
    if dot == 0:
        return 0.0

    denom = np.sqrt(float(int(va @ va) * int(vb @ vb)))
    if denom == 0:
        return 0.0
    return float(max(0.0, min(1.0, dot / denom)))


def compare_documents(text_a: Any, text_b: Any) -> float:
    """Similarity in [0, 1] of two raw texts."""
    fa = term_frequencies(tokenize(extract_text(text_a)))
    fb = term_frequencies(tokenize(extract_text(text_b)))
    return cosine_similarity(fa, fb)


# ============================================================================
# CORPUS HELPERS
# ============================================================================
def similarity_matrix(texts: Sequence[Any]) -> np.ndarray:
    """
    Pairwise similarity for a list of texts (N x N, symmetric).
    Diagonal is 1.0 for documents with surviving tokens, 0.0 otherwise.
    """
    freqs = [term_frequencies(tokenize(extract_text(t))) for t in texts]
    n = len(freqs)
    out = np.zeros((n, n), dtype=float)

    for i in range(n):
        out[i, i] = 1.0 if freqs[i] else 0.0
        for j in range(i + 1, n):
            sim = cosine_similarity(freqs[i], freqs[j])
            out[i, j] = out[j, i] = sim
    return out


def find_related_documents(
    text: Any,
    corpus: Mapping[Hashable, Any],
    max_related: int = MAX_RELATED_DOCUMENTS,
    min_similarity: float = MIN_RELATED_SIMILARITY,
    exclude: Optional[Hashable] = None,
) -> List[Tuple[Hashable, float]]:
    """
    Rank corpus documents (id -> text) by similarity to `text`.

    Returns up to `max_related` (id, score) pairs with score >= min_similarity,
    best first; ties keep corpus order.
    """
    if max_related <= 0 or not corpus:
        return []

    query = term_frequencies(tokenize(extract_text(text)))
    if not query:
        return []

    scored: List[Tuple[Hashable, float]] = []
    for doc_id, doc_text in corpus.items():
        if exclude is not None and doc_id == exclude:
            continue
        sim = cosine_similarity(query, term_frequencies(tokenize(extract_text(doc_text))))
        if sim > 0 and sim >= min_similarity:
            scored.append((doc_id, sim))

    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored[:max_related]


__all__ = [
    "cosine_similarity",
    "compare_documents",
    "similarity_matrix",
    "find_related_documents",
]
