# classification/cleaning.py
"""
Text normalization for document classification:
1. Accepts plain strings or document-like objects (text / elements)
2. Lowercases and strips punctuation (Unicode aware)
3. Drops stop-words, numeric-only and short tokens
4. Counts term frequencies
"""
from __future__ import annotations
import regex as re
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List

from .constants import MIN_TOKEN_LENGTH, STOP_WORDS

# Anything that is not a letter, digit or whitespace
_PUNCT_RE = re.compile(r"[^\p{L}\p{N}\s]+")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?$")


# ============================================================================
# INPUT ADAPTER
# ============================================================================
def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def extract_text(document: Any) -> str:
    """
    Return the full text of a document-like input.

    Supported:
    - str
    - mapping / object with a "text" field
    - document structure with "elements", each carrying "text"
      (joined with single spaces)

    Anything else yields "".
    """
    if document is None:
        return ""
    if isinstance(document, str):
        return document

    text = _get(document, "text")
    if isinstance(text, str):
        return text

    elements = _get(document, "elements")
    if elements is not None and not isinstance(elements, (str, bytes)):
        try:
            parts = [_get(el, "text") for el in elements]
        except TypeError:
            return ""
        return " ".join(p for p in parts if isinstance(p, str))

    return ""


# ============================================================================
# TOKENIZER
# ============================================================================
def _is_number(token: str) -> bool:
    return bool(_NUMBER_RE.match(token))


def tokenize(text: Any, min_length: int = MIN_TOKEN_LENGTH) -> List[str]:
    """
    Split text into normalized tokens (order and duplicates kept).

    Examples:
        "The B737's hydraulic system!" -> ["b737", "hydraulic", "system"]
        "Climb to 10000 ft"            -> ["climb", "ft"]
    """
    if not isinstance(text, str) or not text.strip():
        return []

    cleaned = _PUNCT_RE.sub(" ", text.lower())
    return [
        tok for tok in cleaned.split()
        if len(tok) >= min_length
        and not _is_number(tok)
        and tok not in STOP_WORDS
    ]


def term_frequencies(tokens: Iterable[str]) -> Dict[str, int]:
    """Token -> count, keyed in first-occurrence order."""
    freqs: Dict[str, int] = {}
    for tok in tokens:
        freqs[tok] = freqs.get(tok, 0) + 1
    return freqs


def top_terms(
    frequencies: Dict[str, int],
    limit: int,
    min_length: int = 0,
) -> List[str]:
    """
    Most frequent terms, ties broken by first occurrence.
    Only terms with len >= min_length are considered.
    """
    ranked = sorted(
        (t for t in frequencies if len(t) >= min_length),
        key=lambda t: frequencies[t],
        reverse=True,
    )
    return ranked[:limit]


def to_camel_case(phrase: str) -> str:
    """'crew resource management' -> 'crewResourceManagement'"""
    words = phrase.split()
    if not words:
        return ""
    return words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])


__all__ = [
    "extract_text",
    "tokenize",
    "term_frequencies",
    "top_terms",
    "to_camel_case",
]
