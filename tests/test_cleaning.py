"""
Unit tests for the text normalizer and frequency counter.

Run:
    pytest tests/test_cleaning.py -v
"""

import pytest

from classification.cleaning import (
    extract_text,
    tokenize,
    term_frequencies,
    top_terms,
    to_camel_case,
)
from classification.constants import STOP_WORDS


# ============================================================
# TEST: TOKENIZER
# ============================================================

def test_tokenize_basic():
    """Lowercase, punctuation stripped, stop-words and short tokens dropped"""
    assert tokenize("The B737's hydraulic system!") == ["b737", "hydraulic", "system"]


def test_tokenize_drops_numbers():
    """Numeric-only tokens are discarded, alphanumerics kept"""
    assert tokenize("Climb to 10000 ft") == ["climb", "ft"]
    assert tokenize("FL350 at 121.5") == ["fl350"]


def test_tokenize_keeps_order_and_duplicates():
    assert tokenize("engine fire, ENGINE fire") == ["engine", "fire", "engine", "fire"]


def test_tokenize_unicode_letters():
    assert tokenize("Météo: vent fort") == ["météo", "vent", "fort"]


def test_tokenize_min_length():
    assert tokenize("go up to FL") == ["go", "fl"]
    assert tokenize("go up to FL", min_length=3) == []


@pytest.mark.parametrize("value", ["", "   \n\t", None, 42, ["engine"]])
def test_tokenize_empty_or_malformed(value):
    """Never raises; malformed input gives no tokens"""
    assert tokenize(value) == []


def test_modal_terms_are_not_stop_words():
    """Modal verbs used by the term tables must survive tokenization"""
    for word in ("must", "shall", "should", "may", "can", "could", "might"):
        assert word not in STOP_WORDS
    assert tokenize("The pilot must report") == ["pilot", "must", "report"]


# ============================================================
# TEST: FREQUENCIES
# ============================================================

def test_term_frequencies():
    freqs = term_frequencies(["engine", "fire", "engine"])
    assert freqs == {"engine": 2, "fire": 1}
    assert list(freqs) == ["engine", "fire"]


def test_top_terms_ties_keep_first_occurrence():
    freqs = term_frequencies(["zulu", "alpha", "bravo", "alpha", "fl"])
    assert top_terms(freqs, 2) == ["alpha", "zulu"]
    assert top_terms(freqs, 10, min_length=4) == ["alpha", "zulu", "bravo"]


def test_to_camel_case():
    assert to_camel_case("crew resource management") == "crewResourceManagement"
    assert to_camel_case("landing gear") == "landingGear"
    assert to_camel_case("system") == "system"
    assert to_camel_case("") == ""


# ============================================================
# TEST: DOCUMENT-LIKE INPUT
# ============================================================

class _Doc:
    def __init__(self, text):
        self.text = text


def test_extract_text_variants():
    assert extract_text("plain") == "plain"
    assert extract_text({"text": "from mapping"}) == "from mapping"
    assert extract_text(_Doc("from attribute")) == "from attribute"
    assert extract_text({"elements": [{"text": "first"}, _Doc("second"), {"type": "image"}]}) == "first second"


@pytest.mark.parametrize("value", [None, 42, {"title": "no text"}, {"elements": 5}])
def test_extract_text_unsupported(value):
    assert extract_text(value) == ""
