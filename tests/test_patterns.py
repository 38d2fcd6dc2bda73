"""
Unit tests for aviation entity patterns.

Run:
    pytest tests/test_patterns.py -v
"""

import warnings

import pytest

from classification.patterns import (
    AIRCRAFT_TYPE,
    DEFAULT_PATTERNS,
    REGULATORY_REFERENCE,
    RegexPatternSet,
    extract_entities,
)


# ============================================================
# TEST: BUILT-IN PATTERNS
# ============================================================

def test_aircraft_types():
    found = extract_entities("Type rating on the B737-800 and the Airbus A320; E190 and Cessna 172S too.")
    types = found[AIRCRAFT_TYPE]
    assert "B737-800" in types
    assert "Airbus A320" in types
    assert "E190" in types
    assert "Cessna 172S" in types


def test_regulatory_references():
    found = extract_entities("Comply with 14 CFR Part 121 and FAR 91.3. See Part 135 and ICAO Annex 6.")
    refs = found[REGULATORY_REFERENCE]
    assert "14 CFR Part 121" in refs
    assert "FAR 91.3" in refs
    assert "Part 135" in refs
    assert "ICAO Annex 6" in refs


def test_airport_code_needs_keyword():
    assert extract_entities("Depart from airport KJFK at dawn")["airport_code"] == ["KJFK"]
    assert "airport_code" not in extract_entities("LAND THE AIRCRAFT NOW")


@pytest.mark.parametrize("text,name,expected", [
    ("Climb to 10,000 ft and hold", "altitude", "10,000 ft"),
    ("Reduce to 250 kts below", "speed", "250 kts"),
    ("Cruise at Mach 0.78", "speed", "Mach 0.78"),
    ("Turn left heading 270", "heading", "heading 270"),
    ("Contact tower on 118.3 MHz", "frequency", "118.3 MHz"),
    ("Cleared to FL350", "flight_level", "FL350"),
    ("Issued March 5, 2024", "date", "March 5, 2024"),
    ("Issued 05/03/2024", "date", "05/03/2024"),
    ("Manual Rev 2 applies", "document_version", "Rev 2"),
])
def test_general_patterns(text, name, expected):
    assert expected in extract_entities(text)[name]


def test_matches_are_distinct_and_ordered():
    found = extract_entities("FL350 then FL370 then FL350 again")
    assert found["flight_level"] == ["FL350", "FL370"]


def test_no_text():
    assert extract_entities("") == {}


# ============================================================
# TEST: FAILURE HANDLING
# ============================================================

def test_invalid_pattern_is_skipped():
    with pytest.warns(UserWarning, match="bad"):
        patterns = RegexPatternSet({"bad": "([unclosed", "fl": r"\bFL\d{3}\b"})
    assert patterns.names == ("fl",)
    assert patterns.find_all("Cleared FL240") == {"fl": ["FL240"]}


class _ExplodingPattern:
    def finditer(self, text):
        raise RuntimeError("boom")


def test_pattern_failing_at_match_time_is_skipped():
    patterns = RegexPatternSet({"boom": _ExplodingPattern(), "fl": r"\bFL\d{3}\b"})
    with pytest.warns(UserWarning, match="boom"):
        found = patterns.find_all("Cleared FL240")
    assert found == {"fl": ["FL240"]}


def test_merged_adds_and_overrides():
    merged = DEFAULT_PATTERNS.merged({
        "tail_number": r"\bN\d{1,5}[A-Z]{0,2}\b",
        "flight_level": r"\bFL\d{3}\b",
    })
    assert "tail_number" in merged
    assert len(merged) == len(DEFAULT_PATTERNS) + 1
    assert merged.find_all("N12345 at FL 350")["tail_number"] == ["N12345"]
    assert "flight_level" not in merged.find_all("N12345 at FL 350")

    # Default set untouched
    assert "tail_number" not in DEFAULT_PATTERNS
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert DEFAULT_PATTERNS.find_all("at FL 350")["flight_level"] == ["FL 350"]
