# classification/patterns.py
"""
Domain entity patterns for aviation training documents.

Patterns are applied to the RAW text (case preserved). Two of them feed
dedicated metadata fields; the rest produce general tags:

    aircraft_type         -> metadata.aircraft_types   ("B737", "Airbus A320")
    regulatory_reference  -> metadata.regulatory_references ("Part 121", "14 CFR 61.57")
    airport_code          -> tags  ("airport KJFK" -> "KJFK")
    altitude              -> tags  ("10,000 ft")
    speed                 -> tags  ("250 kts", "Mach 0.78")
    heading               -> tags  ("heading 270")
    frequency             -> tags  ("118.3 MHz")
    flight_level          -> tags  ("FL350")
    date                  -> tags  ("March 5, 2024", "05/03/2024")
    document_version      -> tags  ("Rev 3", "Version 2.1")

Custom patterns (str or compiled) can be merged in by name; a pattern that
fails to compile or raises while matching is skipped with a warning.
"""
from __future__ import annotations
import warnings
import regex as re
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

AIRCRAFT_TYPE = "aircraft_type"
REGULATORY_REFERENCE = "regulatory_reference"
METADATA_PATTERNS = (AIRCRAFT_TYPE, REGULATORY_REFERENCE)

PatternLike = Union[str, "re.Pattern"]


# ============================================================================
# REGEX PATTERNS
# ============================================================================
_PATTERN_SOURCES = {
    # B737, B737-800, A320, A350-1000, E190, CRJ900, Boeing 777, Cessna 172S, ATR 72-600
    AIRCRAFT_TYPE: (
        r"\b(?:[ABE]\d{3}(?:-\d{1,4}[A-Z]{0,2})?"
        r"|CRJ-?\d{3}"
        r"|(?:Boeing|Airbus|Embraer|Cessna|Piper|Beechcraft|Bombardier|ATR|Dash)"
        r"[\s-]?[A-Z]{0,2}\d{1,4}[A-Z]?(?:-\d{1,4})?)\b"
    ),
    # Part 121, 14 CFR 61.57, FAR 91.3, EASA Part-FCL, CS-25, AC 120-51E, ICAO Annex 6, § 91.103
    REGULATORY_REFERENCE: (
        r"(?:\b14\s?CFR(?:\s(?:Part\s)?\d{1,4}(?:\.\d+)*)?"
        r"|\bEASA\sPart-[A-Z]{2,5}"
        r"|\b[Pp]art[\s-]\d{1,4}(?:\.\d+)*"
        r"|\bFARs?\s\d{1,4}(?:\.\d+)*"
        r"|\bCS-\d{2,3}"
        r"|\bAC\s\d{2,3}-\d{1,3}[A-Z]?"
        r"|\bAD\s\d{4}-\d{2}-\d{2}"
        r"|\bICAO\sAnnex\s\d{1,2}"
        r"|§\s?\d{1,4}(?:\.\d+)*)"
    ),
    # ICAO/IATA code announced by a keyword (variable length look-behind)
    "airport_code": (
        r"(?<=\b(?i:airport|aerodrome|airfield|ICAO|IATA|departing|arriving)\s)[A-Z]{3,4}\b"
    ),
    "altitude": (
        r"(?i)\b\d{1,3}(?:,\d{3})+\s?(?:ft|feet)(?:\s(?:AGL|MSL))?\b"
        r"|\b\d{3,5}\s?(?:ft|feet)(?:\s(?:AGL|MSL))?\b"
    ),
    "speed": r"(?i)\b\d{2,3}\s?(?:kts?|knots|KIAS|KTAS|KCAS)\b|\bMach\s?0?\.\d{1,2}\b",
    "heading": r"(?i)\b(?:heading|hdg)\s?[0-3]\d{2}\b",
    "frequency": r"(?i)\b1(?:1[89]|2\d|3[0-6])\.\d{1,3}(?:\s?MHz)?\b|\b\d{3,4}(?:\.\d)?\s?kHz\b",
    "flight_level": r"\bFL\s?\d{2,3}\b",
    "date": (
        r"(?i)\b(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?"
        r"|Aug(?:ust)?|Sep(?:tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
        r"\s+\d{1,2},?\s+\d{4}\b"
        r"|\b\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}\b"
    ),
    "document_version": r"(?i)\b(?:Rev(?:ision)?|Ver(?:sion)?)\.?\s?\d+(?:\.\d+)*\b",
}


# ============================================================================
# COMPILATION
# ============================================================================
def _compile(name: str, pattern: PatternLike) -> Optional["re.Pattern"]:
    """Compile one pattern; None (with a warning) if it is invalid."""
    if hasattr(pattern, "finditer"):
        return pattern
    try:
        return re.compile(str(pattern))
    except (re.error, TypeError, ValueError) as e:
        warnings.warn(f"Skipping pattern '{name}': {e}")
        return None


class RegexPatternSet:
    """
    Immutable, ordered set of named entity patterns.

    Args:
        patterns: name -> pattern (str or compiled). Defaults to the
            built-in aviation patterns.
    """

    def __init__(self, patterns: Optional[Mapping[str, PatternLike]] = None):
        sources = _PATTERN_SOURCES if patterns is None else patterns
        compiled = {}
        for name, pattern in sources.items():
            cp = _compile(name, pattern)
            if cp is not None:
                compiled[name] = cp
        self._patterns = MappingProxyType(compiled)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, name: str) -> bool:
        return name in self._patterns

    def merged(self, extra: Mapping[str, PatternLike]) -> "RegexPatternSet":
        """New set with extra patterns added (same names replace defaults)."""
        combined: Dict[str, PatternLike] = dict(self._patterns)
        combined.update(extra)
        return RegexPatternSet(combined)

    def find_all(self, text: str) -> Dict[str, List[str]]:
        """
        Distinct matches per pattern, in order of first appearance.
        A pattern raising during matching is skipped with a warning.
        """
        results: Dict[str, List[str]] = {}
        if not text:
            return results

        for name, pattern in self._patterns.items():
            try:
                found: List[str] = []
                for m in pattern.finditer(text):
                    value = " ".join(m.group(0).split())
                    if value and value not in found:
                        found.append(value)
            except Exception as e:
                warnings.warn(f"Pattern '{name}' failed during matching: {e}")
                continue
            if found:
                results[name] = found
        return results


DEFAULT_PATTERNS = RegexPatternSet()


def extract_entities(text: str, patterns: Optional[RegexPatternSet] = None) -> Dict[str, List[str]]:
    """Convenience wrapper over DEFAULT_PATTERNS.find_all()."""
    return (patterns or DEFAULT_PATTERNS).find_all(text)


__all__ = [
    "AIRCRAFT_TYPE",
    "REGULATORY_REFERENCE",
    "METADATA_PATTERNS",
    "RegexPatternSet",
    "DEFAULT_PATTERNS",
    "extract_entities",
]
