# classification/term_tables.py
"""
Label enumerations and the static term tables driving the scorers.

Each table maps a label to an ordered tuple of terms. A term is either a
single word ("hydraulic") or a multi-word phrase ("landing gear"). Declaration
order of the labels is significant: it breaks ties during selection.

Tables are frozen (MappingProxyType over tuples) and shared by every
classification call. A custom set can be loaded from JSON:

    {
        "category": {"technical": ["system", "component"], ...},
        "subject":  {"aircraft_systems": ["engine", "landing gear"], ...},
        "priority": {"critical": ["warning", "danger"], ...}
    }
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple, Type, Union


# ============================================================================
# LABELS
# ============================================================================
class DocumentCategory(str, Enum):
    TECHNICAL = "technical"
    REGULATORY = "regulatory"
    OPERATIONAL = "operational"
    TRAINING = "training"
    ASSESSMENT = "assessment"
    REFERENCE = "reference"
    UNCLASSIFIED = "unclassified"


class SubjectArea(str, Enum):
    AIRCRAFT_SYSTEMS = "aircraft_systems"
    FLIGHT_PROCEDURES = "flight_procedures"
    EMERGENCY_PROCEDURES = "emergency_procedures"
    REGULATIONS = "regulations"
    METEOROLOGY = "meteorology"
    NAVIGATION = "navigation"
    HUMAN_FACTORS = "human_factors"
    COMMUNICATIONS = "communications"
    GENERAL = "general"


class PriorityLevel(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


TermTable = Mapping[Enum, Tuple[str, ...]]


# ============================================================================
# DEFAULT TABLES
# ============================================================================
CATEGORY_TERMS = {
    DocumentCategory.TECHNICAL: [
        "system", "component", "aircraft", "equipment", "technical", "installation",
        "maintenance", "specifications", "design", "performance", "limitations",
    ],
    DocumentCategory.REGULATORY: [
        "regulation", "compliance", "requirement", "approved", "authority", "legal",
        "certification", "standard", "rule", "law", "mandatory", "must", "shall",
    ],
    DocumentCategory.OPERATIONAL: [
        "procedure", "operation", "checklist", "normal", "abnormal", "emergency",
        "flight", "crew", "pilot", "operator", "controller", "maneuver",
    ],
    DocumentCategory.TRAINING: [
        "training", "learning", "syllabus", "course", "lesson", "module", "instructor",
        "student", "trainee", "exercise", "simulation", "practice", "skill",
    ],
    DocumentCategory.ASSESSMENT: [
        "assessment", "test", "exam", "evaluation", "grade", "score", "performance",
        "measure", "criteria", "standard", "pass", "fail", "proficiency",
    ],
    DocumentCategory.REFERENCE: [
        "reference", "manual", "handbook", "guide", "information", "data", "table",
        "chart", "appendix", "glossary", "definition", "term",
    ],
    DocumentCategory.UNCLASSIFIED: [],
}

SUBJECT_TERMS = {
    SubjectArea.AIRCRAFT_SYSTEMS: [
        "engine", "hydraulic", "electrical", "avionics", "fuel", "landing gear",
        "flight control", "pressurization", "air conditioning", "system", "components",
    ],
    SubjectArea.FLIGHT_PROCEDURES: [
        "procedure", "takeoff", "landing", "cruise", "climb", "descent", "approach",
        "maneuver", "configuration", "speed", "altitude", "flight plan",
    ],
    SubjectArea.EMERGENCY_PROCEDURES: [
        "emergency", "failure", "malfunction", "abort", "evacuation", "fire", "smoke",
        "decompression", "ditching", "abnormal", "warning", "caution", "alert",
    ],
    SubjectArea.REGULATIONS: [
        "regulation", "requirement", "law", "compliance", "authority", "certificate",
        "license", "approval", "standard", "rule", "part", "paragraph",
    ],
    SubjectArea.METEOROLOGY: [
        "weather", "wind", "cloud", "visibility", "temperature", "pressure", "forecast",
        "turbulence", "thunderstorm", "icing", "fog", "precipitation",
    ],
    SubjectArea.NAVIGATION: [
        "navigation", "waypoint", "route", "course", "heading", "track", "bearing",
        "distance", "gps", "vor", "ils", "approach", "departure", "arrival",
    ],
    SubjectArea.HUMAN_FACTORS: [
        "human factors", "crew resource management", "crm", "workload", "fatigue",
        "stress", "decision making", "situational awareness", "communication", "teamwork",
    ],
    SubjectArea.COMMUNICATIONS: [
        "communication", "radio", "phraseology", "clearance", "readback", "frequency",
        "call sign", "transmission", "atc", "controller", "message",
    ],
    SubjectArea.GENERAL: [
        "general", "introduction", "overview", "purpose", "scope", "description",
        "summary", "background", "information", "note",
    ],
}

PRIORITY_TERMS = {
    PriorityLevel.CRITICAL: [
        "warning", "caution", "danger", "emergency", "critical", "immediate", "severe",
        "must", "required", "mandatory", "essential", "life", "safety",
    ],
    PriorityLevel.HIGH: [
        "important", "significant", "major", "key", "primary", "main", "serious",
        "necessary", "should", "recommended", "advised",
    ],
    PriorityLevel.MEDIUM: [
        "normal", "standard", "regular", "routine", "common", "typical", "general",
        "suggested", "considered",
    ],
    PriorityLevel.LOW: [
        "minor", "supplementary", "additional", "optional", "reference", "may",
        "can", "could", "might", "note", "information",
    ],
}


# ============================================================================
# FROZEN BUNDLE
# ============================================================================
def freeze_table(table: Mapping[Enum, Iterable[str]]) -> TermTable:
    """Lower-case and freeze a label -> terms mapping (label order kept)."""
    return MappingProxyType({
        label: tuple(" ".join(term.lower().split()) for term in terms)
        for label, terms in table.items()
    })


@dataclass(frozen=True)
class TermTables:
    """The three term tables used by one classifier instance."""
    category: TermTable
    subject: TermTable
    priority: TermTable

    def to_dict(self) -> Dict[str, Dict[str, list]]:
        return {
            dimension: {label.value: list(terms) for label, terms in table.items()}
            for dimension, table in (
                ("category", self.category),
                ("subject", self.subject),
                ("priority", self.priority),
            )
        }


DEFAULT_TERM_TABLES = TermTables(
    category=freeze_table(CATEGORY_TERMS),
    subject=freeze_table(SUBJECT_TERMS),
    priority=freeze_table(PRIORITY_TERMS),
)


_DIMENSION_LABELS: Dict[str, Type[Enum]] = {
    "category": DocumentCategory,
    "subject": SubjectArea,
    "priority": PriorityLevel,
}


def _parse_table(dimension: str, raw: Mapping[str, Iterable[str]]) -> TermTable:
    enum_cls = _DIMENSION_LABELS[dimension]
    known = {label.value: label for label in enum_cls}
    table = {}
    for name, terms in raw.items():
        label = known.get(str(name).strip().lower())
        if label is None:
            raise ValueError(
                f"Unknown {dimension} label '{name}'. "
                f"Expected one of: {', '.join(known)}"
            )
        if isinstance(terms, str):
            raise ValueError(f"Terms for '{name}' must be a list, got a string.")
        table[label] = [str(t) for t in terms]
    return freeze_table(table)


def load_term_tables(source: Union[str, Path, Mapping]) -> TermTables:
    """
    Load term tables from a JSON file (or an already parsed mapping).

    Dimensions missing from the source fall back to the default tables.
    Unknown dimensions or labels raise ValueError.
    """
    if isinstance(source, Mapping):
        data = source
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Term table file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

    if not isinstance(data, Mapping):
        raise ValueError("Term table file must contain a JSON object.")

    unknown = set(data) - set(_DIMENSION_LABELS)
    if unknown:
        raise ValueError(f"Unknown term table dimension(s): {sorted(unknown)}")

    tables = {
        dimension: (
            _parse_table(dimension, data[dimension])
            if dimension in data
            else getattr(DEFAULT_TERM_TABLES, dimension)
        )
        for dimension in _DIMENSION_LABELS
    }
    return TermTables(**tables)
