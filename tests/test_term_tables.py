"""
Unit tests for term tables.

Run:
    pytest tests/test_term_tables.py -v
"""

import json

import pytest

from classification.term_tables import (
    DEFAULT_TERM_TABLES,
    DocumentCategory,
    PriorityLevel,
    SubjectArea,
    load_term_tables,
)


def test_default_tables_cover_all_labels():
    assert list(DEFAULT_TERM_TABLES.category) == list(DocumentCategory)
    assert list(DEFAULT_TERM_TABLES.subject) == list(SubjectArea)
    assert list(DEFAULT_TERM_TABLES.priority) == list(PriorityLevel)
    assert DEFAULT_TERM_TABLES.category[DocumentCategory.UNCLASSIFIED] == ()


def test_default_tables_are_immutable():
    with pytest.raises(TypeError):
        DEFAULT_TERM_TABLES.category[DocumentCategory.TECHNICAL] = ("x",)
    assert isinstance(DEFAULT_TERM_TABLES.subject[SubjectArea.HUMAN_FACTORS], tuple)
    with pytest.raises(AttributeError):
        DEFAULT_TERM_TABLES.category = {}


def test_load_from_json_file(tmp_path):
    path = tmp_path / "tables.json"
    path.write_text(json.dumps({
        "priority": {"critical": ["Mayday", "Pan  Pan"], "low": ["fyi"]},
    }))

    tables = load_term_tables(path)

    assert tables.priority == {
        PriorityLevel.CRITICAL: ("mayday", "pan pan"),
        PriorityLevel.LOW: ("fyi",),
    }
    # Missing dimensions fall back to defaults
    assert tables.category == DEFAULT_TERM_TABLES.category
    assert tables.subject == DEFAULT_TERM_TABLES.subject


def test_round_trip_through_dict():
    data = DEFAULT_TERM_TABLES.to_dict()
    assert data["subject"]["aircraft_systems"][5] == "landing gear"
    assert load_term_tables(data) == DEFAULT_TERM_TABLES


@pytest.mark.parametrize("data,message", [
    ({"category": {"secret": ["x"]}}, "Unknown category label"),
    ({"tone": {}}, "Unknown term table dimension"),
    ({"subject": {"navigation": "gps"}}, "must be a list"),
    (["not", "an", "object"], "JSON object"),
])
def test_invalid_tables(tmp_path, data, message):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(data))
    with pytest.raises(ValueError, match=message):
        load_term_tables(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_term_tables(tmp_path / "missing.json")
