"""
Tests for spreadsheet I/O and the classify_documents CLI.

Run:
    pytest tests/test_cli.py -v
"""

import json

import pandas as pd
import pytest

import classify_documents
from classification.io_excel import load_documents_table, write_result


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def text_files(tmp_path):
    a = tmp_path / "hyd_a.txt"
    b = tmp_path / "hyd_b.txt"
    c = tmp_path / "weather.txt"
    a.write_text("B737 simulator session, hydraulic system check", encoding="utf-8")
    b.write_text("Hydraulic system check before engine start", encoding="utf-8")
    c.write_text("Thunderstorm forecast with icing", encoding="utf-8")
    return a, b, c


@pytest.fixture
def csv_table(tmp_path):
    path = tmp_path / "documents.csv"
    pd.DataFrame({
        "ID": ["1", "2"],
        "Title": ["Hydraulics", "Regs"],
        "Text": [
            "B737 simulator session, hydraulic system check",
            "This regulation requires compliance with Part 121.",
        ],
    }).to_csv(path, index=False)
    return path


# ============================================================
# TEST: TABLE I/O
# ============================================================

def test_load_documents_table_maps_columns(csv_table):
    df = load_documents_table(csv_table)
    assert list(df["Document_Id"]) == ["1", "2"]
    assert df.loc[1, "Document_Text"].startswith("This regulation")


def test_load_documents_table_adds_missing_columns(tmp_path):
    path = tmp_path / "bare.csv"
    pd.DataFrame({"Content": ["engine fire", None]}).to_csv(path, index=False)

    df = load_documents_table(path)
    assert list(df["Document_Id"]) == ["1", "2"]
    assert list(df["Document_Text"]) == ["engine fire", ""]
    assert "Title" in df.columns


def test_write_result_orders_columns(tmp_path):
    path = tmp_path / "out.csv"
    df = pd.DataFrame({"Extra": [1], "Category": ["technical"], "Document_Id": ["D1"]})
    write_result(df, str(path))

    written = pd.read_csv(path)
    assert list(written.columns) == ["Document_Id", "Category", "Extra"]


def test_load_documents_table_fills_blank_id(tmp_path):
    path = tmp_path / "partial.csv"
    pd.DataFrame({
        "ID": ["D1", None],
        "Text": ["Hydraulic system check", "Thunderstorm forecast with icing"],
    }).to_csv(path, index=False)

    df = load_documents_table(path)
    assert list(df["Document_Id"]) == ["D1", "2"]


# ============================================================
# TEST: CLI
# ============================================================

def test_cli_classify_files(text_files, capsys):
    a, b, c = text_files
    assert classify_documents.main([str(a), str(b), str(c)]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data[str(a)]["category"] == "technical"
    assert data[str(a)]["metadata"]["aircraftTypes"] == ["B737"]
    assert data[str(a)]["relatedDocumentIds"] == [str(b)]


def test_cli_compare(text_files, capsys):
    a, b, c = text_files
    assert classify_documents.main(["--compare", str(a), str(c)]) == 0
    assert json.loads(capsys.readouterr().out)["similarity"] == 0.0


def test_cli_table(csv_table, tmp_path):
    out = tmp_path / "classified.csv"
    assert classify_documents.main(["--table", str(csv_table), "--out", str(out)]) == 0

    result = pd.read_csv(out)
    assert list(result["Category"]) == ["technical", "regulatory"]


def test_cli_missing_file(tmp_path):
    assert classify_documents.main([str(tmp_path / "nope.txt")]) == 1


def test_cli_bad_term_tables(text_files, tmp_path):
    bad = tmp_path / "tables.json"
    bad.write_text(json.dumps({"category": {"secret": ["x"]}}))
    assert classify_documents.main(["--term-tables", str(bad), str(text_files[0])]) == 1


def test_cli_no_arguments(capsys):
    assert classify_documents.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


@pytest.mark.parametrize("name,content", [
    ("docs.txt", b"just some plain text\n"),
    ("broken.xlsx", b"PK\x03\x04 not really a workbook"),
])
def test_cli_unreadable_table(tmp_path, capsys, name, content):
    path = tmp_path / name
    path.write_bytes(content)

    assert classify_documents.main(["--table", str(path)]) == 1
    assert "[ERROR]" in capsys.readouterr().err
