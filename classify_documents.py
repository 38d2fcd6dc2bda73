#!/usr/bin/env python3
"""
Document Classification CLI

Classifies already-extracted document text by category, subject area and
priority, extracts tags/entities and compares documents.

Usage:
    python classify_documents.py notes/*.txt
    python classify_documents.py --table documents.xlsx --out classified.xlsx
    python classify_documents.py --compare a.txt b.txt
    python classify_documents.py --example
"""
import argparse
import json
import sys
import time
import zipfile
from pathlib import Path

from classification.document_classifier import (
    ClassificationOptions,
    DocumentClassifier,
    analyze_example,
)
from classification.constants import MAX_SUBJECTS
from classification.io_excel import load_documents_table, write_result
from classification.term_tables import load_term_tables


# ============================================================================
# UTILITIES
# ============================================================================
class Colors:
    """ANSI colors for terminal output."""
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BLUE = "\033[94m"
    BOLD = "\033[1m"
    END = "\033[0m"


def print_status(msg: str, status: str = "INFO"):
    """Print colored status message (stderr, so JSON on stdout stays clean)."""
    color_map = {
        "INFO": Colors.BLUE,
        "SUCCESS": Colors.GREEN,
        "WARNING": Colors.YELLOW,
        "ERROR": Colors.RED,
    }
    color = color_map.get(status, "")
    print(f"{color}[{status}]{Colors.END} {msg}", file=sys.stderr)


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


# ============================================================================
# ACTIONS
# ============================================================================
def classify_files(classifier: DocumentClassifier, paths, options: ClassificationOptions, out=None) -> int:
    """Classify text files; related documents are searched among the same files."""
    corpus = {}
    for p in paths:
        path = Path(p)
        if not path.is_file():
            print_status(f"File not found: {path}", "ERROR")
            return 1
        corpus[str(path)] = read_text(path)

    results = {}
    for doc_id, text in corpus.items():
        result = classifier.classify(
            text,
            options,
            corpus=corpus if len(corpus) > 1 else None,
            document_id=doc_id,
        )
        results[doc_id] = result.to_dict()
        print_status(
            f"{doc_id}: {result.category.value} / {result.priority.value} "
            f"({result.confidence:.0%})",
            "SUCCESS",
        )

    payload = json.dumps(results, indent=2, ensure_ascii=False)
    if out:
        Path(out).write_text(payload, encoding="utf-8")
        print_status(f"Saved to: {out}", "SUCCESS")
    else:
        print(payload)
    return 0


def classify_table(classifier: DocumentClassifier, table: str, options: ClassificationOptions, out=None) -> int:
    """Batch mode over a spreadsheet/CSV of documents."""
    start = time.time()
    try:
        df = load_documents_table(table)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        print_status(f"Could not read table: {e}", "ERROR")
        return 1

    result_df = classifier.classify_batch(df, options=options)

    output = out or str(Path(table).with_name(Path(table).stem + "_classified.xlsx"))
    write_result(result_df, output)

    total = len(result_df)
    review = int(result_df["Needs_Review"].sum()) if total else 0
    print_status(f"Processed {total} documents in {time.time() - start:.1f}s", "SUCCESS")
    if total:
        print_status(f"Needs review: {review} ({review / total * 100:.1f}%)", "INFO")
        for category, count in result_df["Category"].value_counts().items():
            print(f"  {category}: {count}", file=sys.stderr)
    print_status(f"Saved to: {output}", "SUCCESS")
    return 0


def compare_files(classifier: DocumentClassifier, path_a: str, path_b: str) -> int:
    a, b = Path(path_a), Path(path_b)
    for p in (a, b):
        if not p.is_file():
            print_status(f"File not found: {p}", "ERROR")
            return 1
    score = classifier.compare(read_text(a), read_text(b))
    print(json.dumps({"documentA": str(a), "documentB": str(b), "similarity": score}))
    return 0


# ============================================================================
# MAIN
# ============================================================================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rule-based classification of training documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classify text files, JSON to stdout
  python classify_documents.py manual.txt checklist.txt

  # Batch classify a spreadsheet (columns: ID, Title, Text)
  python classify_documents.py --table documents.xlsx

  # Similarity of two documents
  python classify_documents.py --compare a.txt b.txt
        """
    )
    parser.add_argument("files", nargs="*", help="Plain-text documents to classify")
    parser.add_argument("--table", help="Spreadsheet or CSV with a document text column")
    parser.add_argument("--compare", nargs=2, metavar=("A", "B"), help="Compare two text files")
    parser.add_argument("--example", action="store_true", help="Classify the built-in example")
    parser.add_argument("--out", help="Output file (JSON for files, xlsx/csv for --table)")
    parser.add_argument("--term-tables", help="JSON file with custom term tables")
    parser.add_argument(
        "--max-subjects",
        type=int,
        default=MAX_SUBJECTS,
        help="Maximum subject areas per document (default: 3)"
    )
    parser.add_argument("--no-key-terms", action="store_true", help="Omit key term frequencies")
    parser.add_argument("--no-patterns", action="store_true", help="Skip entity pattern extraction")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.example:
        analyze_example()
        return 0

    if not (args.files or args.table or args.compare):
        parser.print_help()
        return 0

    try:
        tables = load_term_tables(args.term_tables) if args.term_tables else None
    except (FileNotFoundError, ValueError) as e:
        print_status(f"Invalid term tables: {e}", "ERROR")
        return 1

    classifier = DocumentClassifier(term_tables=tables)
    options = ClassificationOptions(
        max_subjects=args.max_subjects,
        include_key_terms=not args.no_key_terms,
        include_regex_patterns=not args.no_patterns,
    )

    if args.compare:
        return compare_files(classifier, *args.compare)
    if args.table:
        return classify_table(classifier, args.table, options, args.out)
    return classify_files(classifier, args.files, options, args.out)


if __name__ == "__main__":
    sys.exit(main())
