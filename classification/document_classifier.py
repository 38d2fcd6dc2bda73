# classification/document_classifier.py
"""
Rule-based Document Classifier for training documents

Pipeline:
    text -> [tokenize] -> [term frequencies] -> [category / subject / priority scoring]
         -> [selection] -> [tags & entities] -> [confidence] -> Classification

Business Rules:
1. Category: best normalized score, first declared wins ties, UNCLASSIFIED if nothing matched
2. Subjects: up to max_subjects labels with score > 0, best first
3. Priority: best normalized score, MEDIUM if nothing matched
4. Empty documents and internal failures degrade to the fallback classification;
   classify() never raises
"""
from __future__ import annotations
import time
import warnings
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, Hashable, List, Mapping, Optional, Union

import pandas as pd

from .cleaning import extract_text, term_frequencies, to_camel_case, tokenize, top_terms
from .constants import (
    FALLBACK_CONFIDENCE,
    MAX_KEY_TERMS,
    MAX_RELATED_DOCUMENTS,
    MAX_SUBJECTS,
    MAX_TAGGED_ENTITIES,
    MIN_CONFIDENCE_THRESHOLD,
    MIN_RELATED_SIMILARITY,
    MIN_TAG_TERM_LENGTH,
    SUBSTRING_BONUS,
    TOP_TAG_TERMS,
)
from .patterns import (
    AIRCRAFT_TYPE,
    DEFAULT_PATTERNS,
    METADATA_PATTERNS,
    REGULATORY_REFERENCE,
    PatternLike,
    RegexPatternSet,
)
from .scoring import estimate_confidence, normalize_scores, score_dimension, select_top, select_top_n
from .similarity import compare_documents, find_related_documents
from .term_tables import (
    DEFAULT_TERM_TABLES,
    DocumentCategory,
    PriorityLevel,
    SubjectArea,
    TermTables,
)


# ============================================================================
# OPTIONS & RESULT
# ============================================================================
@dataclass(frozen=True)
class ClassificationOptions:
    """Per-call options."""
    max_subjects: int = MAX_SUBJECTS
    include_key_terms: bool = True
    # False disables entity extraction; a mapping adds / overrides named patterns
    include_regex_patterns: Union[bool, Mapping[str, PatternLike]] = True
    include_related_documents: bool = True
    max_related_documents: int = MAX_RELATED_DOCUMENTS
    min_related_similarity: float = MIN_RELATED_SIMILARITY
    min_confidence_threshold: float = MIN_CONFIDENCE_THRESHOLD


DEFAULT_OPTIONS = ClassificationOptions()


def _coerce_options(options) -> ClassificationOptions:
    """None -> defaults; a plain mapping is turned into ClassificationOptions."""
    if options is None:
        return DEFAULT_OPTIONS
    if isinstance(options, Mapping):
        return ClassificationOptions(**options)
    return options


@dataclass
class ClassificationMetadata:
    key_terms: Dict[str, int] = field(default_factory=dict)
    regulatory_references: Optional[List[str]] = None
    aircraft_types: Optional[List[str]] = None
    processing_time_ms: float = field(default=0.0, compare=False)


@dataclass
class Classification:
    """Classification result (processing time is ignored by ==)."""
    category: DocumentCategory
    subjects: List[SubjectArea]
    priority: PriorityLevel
    tags: List[str]
    confidence: float  # 0-1
    metadata: ClassificationMetadata = field(default_factory=ClassificationMetadata)
    related_document_ids: Optional[List[Hashable]] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible dict (camelCase keys, optional fields omitted)."""
        meta: Dict[str, Any] = {"keyTerms": dict(self.metadata.key_terms)}
        if self.metadata.regulatory_references:
            meta["regulatoryReferences"] = list(self.metadata.regulatory_references)
        if self.metadata.aircraft_types:
            meta["aircraftTypes"] = list(self.metadata.aircraft_types)
        meta["processingTimeMs"] = self.metadata.processing_time_ms

        out: Dict[str, Any] = {
            "category": self.category.value,
            "subjects": [s.value for s in self.subjects],
            "priority": self.priority.value,
            "tags": list(self.tags),
            "confidence": self.confidence,
            "metadata": meta,
        }
        if self.related_document_ids is not None:
            out["relatedDocumentIds"] = list(self.related_document_ids)
        return out


@dataclass
class DocumentScores:
    """Intermediate, normalized scores for one document."""
    frequencies: Dict[str, int]
    category: Dict[DocumentCategory, float]
    subject: Dict[SubjectArea, float]
    priority: Dict[PriorityLevel, float]


def fallback_classification(elapsed_ms: float = 0.0) -> Classification:
    """Default result for empty documents and internal failures."""
    return Classification(
        category=DocumentCategory.UNCLASSIFIED,
        subjects=[SubjectArea.GENERAL],
        priority=PriorityLevel.MEDIUM,
        tags=[],
        confidence=FALLBACK_CONFIDENCE,
        metadata=ClassificationMetadata(processing_time_ms=elapsed_ms),
    )


def _dedupe(items) -> List[str]:
    seen = set()
    out = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            out.append(item)
    return out


# ============================================================================
# CLASSIFIER
# ============================================================================
class DocumentClassifier:
    """
    Classify training documents by category, subject area and priority.

    Stateless between calls: term tables and patterns are immutable, so one
    instance can be shared across threads.
    """

    def __init__(
        self,
        term_tables: Optional[TermTables] = None,
        patterns: Optional[RegexPatternSet] = None,
    ):
        """
        Initialize classifier.

        Args:
            term_tables: Custom term tables (see term_tables.load_term_tables)
            patterns: Custom entity pattern set
        """
        self.term_tables = term_tables or DEFAULT_TERM_TABLES
        self.patterns = patterns or DEFAULT_PATTERNS

    # ---------------- scoring ----------------
    def score(self, text: str) -> DocumentScores:
        """Tokenize and score one text on all three dimensions."""
        freqs = term_frequencies(tokenize(text))
        tables = self.term_tables
        return DocumentScores(
            frequencies=freqs,
            category=normalize_scores(
                score_dimension(freqs, tables.category, SUBSTRING_BONUS["category"])
            ),
            subject=normalize_scores(
                score_dimension(freqs, tables.subject, SUBSTRING_BONUS["subject"])
            ),
            priority=normalize_scores(
                score_dimension(freqs, tables.priority, SUBSTRING_BONUS["priority"])
            ),
        )

    # ---------------- tags & entities ----------------
    def _patterns_for(self, options: ClassificationOptions) -> Optional[RegexPatternSet]:
        selected = options.include_regex_patterns
        if selected is False or selected is None:
            return None
        if isinstance(selected, Mapping):
            return self.patterns.merged(selected)
        return self.patterns

    def extract_tags(
        self,
        text: str,
        frequencies: Mapping[str, int],
        category: DocumentCategory,
        patterns: Optional[RegexPatternSet] = None,
    ) -> Dict[str, List[str]]:
        """
        Build tag list plus entity metadata.

        Returns:
            {"tags": [...], "aircraft_types": [...], "regulatory_references": [...]}
        """
        tags: List[str] = top_terms(dict(frequencies), TOP_TAG_TERMS, MIN_TAG_TERM_LENGTH)

        lowered = text.lower()
        for term in self.term_tables.category.get(category, ()):
            if term and term in lowered:
                tags.append(to_camel_case(term))

        entities = patterns.find_all(text) if patterns is not None else {}
        aircraft = entities.get(AIRCRAFT_TYPE, [])
        regulations = entities.get(REGULATORY_REFERENCE, [])
        tags.extend(aircraft[:MAX_TAGGED_ENTITIES])
        tags.extend(regulations[:MAX_TAGGED_ENTITIES])
        for name, matches in entities.items():
            if name not in METADATA_PATTERNS:
                tags.extend(matches)

        return {
            "tags": _dedupe(tags),
            "aircraft_types": aircraft,
            "regulatory_references": regulations,
        }

    # ---------------- main entry ----------------
    def _classify(
        self,
        text: str,
        options: ClassificationOptions,
        corpus: Optional[Mapping[Hashable, Any]],
        document_id: Optional[Hashable],
        started: float,
    ) -> Classification:
        scores = self.score(text)
        if not scores.frequencies:
            return fallback_classification((time.perf_counter() - started) * 1000)

        category = select_top(scores.category, DocumentCategory.UNCLASSIFIED)
        subjects = select_top_n(scores.subject, options.max_subjects)
        priority = select_top(scores.priority, PriorityLevel.MEDIUM)

        extracted = self.extract_tags(text, scores.frequencies, category, self._patterns_for(options))

        confidence = estimate_confidence(
            scores.category.get(category, 0.0),
            [scores.subject[s] for s in subjects],
        )

        related = None
        if corpus is not None and options.include_related_documents:
            related = [
                doc_id for doc_id, _ in find_related_documents(
                    text,
                    corpus,
                    max_related=options.max_related_documents,
                    min_similarity=options.min_related_similarity,
                    exclude=document_id,
                )
            ]

        metadata = ClassificationMetadata(
            key_terms=(
                {t: scores.frequencies[t] for t in top_terms(scores.frequencies, MAX_KEY_TERMS)}
                if options.include_key_terms else {}
            ),
            regulatory_references=extracted["regulatory_references"] or None,
            aircraft_types=extracted["aircraft_types"] or None,
        )
        result = Classification(
            category=category,
            subjects=subjects,
            priority=priority,
            tags=extracted["tags"],
            confidence=confidence,
            metadata=metadata,
            related_document_ids=related,
        )
        metadata.processing_time_ms = (time.perf_counter() - started) * 1000
        return result

    def classify(
        self,
        document: Any,
        options: Union[ClassificationOptions, Mapping[str, Any], None] = None,
        corpus: Optional[Mapping[Hashable, Any]] = None,
        document_id: Optional[Hashable] = None,
    ) -> Classification:
        """
        Classify one document.

        Args:
            document: str, {"text": ...}, object with .text, or a structure with .elements
            options: ClassificationOptions or a mapping of its fields (defaults if None)
            corpus: Optional id -> text mapping used to find related documents
            document_id: Id of this document inside corpus (excluded from related)

        Returns:
            Classification. Never raises; failures give the fallback result.
        """
        started = time.perf_counter()
        try:
            text = extract_text(document)
            return self._classify(text, _coerce_options(options), corpus, document_id, started)
        except Exception as e:
            warnings.warn(f"Document classification failed: {e}")
            return fallback_classification((time.perf_counter() - started) * 1000)

    def compare(self, doc_a: Any, doc_b: Any) -> float:
        """Cosine similarity of two document-like inputs."""
        return compare_documents(doc_a, doc_b)

    # ---------------- batch ----------------
    def classify_batch(
        self,
        df: pd.DataFrame,
        text_col: str = "Document_Text",
        id_col: str = "Document_Id",
        options: Optional[ClassificationOptions] = None,
    ) -> pd.DataFrame:
        """
        Classify every row of a DataFrame.

        Args:
            df: DataFrame with document text
            text_col: Column with the extracted text
            id_col: Column with document ids (optional; enables related documents)
            options: ClassificationOptions

        Returns:
            DataFrame with added columns:
            - Category, Subjects, Priority, Tags (str)
            - Confidence (float), Needs_Review (bool)
            - Regulatory_References, Aircraft_Types, Related_Documents (str)
        """
        opts = _coerce_options(options)
        df = df.reset_index(drop=True)
        texts = ["" if pd.isna(v) else str(v) for v in df.get(text_col, pd.Series([""] * len(df)))]

        has_ids = id_col in df.columns
        if has_ids:
            # Blank ids fall back to the 1-based row number
            ids = [str(i + 1) if pd.isna(v) else v for i, v in enumerate(df[id_col])]
        else:
            ids = list(range(len(df)))

        # Corpus keyed by row position so blank or duplicate ids never collide
        corpus = dict(enumerate(texts)) if has_ids and opts.include_related_documents else None

        results = []
        for pos, text in enumerate(texts):
            result = self.classify(text, opts, corpus=corpus, document_id=pos)
            related = [ids[i] for i in (result.related_document_ids or [])]
            meta = result.metadata
            results.append({
                "Category": result.category.value,
                "Subjects": ", ".join(s.value for s in result.subjects),
                "Priority": result.priority.value,
                "Tags": ", ".join(result.tags),
                "Confidence": round(result.confidence, 4),
                "Needs_Review": result.confidence < opts.min_confidence_threshold,
                "Regulatory_References": ", ".join(meta.regulatory_references or []),
                "Aircraft_Types": ", ".join(meta.aircraft_types or []),
                "Related_Documents": ", ".join(str(i) for i in related),
            })

        result_df = pd.DataFrame(results, index=df.index)
        return pd.concat([df, result_df], axis=1)


# ============================================================================
# MODULE-LEVEL API
# ============================================================================
@lru_cache(maxsize=1)
def get_default_classifier() -> DocumentClassifier:
    return DocumentClassifier()


def classify_document(
    document: Any,
    options: Union[ClassificationOptions, Mapping[str, Any], None] = None,
    corpus: Optional[Mapping[Hashable, Any]] = None,
    document_id: Optional[Hashable] = None,
) -> Classification:
    """Classify with the default term tables and patterns."""
    return get_default_classifier().classify(document, options, corpus=corpus, document_id=document_id)


# ============================================================================
# EXAMPLE ANALYSIS
# ============================================================================
EXAMPLE_TEXT = """
B737-800 Simulator Session 4 - Hydraulic System Check
Rev 2, March 5, 2024

The trainee shall perform the hydraulic system check per the aircraft
maintenance manual. System A and System B pressure must be verified before
engine start. WARNING: loss of hydraulic pressure affects the flight control
system and landing gear extension. Compliance with Part 121 training
requirements is mandatory.

Climb to 10,000 ft, heading 270, contact departure on 124.35 MHz.
"""


def analyze_example():
    """Classify the bundled example document and print the result."""
    result = classify_document(EXAMPLE_TEXT)

    print("=" * 70)
    print("EXAMPLE CLASSIFICATION")
    print("=" * 70)
    print(f"\nCategory:   {result.category.value}")
    print(f"Subjects:   {', '.join(s.value for s in result.subjects)}")
    print(f"Priority:   {result.priority.value}")
    print(f"Confidence: {result.confidence:.0%}")
    print(f"Tags:       {', '.join(result.tags)}")
    print(f"Aircraft:   {result.metadata.aircraft_types}")
    print(f"Regs:       {result.metadata.regulatory_references}")
    print(f"Time:       {result.metadata.processing_time_ms:.2f} ms")
    return result


if __name__ == "__main__":
    analyze_example()
