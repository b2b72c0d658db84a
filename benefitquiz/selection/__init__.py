"""Question selection, deduplication and presentation."""

from .dedupe import dedupe_by_concept, dedupe_by_text, dedupe_exact
from .keys import DEFAULT_POLICY, ConceptKeyPolicy, concept_key, exact_key, normalize_text, text_key
from .presenter import present, shuffle_choices
from .selector import MAX_QUESTIONS, SelectionReport, select_questions, select_with_report

__all__ = [
    "ConceptKeyPolicy",
    "DEFAULT_POLICY",
    "normalize_text",
    "exact_key",
    "text_key",
    "concept_key",
    "dedupe_exact",
    "dedupe_by_text",
    "dedupe_by_concept",
    "MAX_QUESTIONS",
    "SelectionReport",
    "select_questions",
    "select_with_report",
    "shuffle_choices",
    "present",
]
