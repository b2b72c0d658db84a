"""Question records and bank loading for benefitquiz."""

from .fallback import fallback_questions
from .loader import load_bank, load_pool, load_registry
from .schemas import DIFFICULTIES, MIXED, REQUEST_TOPICS, TOPICS, Question, normalize_record
from .topics import default_rationale, topic_label

__all__ = [
    "Question",
    "normalize_record",
    "TOPICS",
    "MIXED",
    "REQUEST_TOPICS",
    "DIFFICULTIES",
    "fallback_questions",
    "default_rationale",
    "topic_label",
    "load_bank",
    "load_pool",
    "load_registry",
]
