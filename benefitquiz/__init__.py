"""benefitquiz.

Question selection and deduplication for an employee-benefits training quiz:
bank loading, difficulty-tiered selection with concept-level dedup, choice
shuffling, optional remote generation, and quiz session state.
"""

from .config import AppConfig, default_app_config
from .data import Question, load_pool, normalize_record
from .errors import (
    BankUnavailableError,
    GenerationError,
    InvalidQuestionError,
    QuizError,
    RequestValidationError,
)
from .quiz import QuizBuildRequest, QuizBuildResult, QuizSession, build_quiz
from .selection import ConceptKeyPolicy, present, select_questions, select_with_report
from .utils import RandomSource, setup_logging

__all__ = [
    "__version__",
    "AppConfig",
    "default_app_config",
    "Question",
    "normalize_record",
    "load_pool",
    "ConceptKeyPolicy",
    "select_questions",
    "select_with_report",
    "present",
    "QuizBuildRequest",
    "QuizBuildResult",
    "QuizSession",
    "build_quiz",
    "RandomSource",
    "setup_logging",
    "QuizError",
    "InvalidQuestionError",
    "BankUnavailableError",
    "GenerationError",
    "RequestValidationError",
]

__version__ = "0.1.0"
