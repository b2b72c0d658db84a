"""Quiz building and session state."""

from .build import QuizBuildRequest, QuizBuildResult, build_quiz, parse_requested_count
from .session import AnswerFeedback, QuizSession, TopicStats

__all__ = [
    "QuizBuildRequest",
    "QuizBuildResult",
    "build_quiz",
    "parse_requested_count",
    "QuizSession",
    "AnswerFeedback",
    "TopicStats",
]
