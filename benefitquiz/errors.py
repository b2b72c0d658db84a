"""Exception hierarchy for benefitquiz.

Data-source failures (banks, remote generator) are absorbed into fallbacks by
their callers. Only ``RequestValidationError`` is meant to reach the user.
"""

from __future__ import annotations


class QuizError(Exception):
    """Base exception for quiz building errors."""
    pass


class InvalidQuestionError(QuizError):
    """Raised when a raw question record cannot be normalized."""
    pass


class BankUnavailableError(QuizError):
    """Raised when a question bank cannot be read or parsed."""

    def __init__(self, message: str, location: str | None = None):
        super().__init__(message)
        self.location = location


class GenerationError(QuizError):
    """Raised when the remote question generator fails or returns junk."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RequestValidationError(QuizError):
    """Raised for a quiz build request that must be corrected by the user."""

    def __init__(self, message: str, field: str = "count"):
        super().__init__(message)
        self.field = field
        self.message = message
