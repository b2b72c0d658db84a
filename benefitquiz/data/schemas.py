"""Question record and request vocabularies."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Tuple

from ..errors import InvalidQuestionError
from .topics import default_rationale

TOPICS: Tuple[str, ...] = ("basics", "ancillary", "funding", "compliance", "sales")
MIXED = "mixed"
REQUEST_TOPICS: Tuple[str, ...] = TOPICS + (MIXED,)

# Ordered low -> high
DIFFICULTIES: Tuple[str, ...] = ("easy", "intermediate", "expert")

MIN_CHOICES = 2
MAX_CHOICES = 4


@dataclass(frozen=True)
class Question:
    """A single multiple-choice question.

    Records are immutable; transforms return new instances via ``replace``.
    """

    topic: str
    difficulty: str
    text: str
    choices: Tuple[str, ...]
    correct_index: int
    explanation: str = ""
    rationale: str = ""
    concept: Optional[str] = None
    source: str = "bank"

    @property
    def correct_answer(self) -> str:
        return self.choices[self.correct_index]

    def with_choices(self, choices: Tuple[str, ...], correct_index: int) -> "Question":
        return replace(self, choices=tuple(choices), correct_index=correct_index)

    def to_dict(self) -> dict:
        return {
            "topic": self.topic,
            "difficulty": self.difficulty,
            "q": self.text,
            "choices": list(self.choices),
            "answer": self.correct_index,
            "explain": self.explanation,
            "why": self.rationale,
            "concept": self.concept,
        }


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in raw and raw[k] is not None:
            return raw[k]
    return None


def _answer_to_index(answer: Any, choices: Tuple[str, ...]) -> int:
    """Resolve an int index, the literal answer text, or a letter/digit label.

    String answers match choice text first, so numeric choices such as
    ``["1", "2", "3"]`` resolve by value rather than by position.
    """
    if isinstance(answer, bool):
        raise InvalidQuestionError(f"Unrecognized answer: {answer!r}")
    if isinstance(answer, int):
        idx = answer
    elif isinstance(answer, str):
        s = answer.strip()
        lower_map = {c.lower(): i for i, c in enumerate(choices)}
        if s.lower() in lower_map:
            idx = lower_map[s.lower()]
        elif len(s) == 1 and s.upper().isalpha():
            idx = ord(s.upper()) - ord("A")
        elif s.isdigit():
            idx = int(s)
        else:
            raise InvalidQuestionError(f"Answer text not among choices: {s!r}")
    else:
        raise InvalidQuestionError(f"Unrecognized answer: {answer!r}")
    if not 0 <= idx < len(choices):
        raise InvalidQuestionError(f"Answer index {idx} out of range for {len(choices)} choices")
    return idx


def normalize_record(
    raw: Mapping[str, Any],
    default_topic: Optional[str] = None,
    default_difficulty: Optional[str] = None,
    source: str = "bank",
) -> Question:
    """Validate a raw bank/remote record and build a ``Question``.

    This is the one place optional fields are defaulted. A missing rationale
    takes the topic-keyed default.

    Raises:
        InvalidQuestionError: if a required field is missing or malformed
    """
    if not isinstance(raw, Mapping):
        raise InvalidQuestionError(f"Record must be an object, got {type(raw).__name__}")

    topic = str(_first_present(raw, "topic") or default_topic or "").strip().lower()
    if topic not in TOPICS:
        raise InvalidQuestionError(f"Unknown topic: {topic!r}")

    difficulty = str(_first_present(raw, "difficulty") or default_difficulty or "").strip().lower()
    if difficulty not in DIFFICULTIES:
        raise InvalidQuestionError(f"Unknown difficulty: {difficulty!r}")

    text = str(_first_present(raw, "q", "question", "text") or "").strip()
    if not text:
        raise InvalidQuestionError("Question text is empty")

    raw_choices = _first_present(raw, "choices")
    if not isinstance(raw_choices, (list, tuple)):
        raise InvalidQuestionError("Field 'choices' must be a list")
    choices = tuple(str(c).strip() for c in raw_choices)
    if not MIN_CHOICES <= len(choices) <= MAX_CHOICES:
        raise InvalidQuestionError(f"Expected {MIN_CHOICES}-{MAX_CHOICES} choices, got {len(choices)}")
    if any(not c for c in choices):
        raise InvalidQuestionError("Choices must be non-empty strings")
    if len(set(choices)) != len(choices):
        raise InvalidQuestionError("Choices must be distinct")

    answer = _first_present(raw, "answer", "correctIndex", "correct_index")
    if answer is None:
        raise InvalidQuestionError("Missing required field: answer")
    correct_index = _answer_to_index(answer, choices)

    explanation = str(_first_present(raw, "explain", "explanation") or "").strip()
    rationale = str(_first_present(raw, "why", "rationale") or "").strip() or default_rationale(topic)
    concept = str(_first_present(raw, "concept") or "").strip() or None

    return Question(
        topic=topic,
        difficulty=difficulty,
        text=text,
        choices=choices,
        correct_index=correct_index,
        explanation=explanation,
        rationale=rationale,
        concept=concept,
        source=source,
    )
