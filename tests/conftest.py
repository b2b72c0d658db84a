from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable, Dict, List

import pytest
import yaml

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from benefitquiz.data.schemas import Question  # noqa: E402


# ====================
# Question Fixtures
# ====================

def make_question(
    topic: str = "basics",
    difficulty: str = "easy",
    text: str = "What is a deductible?",
    choices=("Alpha", "Bravo", "Charlie", "Delta"),
    correct_index: int = 0,
    explanation: str = "",
    concept: str | None = None,
) -> Question:
    return Question(
        topic=topic,
        difficulty=difficulty,
        text=text,
        choices=tuple(choices),
        correct_index=correct_index,
        explanation=explanation,
        rationale="",
        concept=concept,
    )


def make_tier(topic: str, difficulty: str, n: int, prefix: str = "") -> List[Question]:
    """``n`` questions with distinct text and distinct derived concepts."""
    return [
        make_question(
            topic=topic,
            difficulty=difficulty,
            text=f"{prefix}{topic} {difficulty} question {i}?",
            choices=(f"right {i}", f"wrong {i}a", f"wrong {i}b", f"wrong {i}c"),
            correct_index=0,
            explanation=f"{prefix}{topic} {difficulty} explanation {i}.",
        )
        for i in range(n)
    ]


@pytest.fixture
def question_factory() -> Callable[..., Question]:
    return make_question


@pytest.fixture
def basics_pool() -> List[Question]:
    """10 easy and 10 intermediate concept-unique basics questions."""
    return make_tier("basics", "easy", 10) + make_tier("basics", "intermediate", 10)


@pytest.fixture
def compliance_expert_pool() -> List[Question]:
    return make_tier("compliance", "expert", 3)


# ====================
# Bank Fixtures
# ====================

def raw_record(topic: str, difficulty: str, i: int) -> Dict:
    return {
        "topic": topic,
        "difficulty": difficulty,
        "q": f"{topic} {difficulty} bank question {i}?",
        "choices": [f"correct {i}", f"other {i}", f"another {i}"],
        "answer": 0,
        "explain": f"{topic} explanation {i}.",
    }


@pytest.fixture
def bank_dir(tmp_path) -> Path:
    """A registry with valid basics/funding banks, a missing sales bank and a corrupt compliance bank."""
    banks = tmp_path / "banks"
    banks.mkdir()
    (banks / "bank.basics.json").write_text(
        json.dumps([raw_record("basics", "easy", i) for i in range(4)]), encoding="utf-8"
    )
    (banks / "bank.funding.json").write_text(
        json.dumps([raw_record("funding", "intermediate", i) for i in range(3)]), encoding="utf-8"
    )
    (banks / "bank.compliance.json").write_text("{not json", encoding="utf-8")
    registry = {
        "banks": {
            "basics": "banks/bank.basics.json",
            "funding": "banks/bank.funding.json",
            "compliance": "banks/bank.compliance.json",
            "sales": "banks/bank.sales.json",
        }
    }
    (tmp_path / "banks.yaml").write_text(yaml.dump(registry), encoding="utf-8")
    return tmp_path


class FakeGenerator:
    """Stand-in for ``QuestionGenerator`` returning a canned payload or raising."""

    def __init__(self, payload=None, error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.calls = []

    def generate(self, topic, difficulty, count):
        self.calls.append((topic, difficulty, count))
        if self.error is not None:
            raise self.error
        return self.payload
