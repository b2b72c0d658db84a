"""In-progress quiz state.

``QuizSession`` is handed to whatever drives the quiz (CLI, web view). The
selection code never sees it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ..data.schemas import Question
from ..data.topics import default_rationale, topic_label

COACHING = {
    "basics": "Revisit HDHP/HSA rules, OOPM vs deductible, and formulary tiers. Use simple examples during employee education.",
    "ancillary": "Emphasize preventive dental/vision design, LTD/Life taxability, and when EAP or indemnity applies.",
    "funding": "Review specific vs aggregate stop-loss and attachment points; model level-funded surplus/deficit scenarios.",
    "compliance": "Tighten COBRA timelines, ERISA fiduciary awareness, and MHPAEA/NQTL basics to reduce risk.",
    "sales": "Deepen discovery, steerage framing (quality + navigation), and claims analytics to support ROI stories.",
}
GENERIC_COACHING = "Focus training on key fundamentals and real scenarios."


@dataclass
class TopicStats:
    total: int = 0
    correct: int = 0

    @property
    def pct(self) -> float:
        return self.correct / self.total if self.total else 0.0


@dataclass
class AnswerFeedback:
    correct: bool
    chosen: str
    correct_answer: str
    explanation: str
    rationale: str


@dataclass
class QuizSession:
    questions: List[Question]
    topic: str
    difficulty: str
    mode: str = "Local"
    index: int = 0
    score: int = 0
    answers: List[Optional[int]] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    per_topic: Dict[str, TopicStats] = field(default_factory=dict)
    revisiting: bool = False
    finished_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.questions:
            raise ValueError("A quiz session needs at least one question")
        if not self.answers:
            self.answers = [None] * len(self.questions)

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current(self) -> Question:
        return self.questions[self.index]

    @property
    def finished(self) -> bool:
        return self.finished_at is not None

    @property
    def progress_text(self) -> str:
        return f"Question {self.index + 1} of {self.total}"

    def is_answered(self, i: Optional[int] = None) -> bool:
        return self.answers[self.index if i is None else i] is not None

    def answer(self, choice_index: int) -> Optional[AnswerFeedback]:
        """Record an answer for the current question.

        Returns ``None`` if the question was already answered.
        """
        if self.is_answered():
            return None
        q = self.current
        if not 0 <= choice_index < len(q.choices):
            raise IndexError(f"Choice {choice_index} out of range for {len(q.choices)} choices")

        is_correct = choice_index == q.correct_index
        self.answers[self.index] = choice_index
        if is_correct:
            self.score += 1
        stats = self.per_topic.setdefault(q.topic, TopicStats())
        stats.total += 1
        stats.correct += int(is_correct)

        return AnswerFeedback(
            correct=is_correct,
            chosen=q.choices[choice_index],
            correct_answer=q.correct_answer,
            explanation=q.explanation,
            rationale=q.rationale or default_rationale(q.topic),
        )

    def next(self) -> bool:
        """Advance; revisit skipped questions at the end. False once finished."""
        if not self.revisiting and self.index < self.total - 1:
            self.index += 1
            return True
        self.revisiting = True
        while self.skipped:
            i = self.skipped.pop(0)
            if not self.is_answered(i):
                self.index = i
                return True
        self.finish()
        return False

    def skip(self) -> bool:
        """Defer the current question. Skips while revisiting are not queued again."""
        if not self.revisiting and not self.is_answered() and self.index not in self.skipped:
            self.skipped.append(self.index)
        return self.next()

    def finish(self, now: Optional[datetime] = None) -> None:
        if self.finished_at is None:
            self.finished_at = now or datetime.now()

    @property
    def percent(self) -> int:
        # round half up
        return (self.score * 200 + self.total) // (2 * self.total)

    @property
    def title(self) -> str:
        pct = self.percent
        if pct >= 90:
            return "Benefits Pro"
        if pct >= 75:
            return "Advisor-in-Training"
        if pct >= 60:
            return "Getting There"
        return "Needs Enrollment Counseling"

    @property
    def note(self) -> str:
        if self.percent >= 75:
            return "Strong grasp of concepts, nicely done!"
        return "Keep going: try a different topic or difficulty."

    def coaching_advice(self, limit: int = 2) -> str:
        """Advice lines for the weakest answered topics."""
        if not self.per_topic:
            return "Answer a few questions to get targeted coaching."
        weakest = sorted(self.per_topic.items(), key=lambda kv: kv[1].pct)[:limit]
        return "\n".join(
            f"- {topic_label(t)}: {COACHING.get(t, GENERIC_COACHING)}" for t, _ in weakest
        )

    def summary_rows(self) -> List[dict]:
        rows = []
        for i, q in enumerate(self.questions):
            user = self.answers[i]
            rows.append({
                "number": i + 1,
                "question": q.text,
                "your_answer": q.choices[user] if user is not None else None,
                "correct_answer": q.correct_answer,
                "correct": user == q.correct_index if user is not None else None,
                "explanation": q.explanation,
                "why": q.rationale,
            })
        return rows

    def badge(self) -> str:
        return f"{topic_label(self.topic)} • {self.difficulty}"

    def share_text(self) -> str:
        when = (self.finished_at or datetime.now()).strftime("%Y-%m-%d %H:%M")
        return (
            f"I scored {self.score} / {self.total} • {self.percent}% on the Employee Benefits Quiz "
            f"({self.badge()}) on {when}. Try to beat me!"
        )
