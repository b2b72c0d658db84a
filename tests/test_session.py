"""Tests for quiz progression, scoring and the end-of-quiz summary."""

from __future__ import annotations

from datetime import datetime

import pytest

from benefitquiz.quiz.session import COACHING, QuizSession

from conftest import make_question, make_tier


def _session(questions=None, topic="basics", difficulty="easy"):
    return QuizSession(questions or make_tier("basics", "easy", 4), topic, difficulty)


class TestProgression:
    def test_empty_session_rejected(self):
        with pytest.raises(ValueError):
            QuizSession([], "basics", "easy")

    def test_answer_and_advance(self):
        s = _session()
        assert s.progress_text == "Question 1 of 4"
        fb = s.answer(0)
        assert fb.correct
        assert fb.chosen == fb.correct_answer == "right 0"
        assert fb.rationale
        assert s.next()
        assert s.progress_text == "Question 2 of 4"

    def test_wrong_answer_feedback(self):
        s = _session()
        fb = s.answer(2)
        assert not fb.correct
        assert fb.chosen == "wrong 0b"
        assert fb.correct_answer == "right 0"
        assert s.score == 0

    def test_second_answer_ignored(self):
        s = _session()
        s.answer(0)
        assert s.answer(1) is None
        assert s.score == 1
        assert s.per_topic["basics"].total == 1

    def test_out_of_range_choice(self):
        with pytest.raises(IndexError):
            _session().answer(7)

    def test_finishes_after_last(self):
        s = _session(make_tier("basics", "easy", 2))
        s.answer(0)
        s.next()
        s.answer(0)
        assert s.next() is False
        assert s.finished
        assert s.percent == 100

    def test_skipped_revisited_at_end(self):
        s = _session()
        s.skip()                     # skip 0
        s.answer(0)                  # answer 1
        s.next()
        s.skip()                     # skip 2
        s.answer(0)                  # answer 3
        assert s.next() is True
        assert s.index == 0
        s.answer(1)
        assert s.next() is True
        assert s.index == 2
        s.answer(0)
        assert s.next() is False
        assert s.finished
        assert s.score == 3
        assert s.answers == [1, 0, 0, 0]

    def test_skipping_during_revisit_ends_quiz(self):
        s = _session(make_tier("basics", "easy", 2))
        s.skip()
        s.answer(0)
        s.next()
        assert s.index == 0
        assert s.skip() is False
        assert s.finished
        assert s.answers == [None, 0]


class TestScoring:
    @pytest.mark.parametrize("correct,title", [
        (10, "Benefits Pro"),
        (9, "Benefits Pro"),
        (8, "Advisor-in-Training"),
        (6, "Getting There"),
        (5, "Needs Enrollment Counseling"),
        (0, "Needs Enrollment Counseling"),
    ])
    def test_titles(self, correct, title):
        s = _session(make_tier("basics", "easy", 10))
        for i in range(10):
            s.answer(0 if i < correct else 1)
            s.next()
        assert s.title == title

    def test_per_topic_and_coaching(self):
        qs = make_tier("funding", "easy", 2) + make_tier("sales", "easy", 2) + make_tier("basics", "easy", 2)
        s = QuizSession(qs, "mixed", "easy")
        # funding 0/2, sales 1/2, basics 2/2
        for choice in (1, 1, 0, 1, 0, 0):
            s.answer(choice)
            s.next()
        assert s.per_topic["funding"].pct == 0.0
        assert s.per_topic["sales"].pct == 0.5
        advice = s.coaching_advice().splitlines()
        assert advice == [f"- Funding: {COACHING['funding']}", f"- Sales: {COACHING['sales']}"]

    def test_percent_rounds_half_up(self):
        s = _session(make_tier("basics", "easy", 8))
        s.answer(0)
        assert s.percent == 13

    def test_coaching_before_answers(self):
        assert _session().coaching_advice() == "Answer a few questions to get targeted coaching."

    def test_notes(self):
        s = _session(make_tier("basics", "easy", 4))
        for choice in (0, 0, 0, 1):
            s.answer(choice)
            s.next()
        assert s.percent == 75
        assert s.note == "Strong grasp of concepts, nicely done!"


class TestSummary:
    def test_summary_rows(self):
        q = make_question(choices=("Yes", "No"), correct_index=1, explanation="Because.")
        s = QuizSession([q, make_question(text="Other?")], "basics", "easy")
        s.answer(0)
        s.next()
        s.next()
        rows = s.summary_rows()
        assert rows[0] == {
            "number": 1,
            "question": "What is a deductible?",
            "your_answer": "Yes",
            "correct_answer": "No",
            "correct": False,
            "explanation": "Because.",
            "why": "",
        }
        assert rows[1]["your_answer"] is None
        assert rows[1]["correct"] is None

    def test_share_text(self):
        s = QuizSession(make_tier("compliance", "expert", 2), "compliance", "expert")
        s.answer(0)
        s.next()
        s.answer(1)
        s.next()
        s.finished_at = datetime(2024, 5, 1, 9, 30)
        assert s.badge() == "Compliance • expert"
        assert s.share_text() == (
            "I scored 1 / 2 • 50% on the Employee Benefits Quiz (Compliance • expert) "
            "on 2024-05-01 09:30. Try to beat me!"
        )
