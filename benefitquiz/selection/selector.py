"""Quiz question selection.

Turns a candidate pool into a deduplicated, difficulty-mixed question list:

1. keep in-topic records and drop exact duplicates (the groomed pool)
2. split into the requested tier (primary) and the next-harder tier (stretch)
3. sample ``floor(n * ratio)`` stretch and the rest primary, concept-unique
4. top up from the groomed pool keeping concept and text uniqueness
5. if still short, relax to text uniqueness only
6. shuffle
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..data.schemas import MIXED, Question
from ..utils.rng import RandomSource
from .dedupe import dedupe_by_concept, dedupe_by_text, dedupe_exact
from .keys import DEFAULT_POLICY, ConceptKeyPolicy, concept_key, text_key

logger = logging.getLogger(__name__)

MAX_QUESTIONS = 100

NEXT_TIER = {"easy": "intermediate", "intermediate": "expert", "expert": "expert"}
STRETCH_RATIO = {"easy": 0.25, "intermediate": 0.50, "expert": 1.0}


@dataclass
class SelectionReport:
    questions: List[Question]
    requested: int
    groomed_size: int = 0
    primary_available: int = 0
    stretch_available: int = 0
    topped_up: int = 0
    relaxed_added: int = 0
    notes: List[str] = field(default_factory=list)

    @property
    def effective_count(self) -> int:
        return len(self.questions)

    @property
    def shortfall(self) -> bool:
        return self.effective_count < self.requested

    @property
    def relaxed(self) -> bool:
        return self.relaxed_added > 0


def clamp_count(desired_count: int) -> int:
    return max(0, min(int(desired_count), MAX_QUESTIONS))


def split_counts(desired: int, difficulty: str) -> Tuple[int, int]:
    """Return ``(primary_count, stretch_count)`` for a request."""
    stretch = math.floor(desired * STRETCH_RATIO[difficulty])
    return desired - stretch, stretch


def _groom(pool: Iterable[Question], topic: str, exclude_text_keys: Set) -> List[Question]:
    in_topic = [q for q in pool if topic == MIXED or q.topic == topic]
    if exclude_text_keys:
        in_topic = [q for q in in_topic if text_key(q) not in exclude_text_keys]
    return dedupe_exact(in_topic)


def select_with_report(
    pool: Sequence[Question],
    topic: str,
    difficulty: str,
    desired_count: int,
    rng: Optional[RandomSource] = None,
    policy: ConceptKeyPolicy = DEFAULT_POLICY,
    exclude_text_keys: Optional[Set] = None,
    exclude_concept_keys: Optional[Set] = None,
) -> SelectionReport:
    """Select up to ``desired_count`` unique questions and explain how.

    ``desired_count`` is clamped to ``MAX_QUESTIONS``; zero or less yields an
    empty result. ``exclude_text_keys`` removes questions already shown
    elsewhere (e.g. remotely generated ones) from consideration.
    ``exclude_concept_keys`` marks concepts already covered elsewhere: they are
    treated as seen, so matching questions only return through relaxation.
    """
    if difficulty not in STRETCH_RATIO:
        raise ValueError(f"Unknown difficulty: {difficulty!r}")
    rng = rng or RandomSource()
    desired = clamp_count(desired_count)
    report = SelectionReport(questions=[], requested=desired)
    if desired == 0:
        return report

    groomed = _groom(pool, topic, exclude_text_keys or set())
    report.groomed_size = len(groomed)

    covered = set(exclude_concept_keys or ())
    fresh = [q for q in groomed if concept_key(q, policy) not in covered]

    harder = NEXT_TIER[difficulty]
    primary = dedupe_by_concept([q for q in fresh if q.difficulty == difficulty], policy)
    stretch = dedupe_by_concept([q for q in fresh if q.difficulty == harder], policy)
    report.primary_available = len(primary)
    report.stretch_available = len(stretch)

    primary_count, stretch_count = split_counts(desired, difficulty)
    picked = rng.sample(primary, primary_count) + rng.sample(stretch, stretch_count)
    selected = dedupe_by_text(dedupe_by_concept(picked, policy))

    seen_concepts = covered | {concept_key(q, policy) for q in selected}
    seen_texts = {text_key(q) for q in selected}

    # Top-up keeping concept uniqueness
    if len(selected) < desired:
        for q in rng.shuffle(groomed):
            if len(selected) >= desired:
                break
            ck, tk = concept_key(q, policy), text_key(q)
            if ck in seen_concepts or tk in seen_texts:
                continue
            selected.append(q)
            seen_concepts.add(ck)
            seen_texts.add(tk)
            report.topped_up += 1

    # Relaxation: concept repeats allowed, text repeats never
    if len(selected) < desired:
        for q in rng.shuffle(groomed):
            if len(selected) >= desired:
                break
            tk = text_key(q)
            if tk in seen_texts:
                continue
            selected.append(q)
            seen_texts.add(tk)
            report.relaxed_added += 1
        if report.relaxed_added:
            report.notes.append(
                f"relaxed concept uniqueness for {report.relaxed_added} question(s)"
            )

    report.questions = rng.shuffle(selected)
    if report.shortfall:
        report.notes.append(
            f"only {report.effective_count} unique question(s) available; requested {desired}"
        )
    logger.debug(
        "Selected %d/%d for %s/%s (groomed=%d primary=%d stretch=%d topped_up=%d relaxed=%d)",
        report.effective_count, desired, topic, difficulty, report.groomed_size,
        report.primary_available, report.stretch_available, report.topped_up, report.relaxed_added,
    )
    return report


def select_questions(
    pool: Sequence[Question],
    topic: str,
    difficulty: str,
    desired_count: int,
    rng: Optional[RandomSource] = None,
    policy: ConceptKeyPolicy = DEFAULT_POLICY,
) -> List[Question]:
    return select_with_report(pool, topic, difficulty, desired_count, rng=rng, policy=policy).questions
