"""Identity keys used for deduplication.

Three levels, strongest last:

- exact key: topic + verbatim text + verbatim choice list
- text key: topic + normalized text
- concept key: explicit ``concept`` when present, else derived from the
  fields selected by ``ConceptKeyPolicy``

All keys are pure functions of the record.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from ..data.schemas import Question

_WS_RE = re.compile(r"\s+")


def normalize_text(s: str) -> str:
    """Lowercase, collapse whitespace, trim."""
    return _WS_RE.sub(" ", (s or "").lower()).strip()


@dataclass(frozen=True)
class ConceptKeyPolicy:
    """Which fields make up a derived concept key.

    The default treats two questions with the same explanation and the same
    correct answer text (within one topic and tier) as testing one concept.
    This over-merges questions sharing a generic explanation and under-merges
    rephrased explanations; tune it per bank rather than redefining it.
    """

    use_difficulty: bool = True
    use_explanation: bool = True
    use_answer_text: bool = True


DEFAULT_POLICY = ConceptKeyPolicy()


def exact_key(q: Question) -> Tuple[str, str, Tuple[str, ...]]:
    return (q.topic, q.text, tuple(q.choices))


def text_key(q: Question) -> Tuple[str, str]:
    return (q.topic, normalize_text(q.text))


def concept_key(q: Question, policy: ConceptKeyPolicy = DEFAULT_POLICY) -> Tuple[str, ...]:
    if q.concept:
        return ("concept", q.topic, normalize_text(q.concept))
    parts = ["derived", q.topic]
    if policy.use_difficulty:
        parts.append(q.difficulty)
    if policy.use_explanation:
        parts.append(normalize_text(q.explanation))
    if policy.use_answer_text:
        parts.append(normalize_text(q.correct_answer))
    if not (policy.use_explanation or policy.use_answer_text):
        # Nothing content-bearing selected: fall back to per-question identity
        parts.append(normalize_text(q.text))
    return tuple(parts)
