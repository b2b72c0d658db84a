from __future__ import annotations

from typing import Iterable, List, Optional

from ..data.schemas import Question
from ..utils.rng import RandomSource


def shuffle_choices(q: Question, rng: Optional[RandomSource] = None) -> Question:
    """Return a copy of ``q`` with permuted choices and a remapped answer index.

    The answer text is invariant; only its position changes.
    """
    rng = rng or RandomSource()
    order = rng.permutation(len(q.choices))
    new_choices = tuple(q.choices[i] for i in order)
    return q.with_choices(new_choices, order.index(q.correct_index))


def present(questions: Iterable[Question], rng: Optional[RandomSource] = None) -> List[Question]:
    rng = rng or RandomSource()
    return [shuffle_choices(q, rng) for q in questions]
