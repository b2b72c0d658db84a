"""Order-preserving deduplication; the first occurrence of each key wins."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import List

from ..data.schemas import Question
from .keys import DEFAULT_POLICY, ConceptKeyPolicy, concept_key, exact_key, text_key


def dedupe_by_key(items: Iterable[Question], key: Callable[[Question], Hashable]) -> List[Question]:
    seen = set()
    out: List[Question] = []
    for it in items:
        k = key(it)
        if k in seen:
            continue
        seen.add(k)
        out.append(it)
    return out


def dedupe_exact(items: Iterable[Question]) -> List[Question]:
    return dedupe_by_key(items, exact_key)


def dedupe_by_text(items: Iterable[Question]) -> List[Question]:
    return dedupe_by_key(items, text_key)


def dedupe_by_concept(items: Iterable[Question], policy: ConceptKeyPolicy = DEFAULT_POLICY) -> List[Question]:
    return dedupe_by_key(items, lambda q: concept_key(q, policy))
