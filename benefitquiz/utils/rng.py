"""Injectable randomness for question selection and choice shuffling."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class RandomSource:
    """Thin wrapper over ``random.Random``.

    Every shuffle and sample in the selection pipeline goes through one of
    these, so a seeded instance reproduces a quiz exactly.
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def shuffle(self, xs: Sequence[T]) -> list[T]:
        """Return a shuffled copy of ``xs``."""
        ys = list(xs)
        self._rng.shuffle(ys)
        return ys

    def sample(self, xs: Sequence[T], k: int) -> list[T]:
        """Draw up to ``k`` items without replacement."""
        if k <= 0:
            return []
        if k >= len(xs):
            return self.shuffle(xs)
        return self._rng.sample(list(xs), k)

    def permutation(self, n: int) -> list[int]:
        order = list(range(n))
        self._rng.shuffle(order)
        return order


def make_random_source(seed: int | None = None) -> RandomSource:
    return RandomSource(seed)
