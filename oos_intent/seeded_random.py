"""
Seeded pseudorandom source threaded through every training step.

Each training stage asks the provider for its own generator so that results do
not depend on the order in which concurrent stages consume random numbers.
"""
from typing import List, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class SeededRandom:
    """Deterministic shuffle, sample and range draws over a numpy Generator."""

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Returns a shuffled copy of ``items``."""
        order = self._rng.permutation(len(items))
        return [items[i] for i in order]

    def sample(self, items: Sequence[T], n: int) -> List[T]:
        """Draws ``min(n, len(items))`` elements without replacement."""
        size = min(max(n, 0), len(items))
        if size == 0:
            return []
        picked = self._rng.choice(len(items), size=size, replace=False)
        return [items[i] for i in picked]

    def uniform(self, low: float, high: float) -> float:
        if high <= low:
            return float(low)
        return float(self._rng.uniform(low, high))

    def integers(self, low: int, high: int) -> int:
        """Draws an integer in ``[low, high)``."""
        return int(self._rng.integers(low, high))


class SeededRandomProvider:
    """Default :class:`~oos_intent.tools.RandomProvider`."""

    def get_seeded(self, seed: int) -> SeededRandom:
        return SeededRandom(seed)
