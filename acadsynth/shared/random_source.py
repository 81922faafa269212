"""
Injectable pseudo-random source shared by every generator in a run.
"""

from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Mapping, Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource(ABC):
    """Abstract random source. Generators only draw through this interface."""

    @abstractmethod
    def random(self) -> float:
        """Uniform float in [0, 1)."""
        pass

    @abstractmethod
    def uniform(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        pass

    @abstractmethod
    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both ends inclusive."""
        pass

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self.random() < probability

    def choice(self, options: Sequence[T]) -> T:
        """Uniformly chosen element of a non-empty sequence."""
        if not options:
            raise ValueError("cannot choose from an empty sequence")
        return options[self.randint(0, len(options) - 1)]

    def weighted_choice(self, weights: Mapping[str, float]) -> str:
        """
        Pick a key with probability proportional to its weight.

        All-zero weights pick the first key. A threshold left above the running
        sum by float rounding picks the last key.
        """
        keys = list(weights)
        if not keys:
            raise ValueError("cannot choose from an empty mapping")
        total = sum(weights.values())
        threshold = self.random() * total
        running = 0.0
        for key in keys:
            running += weights[key]
            if threshold <= running:
                return key
        return keys[-1]

    def random_date(self, start: date, end: date) -> date:
        """Uniform calendar date in [start, end]."""
        if end < start:
            raise ValueError(f"empty date window: {start} > {end}")
        return start + timedelta(days=self.randint(0, (end - start).days))


class NumpyRandomSource(RandomSource):
    """RandomSource backed by a numpy Generator; seedable for reproducible runs."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        return float(self._rng.random())

    def uniform(self, low: float, high: float) -> float:
        return float(self._rng.uniform(low, high))

    def randint(self, low: int, high: int) -> int:
        if high < low:
            raise ValueError(f"empty integer range: {low} > {high}")
        return int(self._rng.integers(low, high + 1))
