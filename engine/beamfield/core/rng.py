"""Seeded random source for reproducible boards and agents."""

from __future__ import annotations
import hashlib
from typing import Sequence, TypeVar, Union
import numpy as np

T = TypeVar('T')

Seed = Union[str, int]


def seed_to_int(seed: Seed) -> int:
    """Map a string (or int) seed to a 128-bit integer."""
    if isinstance(seed, int):
        return seed
    digest = hashlib.sha256(seed.encode('utf-8')).digest()
    return int.from_bytes(digest[:16], 'little')


class SeededRandom:
    """Deterministic random number generator keyed by a seed string."""

    def __init__(self, seed: Seed):
        self.seed = seed
        self.g = np.random.Generator(np.random.PCG64(seed_to_int(seed)))

    def random(self) -> float:
        """Return a random float in [0, 1)."""
        return float(self.g.random())

    def randrange(self, n: int) -> int:
        """Return a random int in [0, n), drawn as floor(random() * n)."""
        return int(self.random() * n)

    def choice(self, items: Sequence[T]) -> T:
        return items[self.randrange(len(items))]

    def sample(self, items: Sequence[T], size: int) -> list[T]:
        """
        Pick `size` distinct items by a partial Fisher-Yates shuffle.

        Asking for more items than available returns all of them, shuffled.
        """
        clones = list(items)
        size = min(size, len(clones))
        for i in range(size):
            j = self.randrange(len(clones) - i) + i
            clones[i], clones[j] = clones[j], clones[i]
        return clones[:size]
