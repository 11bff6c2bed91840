"""Uniform random permutations for deck building."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


class ShuffleEngine:
    """Produces shuffled copies of sequences.

    ``Random.shuffle`` is a Fisher-Yates shuffle, so every permutation is
    equally likely. Pass a seeded ``Random`` for reproducible decks.
    """

    def __init__(self, rng: Optional[Random] = None) -> None:
        self._rng = rng if rng is not None else Random()

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a new list with the elements of ``items`` in random order."""
        result = list(items)
        self._rng.shuffle(result)
        return result
