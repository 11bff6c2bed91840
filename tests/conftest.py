"""Shared fixtures: a small image catalog, seeded decks and a hand-fired scheduler."""

from __future__ import annotations

from random import Random
from typing import Callable, Optional

import pytest

from pairup.core.deck import DeckGenerator
from pairup.core.images import ImagePool
from pairup.core.shuffle import ShuffleEngine

CATALOG = {
    "categories": {
        "flower": {
            "title": "Flowers",
            "images": [
                {"id": "daisy", "label": "🌼"},
                {"id": "sunflower", "label": "🌻"},
                "tulip",
                "rose",
                "purple",
                "tree",
            ],
        },
        "animal": {
            "title": "Animals",
            "images": ["bunny", "deer", "duck", "kitten", "panda", "puppy"],
        },
        "tiny": {
            "title": "Tiny",
            "images": ["one", "two", "three"],
        },
    }
}


class ManualScheduler:
    """Stands in for ResolutionScheduler; tests call ``fire()`` to let time pass."""

    def __init__(self) -> None:
        self.action: Optional[Callable[[], None]] = None
        self.delay_ms: Optional[int] = None
        self.armed_count = 0
        self.cancel_count = 0

    @property
    def pending(self) -> bool:
        return self.action is not None

    def arm(self, delay_ms: int, action: Callable[[], None]) -> None:
        self.action = action
        self.delay_ms = delay_ms
        self.armed_count += 1

    def cancel(self) -> bool:
        if self.action is None:
            return False
        self.action = None
        self.cancel_count += 1
        return True

    def fire(self) -> None:
        action, self.action = self.action, None
        assert action is not None, "nothing was armed"
        action()


@pytest.fixture()
def pool() -> ImagePool:
    return ImagePool.from_mapping(CATALOG)


@pytest.fixture()
def generator(pool: ImagePool) -> DeckGenerator:
    return DeckGenerator(pool, ShuffleEngine(Random(1234)))


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()
