"""Deck creation: pick distinct images, pair them up and shuffle."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from pairup.core.errors import InsufficientPoolSize, InvalidLevel
from pairup.core.images import ImagePool
from pairup.core.shuffle import ShuffleEngine

logger = logging.getLogger(__name__)

MIN_LEVEL = 1
MAX_LEVEL = 3
PAIRS_PER_LEVEL = 2


@dataclass
class Tile:
    """One card on the board. ``id`` never changes; the flags do."""

    id: int
    image_id: str
    flipped: bool = False
    matched: bool = False


def validate_level(level: object) -> int:
    """Return ``level`` if it is a playable level, else raise InvalidLevel."""
    if isinstance(level, bool) or not isinstance(level, int):
        raise InvalidLevel(level, MIN_LEVEL, MAX_LEVEL)
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise InvalidLevel(level, MIN_LEVEL, MAX_LEVEL)
    return level


def pair_count(level: int) -> int:
    return PAIRS_PER_LEVEL * level


def tile_count(level: int) -> int:
    return 2 * pair_count(level)


class DeckGenerator:
    def __init__(self, pool: ImagePool, shuffler: Optional[ShuffleEngine] = None) -> None:
        self._pool = pool
        self._shuffler = shuffler if shuffler is not None else ShuffleEngine()

    @property
    def pool(self) -> ImagePool:
        return self._pool

    def generate(self, level: int, category: str) -> List[Tile]:
        """Build a fresh, face-down deck of ``4 * level`` tiles for ``category``."""
        validate_level(level)
        images = self._pool.images_for(category)
        needed = pair_count(level)
        if len(images) < needed:
            raise InsufficientPoolSize(category, needed, len(images))

        chosen = self._shuffler.shuffle(images)[:needed]
        paired = self._shuffler.shuffle(chosen + chosen)
        tiles = [Tile(id=index, image_id=image_id) for index, image_id in enumerate(paired)]
        logger.info("Generated %d tiles for level %d (%s)", len(tiles), level, category)
        return tiles
