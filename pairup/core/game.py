from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from functools import partial
from typing import Callable, List, Optional

from pairup.core.config import GameRules
from pairup.core.deck import MAX_LEVEL, MIN_LEVEL, DeckGenerator, Tile, validate_level
from pairup.core.scheduler import ResolutionScheduler

logger = logging.getLogger(__name__)


class Feedback(Enum):
    """Message for the outcome of the most recent pair."""

    NONE = ""
    MATCH = "🌟 Great job! You found a match!"
    RETRY = "🌀 Try again!"

    @property
    def text(self) -> str:
        return self.value


class SelectResult(Enum):
    IGNORED = auto()
    FLIPPED = auto()
    MATCHED = auto()
    MISMATCHED = auto()


class Progression(Enum):
    IN_PROGRESS = auto()
    NEXT_LEVEL = auto()
    GAME_COMPLETE = auto()


@dataclass
class GameState:
    """Board, selection and score for one generated deck.

    States follow the selection: Idle (nothing picked), OnePicked, and
    Resolving (two picked, ``locked`` until ``resolve_mismatch`` runs).
    """

    tiles: List[Tile]
    level: int
    category: str
    selection: List[int] = field(default_factory=list)
    locked: bool = False
    score: int = 0
    feedback: Feedback = Feedback.NONE
    rules: GameRules = field(default_factory=GameRules)

    def select(self, index: int) -> SelectResult:
        """Flip the tile at ``index`` and resolve the pair once two are up."""
        if not 0 <= index < len(self.tiles):
            raise IndexError(f"Tile index {index} out of range for {len(self.tiles)} tiles")
        tile = self.tiles[index]
        if self.locked or tile.flipped or tile.matched:
            return SelectResult.IGNORED

        tile.flipped = True
        self.selection.append(index)
        if len(self.selection) < 2:
            return SelectResult.FLIPPED

        first, second = (self.tiles[i] for i in self.selection)
        if first.image_id == second.image_id:
            first.matched = True
            second.matched = True
            self.score += self.rules.match_points
            self.feedback = Feedback.MATCH
            self.selection.clear()
            return SelectResult.MATCHED

        self.feedback = Feedback.RETRY
        self.locked = True
        self.score = max(self.score - self.rules.mismatch_penalty, 0)
        return SelectResult.MISMATCHED

    def resolve_mismatch(self) -> None:
        """Turn the unmatched pair face down again and accept input."""
        for index in self.selection:
            tile = self.tiles[index]
            if not tile.matched:
                tile.flipped = False
        self.selection.clear()
        self.locked = False

    def is_level_complete(self) -> bool:
        return all(tile.matched for tile in self.tiles)

    def progression(self) -> Progression:
        if not self.is_level_complete():
            return Progression.IN_PROGRESS
        if self.level < MAX_LEVEL:
            return Progression.NEXT_LEVEL
        return Progression.GAME_COMPLETE

    def matched_pairs(self) -> int:
        return sum(1 for tile in self.tiles if tile.matched) // 2

    def total_pairs(self) -> int:
        return len(self.tiles) // 2

    def grid_columns(self) -> int:
        """Columns for a roughly square board, never fewer than two."""
        return max(2, math.ceil(math.sqrt(len(self.tiles))))


class MatchingGame:
    """Owns the live GameState and everything that replaces or defers it.

    Each level/category change builds a new generation. A mismatch revert is
    bound to the generation it was armed in and is dropped if that generation
    has since been replaced.
    """

    def __init__(
        self,
        generator: DeckGenerator,
        scheduler: ResolutionScheduler,
        rules: Optional[GameRules] = None,
        *,
        level: int = MIN_LEVEL,
        category: str = "flower",
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self._generator = generator
        self._scheduler = scheduler
        self._rules = rules or GameRules()
        self._on_change = on_change
        self._generation = 0
        self._state = GameState(
            tiles=generator.generate(level, category),
            level=level,
            category=category,
            rules=self._rules,
        )

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def level(self) -> int:
        return self._state.level

    @property
    def category(self) -> str:
        return self._state.category

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def feedback(self) -> Feedback:
        return self._state.feedback

    def is_level_complete(self) -> bool:
        return self._state.is_level_complete()

    def set_on_change(self, callback: Optional[Callable[[], None]]) -> None:
        self._on_change = callback

    def set_level(self, level: int) -> None:
        validate_level(level)
        self._regenerate(level, self._state.category)

    def set_category(self, category: str) -> None:
        self._regenerate(self._state.level, category)

    def restart(self) -> None:
        """Deal a new deck for the current level and category."""
        self._regenerate(self._state.level, self._state.category)

    def select(self, index: int) -> SelectResult:
        result = self._state.select(index)
        logger.debug("select(%d) -> %s", index, result.name)
        if result is SelectResult.MISMATCHED:
            self._scheduler.arm(
                self._rules.revert_delay_ms,
                partial(self._resolve_mismatch, self._generation),
            )
        if result is not SelectResult.IGNORED:
            self._notify()
        return result

    def advance(self) -> Progression:
        """Move to the next level if this one is done; report where we are."""
        progression = self._state.progression()
        if progression is Progression.NEXT_LEVEL:
            self._regenerate(min(self._state.level + 1, MAX_LEVEL), self._state.category)
        elif progression is Progression.GAME_COMPLETE:
            logger.info("Game complete with score %d", self._state.score)
        return progression

    def close(self) -> None:
        self._scheduler.cancel()

    def _regenerate(self, level: int, category: str) -> None:
        # generate() raises before anything is touched, so a rejected change keeps the old board
        tiles = self._generator.generate(level, category)
        if self._scheduler.cancel():
            logger.debug("Cancelled pending revert from generation %d", self._generation)
        self._generation += 1
        self._state = GameState(
            tiles=tiles,
            level=level,
            category=category,
            score=self._state.score,
            rules=self._rules,
        )
        logger.info("Started level %d (%s), generation %d", level, category, self._generation)
        self._notify()

    def _resolve_mismatch(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("Dropping stale revert from generation %d", generation)
            return
        self._state.resolve_mismatch()
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
