"""Errors raised when a deck or game generation cannot be set up."""

from __future__ import annotations


class GameSetupError(ValueError):
    """A level/category change was rejected; the previous game stays live."""


class InvalidLevel(GameSetupError):
    def __init__(self, level: object, min_level: int, max_level: int) -> None:
        self.level = level
        self.min_level = min_level
        self.max_level = max_level
        super().__init__(f"Level must be an integer in [{min_level}, {max_level}], got {level!r}")


class InvalidCategory(GameSetupError):
    def __init__(self, category: object, known: list[str]) -> None:
        self.category = category
        self.known = list(known)
        super().__init__(f"Unknown image category {category!r} (known: {', '.join(self.known) or 'none'})")


class InsufficientPoolSize(GameSetupError):
    def __init__(self, category: str, needed: int, available: int) -> None:
        self.category = category
        self.needed = needed
        self.available = available
        super().__init__(
            f"Category {category!r} has {available} images but {needed} distinct images are needed"
        )
