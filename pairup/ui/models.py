"""Read-only view models handed to the widgets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pairup.core.game import GameState


@dataclass(frozen=True)
class TileView:
    """What the board may show for one tile. ``image_id`` is None while face down."""

    id: int
    image_id: Optional[str]
    face_up: bool
    matched: bool


def tile_views(state: GameState) -> List[TileView]:
    views: List[TileView] = []
    for tile in state.tiles:
        face_up = tile.flipped or tile.matched
        views.append(
            TileView(
                id=tile.id,
                image_id=tile.image_id if face_up else None,
                face_up=face_up,
                matched=tile.matched,
            )
        )
    return views
