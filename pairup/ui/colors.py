"""Theme colors and color utilities for the UI."""


class GameColors:
    """Soft pastel palette for the board."""

    BG_TOP = "#fdf2f8"
    BG_BOTTOM = "#fce7f3"

    PRIMARY = "#a15e75"
    PRIMARY_LIGHT = "#c98ba0"
    PRIMARY_DARK = "#6d3a4c"

    TILE_BACK = "#e9ecef"
    TILE_FACE = "#ffffff"
    TILE_MATCHED = "#d1fae5"
    TILE_BORDER = "#ced4da"
    TILE_MATCHED_BORDER = "#34d399"

    CARD_BG = "rgba(255, 255, 255, 0.92)"

    TEXT_PRIMARY = "#343a40"
    TEXT_SECONDARY = "#495057"
    TEXT_MUTED = "#868e96"


def blend_hex(a: str, b: str, t: float) -> str:
    """Mix two #RRGGBB colors; t=0 gives a, t=1 gives b. Bad input returns a."""
    a = a.strip()
    b = b.strip()
    if not (len(a) == 7 and len(b) == 7 and a.startswith("#") and b.startswith("#")):
        return a
    try:
        start = [int(a[i:i + 2], 16) for i in (1, 3, 5)]
        end = [int(b[i:i + 2], 16) for i in (1, 3, 5)]
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    mixed = [int(s + (e - s) * t) for s, e in zip(start, end)]
    return "#" + "".join(f"{channel:02X}" for channel in mixed)


def tile_fill(face_up: bool, matched: bool, hovered: bool = False) -> str:
    """Background color for a tile in the given state."""
    if matched:
        return GameColors.TILE_MATCHED
    base = GameColors.TILE_FACE if face_up else GameColors.TILE_BACK
    if hovered and not face_up:
        return blend_hex(base, GameColors.PRIMARY_LIGHT, 0.15)
    return base
