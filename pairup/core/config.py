from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameRules:
    """Scoring and timing knobs for a game."""

    match_points: int = 10
    mismatch_penalty: int = 2
    revert_delay_ms: int = 1000


def load_rules(path: Optional[Path] = None) -> GameRules:
    """Read ``data/rules.yaml``; a missing file falls back to the defaults."""
    path = path or Path(__file__).resolve().parent.parent / "data" / "rules.yaml"
    if not path.exists():
        logger.warning("Rules file %s not found, using defaults", path)
        return GameRules()

    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path.name}: expected a mapping of rule names to integers")

    known = {f.name for f in fields(GameRules)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"{path.name}: unknown rule(s): {', '.join(unknown)}")

    values = {}
    for name, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"{path.name}: '{name}' must be a non-negative integer")
        values[name] = value
    return GameRules(**values)
