from dataclasses import dataclass
from typing import Tuple

from tilecrush.components.tile import TileKind


@dataclass(frozen=True, slots=True)
class LevelConfig:
    """Per-level parameters; read-only for the lifetime of a board."""
    level_number: int
    target_score: int
    timer_seconds: int
    kinds: Tuple[TileKind, ...]
