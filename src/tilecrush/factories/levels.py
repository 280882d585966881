from __future__ import annotations

from tilecrush.components.level_config import LevelConfig
from tilecrush.components.tile import ALL_TILE_KINDS
from tilecrush.constants import TIMER_SECONDS


def kind_count_for_level(level_number: int) -> int:
    if level_number >= 10:
        return 6
    if level_number > 2:
        return 5
    return 4


def target_score_for_level(level_number: int) -> int:
    return 5000 + level_number * 1000


def generate_level_config(level_number: int) -> LevelConfig:
    """Level parameters: more tile kinds and a higher target as levels climb."""
    if level_number < 1:
        raise ValueError(f"Unknown level {level_number}")
    kinds = ALL_TILE_KINDS[: kind_count_for_level(level_number)]
    return LevelConfig(
        level_number=level_number,
        target_score=target_score_for_level(level_number),
        timer_seconds=TIMER_SECONDS,
        kinds=tuple(kinds),
    )
