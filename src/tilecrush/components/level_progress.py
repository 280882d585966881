from dataclasses import dataclass

from tilecrush.components.level_config import LevelConfig


@dataclass(slots=True)
class LevelProgress:
    """Score and timer for the level being played."""
    config: LevelConfig
    score: int = 0
    time_left: float = 0.0

    @property
    def target_reached(self) -> bool:
        return self.score >= self.config.target_score
