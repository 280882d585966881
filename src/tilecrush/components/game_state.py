"""Game state resource describing the current level status."""
from dataclasses import dataclass
from enum import Enum, auto


class GameStatus(Enum):
    """High-level status that decides whether the board accepts input."""
    IDLE = auto()
    PLAYING = auto()
    PAUSED = auto()
    WON = auto()
    LOST = auto()
    REWARD_SELECT = auto()


@dataclass
class GameState:
    """Singleton component storing the current status."""
    status: GameStatus = GameStatus.IDLE
