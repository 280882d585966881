import random

from esper import World

from tilecrush.components.board_state import BoardState
from tilecrush.components.cascade_state import CascadeState
from tilecrush.components.game_state import GameState, GameStatus
from tilecrush.components.level_progress import LevelProgress
from tilecrush.components.player_progress import PlayerProgress
from tilecrush.engine.board_ops import create_board
from tilecrush.factories.levels import generate_level_config


def create_world(
    *,
    level_number: int = 1,
    initial_status: GameStatus = GameStatus.IDLE,
    rng: random.Random | None = None,
) -> World:
    """Build a world holding one level session: status, progress and board."""
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(GameState(status=initial_status), PlayerProgress(unlocked_level=level_number))
    world.create_entity(CascadeState())

    config = generate_level_config(level_number)
    board = create_board(config.kinds, rng=world.random)
    world.create_entity(
        LevelProgress(config=config, score=0, time_left=float(config.timer_seconds)),
        BoardState(board=board),
    )
    return world
