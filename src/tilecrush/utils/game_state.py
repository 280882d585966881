from __future__ import annotations

from typing import Type, TypeVar

from esper import World

from tilecrush.components.board_state import BoardState
from tilecrush.components.cascade_state import CascadeState
from tilecrush.components.game_state import GameState, GameStatus
from tilecrush.components.level_progress import LevelProgress
from tilecrush.components.player_progress import PlayerProgress
from tilecrush.events.bus import EVENT_GAME_STATUS_CHANGED, EventBus

C = TypeVar("C")


def _singleton(world: World, component_type: Type[C]) -> C:
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} not found")


def get_game_state(world: World) -> GameState:
    return _singleton(world, GameState)


def get_board_state(world: World) -> BoardState:
    return _singleton(world, BoardState)


def get_level_progress(world: World) -> LevelProgress:
    return _singleton(world, LevelProgress)


def get_player_progress(world: World) -> PlayerProgress:
    return _singleton(world, PlayerProgress)


def get_or_create_cascade_state(world: World) -> CascadeState:
    """Return the shared CascadeState component, creating it if absent."""
    existing = list(world.get_component(CascadeState))
    if existing:
        return existing[0][1]
    world.create_entity(CascadeState())
    return list(world.get_component(CascadeState))[0][1]


def input_enabled(world: World) -> bool:
    """Board input is accepted only while playing and no cascade is on screen."""
    if get_game_state(world).status is not GameStatus.PLAYING:
        return False
    return not get_or_create_cascade_state(world).active


def set_game_status(world: World, event_bus: EventBus, status: GameStatus) -> None:
    """Update the global status and emit a change event when it differs."""
    for _, state in world.get_component(GameState):
        previous = state.status
        if previous == status:
            return
        state.status = status
        event_bus.emit(EVENT_GAME_STATUS_CHANGED, previous_status=previous, new_status=status)
        return
    world.create_entity(GameState(status=status))
    event_bus.emit(EVENT_GAME_STATUS_CHANGED, previous_status=None, new_status=status)
