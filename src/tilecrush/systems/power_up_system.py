from __future__ import annotations

from esper import World

from tilecrush.components.effect_shape import POWER_UP_SHAPES, EffectShape
from tilecrush.engine.moves import perform_power_up
from tilecrush.errors import TileCrushError
from tilecrush.events.bus import (
    EVENT_POWER_UP_APPLIED,
    EVENT_POWER_UP_CLEARED,
    EVENT_POWER_UP_DENIED,
    EVENT_POWER_UP_GRANTED,
    EVENT_POWER_UP_REQUEST,
    EVENT_POWER_UP_SELECTED,
    EventBus,
)
from tilecrush.systems.board_system import publish_outcome
from tilecrush.utils.game_state import get_board_state, get_level_progress, get_player_progress, input_enabled


def grant_power_up(world: World, event_bus: EventBus, shape: EffectShape, amount: int = 1) -> int:
    """Add charges of ``shape`` to the player's inventory and return the new count."""
    if shape not in POWER_UP_SHAPES:
        raise ValueError(f"Unknown power-up '{shape}'")
    progress = get_player_progress(world)
    progress.add(shape, amount)
    count = progress.count(shape)
    event_bus.emit(EVENT_POWER_UP_GRANTED, shape=shape, amount=amount, count=count)
    return count


class PowerUpSystem:
    """Arms owned power-ups and fires them at the clicked cell."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_POWER_UP_SELECTED, self.on_power_up_selected)
        self.event_bus.subscribe(EVENT_POWER_UP_REQUEST, self.on_power_up_request)

    def on_power_up_selected(self, sender, **kwargs) -> None:
        shape = kwargs.get('shape')
        if shape not in POWER_UP_SHAPES:
            return
        progress = get_player_progress(self.world)
        if progress.armed == shape:
            progress.armed = None
            self.event_bus.emit(EVENT_POWER_UP_CLEARED, shape=shape, reason='toggle')
            return
        if not input_enabled(self.world):
            self.event_bus.emit(EVENT_POWER_UP_DENIED, shape=shape, reason='input_locked')
            return
        if progress.count(shape) <= 0:
            self.event_bus.emit(EVENT_POWER_UP_DENIED, shape=shape, reason='none_owned')
            return
        progress.armed = shape

    def on_power_up_request(self, sender, **kwargs) -> None:
        shape = kwargs.get('shape')
        row = kwargs.get('row')
        col = kwargs.get('col')
        if shape is None or row is None or col is None:
            return
        if not input_enabled(self.world):
            return
        progress = get_player_progress(self.world)
        if progress.count(shape) <= 0:
            self.event_bus.emit(EVENT_POWER_UP_DENIED, shape=shape, reason='none_owned')
            return
        board_state = get_board_state(self.world)
        kinds = get_level_progress(self.world).config.kinds
        try:
            outcome = perform_power_up(board_state.board, shape, col, row, kinds, rng=self.world.random)
        except (TileCrushError, ValueError) as exc:
            self.event_bus.emit(EVENT_POWER_UP_DENIED, shape=shape, reason=str(exc))
            return
        progress.spend(shape)
        progress.armed = None
        positions = list(outcome.passes[0].resolution.removed) if outcome.passes else []
        self.event_bus.emit(EVENT_POWER_UP_APPLIED, shape=shape, row=row, col=col, positions=positions)
        self.event_bus.emit(EVENT_POWER_UP_CLEARED, shape=shape, reason='used')
        publish_outcome(self.world, self.event_bus, outcome, source='power_up')
