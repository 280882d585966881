from typing import Optional, Tuple

from esper import World

from tilecrush.engine.moves import MoveOutcome, perform_swap
from tilecrush.errors import TileCrushError
from tilecrush.events.bus import (
    EVENT_BOARD_CHANGED,
    EVENT_MOUSE_PRESS,
    EVENT_MOVE_RESOLVED,
    EVENT_POWER_UP_REQUEST,
    EVENT_SCORE_GAINED,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_VALID,
    EventBus,
)
from tilecrush.engine.board_ops import is_adjacent
from tilecrush.utils.game_state import get_board_state, get_level_progress, get_player_progress, input_enabled

MOUSE_BUTTON_RIGHT = 4


def publish_outcome(world: World, event_bus: EventBus, outcome: MoveOutcome, source: str) -> None:
    """Store the settled board and announce the move to playback and scoring."""
    get_board_state(world).board = outcome.board
    event_bus.emit(EVENT_MOVE_RESOLVED, source=source, outcome=outcome)
    if outcome.points:
        event_bus.emit(EVENT_SCORE_GAINED, points=outcome.points, source=source)
    event_bus.emit(EVENT_BOARD_CHANGED, reason=source, board=outcome.board)


class BoardSystem:
    """Turns tile clicks into swaps and runs them through the engine."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.selected: Optional[Tuple[int, int]] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if not input_enabled(self.world):
            return
        if not get_board_state(self.world).board.in_bounds(row, col):
            return
        armed = get_player_progress(self.world).armed
        if armed is not None:
            self._clear_selection(reason='power_up')
            self.event_bus.emit(EVENT_POWER_UP_REQUEST, shape=armed, row=row, col=col)
            return
        if self.selected is None:
            self.selected = (row, col)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)
        elif self.selected == (row, col):
            self._clear_selection(reason='toggle')
        elif is_adjacent(self.selected, (row, col)):
            src = self.selected
            self.selected = None
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=(row, col))
        else:
            self.selected = (row, col)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)

    def on_mouse_press(self, sender, **kwargs):
        # Right-click always clears the current selection.
        if kwargs.get('button') != MOUSE_BUTTON_RIGHT:
            return
        self._clear_selection(reason='right_click')

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        if not input_enabled(self.world):
            return
        board_state = get_board_state(self.world)
        kinds = get_level_progress(self.world).config.kinds
        try:
            outcome = perform_swap(board_state.board, src, dst, kinds, rng=self.world.random)
        except TileCrushError as exc:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason=str(exc))
            return
        if not outcome.accepted:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason='no_match')
            return
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        publish_outcome(self.world, self.event_bus, outcome, source='swap')

    def _clear_selection(self, reason: str) -> None:
        prev = self.selected
        if prev is None:
            return
        self.selected = None
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev[0], prev_col=prev[1])
