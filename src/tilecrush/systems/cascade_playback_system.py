from __future__ import annotations

from esper import World

from tilecrush.constants import ANIMATION_DELAY
from tilecrush.engine.moves import CascadePass
from tilecrush.events.bus import (
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_MOVE_RESOLVED,
    EVENT_REFILL_COMPLETED,
    EVENT_SPECIAL_CREATED,
    EVENT_TICK,
    EventBus,
)
from tilecrush.utils.game_state import get_or_create_cascade_state


class CascadePlaybackSystem:
    """Replays the passes of each resolved move, one per ``delay`` seconds of ticks.

    The engine has already settled the board; this system only paces the
    per-pass events for renderers and keeps board input locked until the
    last pass has been shown.
    """

    def __init__(self, world: World, event_bus: EventBus, *, delay: float = ANIMATION_DELAY):
        self.world = world
        self.event_bus = event_bus
        self.delay = delay
        self.event_bus.subscribe(EVENT_MOVE_RESOLVED, self.on_move_resolved)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_move_resolved(self, sender, **kwargs):
        outcome = kwargs.get('outcome')
        if outcome is None or not outcome.passes:
            return
        state = get_or_create_cascade_state(self.world)
        state.pending.extend(outcome.passes)
        if not state.active:
            state.active = True
            self._show_next()

    def on_tick(self, sender, **kwargs):
        state = get_or_create_cascade_state(self.world)
        if not state.active:
            return
        state.elapsed += kwargs.get('dt', 0.0)
        if state.elapsed < self.delay:
            return
        if state.pending:
            self._show_next()
            return
        state.active = False
        state.elapsed = 0.0
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=state.depth)

    def _show_next(self) -> None:
        state = get_or_create_cascade_state(self.world)
        step: CascadePass = state.pending.popleft()
        state.depth = step.depth
        state.elapsed = 0.0
        removed = list(step.resolution.removed)
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=step.depth, positions=removed, board=step.board)
        matched = sorted({pos for group in step.groups for pos in group.positions})
        if matched:
            self.event_bus.emit(EVENT_MATCH_FOUND, positions=matched, size=len(matched), depth=step.depth)
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=removed, depth=step.depth)
        for created in step.resolution.created_specials:
            row, col = created.position
            self.event_bus.emit(EVENT_SPECIAL_CREATED, row=row, col=col, special=created.special)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=list(step.gravity_moves))
        if step.spawned:
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=list(step.spawned))
