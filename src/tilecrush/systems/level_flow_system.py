"""Scoring and progress: level start, timer, win/loss and unlocks."""
from __future__ import annotations

import math
import random

from esper import World

from tilecrush.components.effect_shape import EffectShape
from tilecrush.components.game_state import GameStatus
from tilecrush.constants import MAX_LEVELS, REWARD_LEVEL_INTERVAL
from tilecrush.engine.board_ops import create_board
from tilecrush.events.bus import (
    EVENT_LEVEL_LOST,
    EVENT_LEVEL_PAUSE_TOGGLE,
    EVENT_LEVEL_QUIT,
    EVENT_LEVEL_START_REQUEST,
    EVENT_LEVEL_STARTED,
    EVENT_LEVEL_WON,
    EVENT_POWER_UP_REWARD_CHOSEN,
    EVENT_POWER_UP_REWARD_OFFERED,
    EVENT_SCORE_CHANGED,
    EVENT_SCORE_GAINED,
    EVENT_TICK,
    EVENT_TIMER_CHANGED,
    EventBus,
)
from tilecrush.factories.levels import generate_level_config
from tilecrush.factories.power_ups import reward_choices
from tilecrush.systems.power_up_system import grant_power_up
from tilecrush.utils.game_state import (
    get_board_state,
    get_game_state,
    get_level_progress,
    get_or_create_cascade_state,
    get_player_progress,
    set_game_status,
)


class LevelFlowSystem:
    """Owns win/loss decisions; the board engine never sees them."""

    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None) -> None:
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self._seconds_shown: int | None = None
        self._reward_pending = False

        self.event_bus.subscribe(EVENT_LEVEL_START_REQUEST, self._on_start_request)
        self.event_bus.subscribe(EVENT_SCORE_GAINED, self._on_score_gained)
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)
        self.event_bus.subscribe(EVENT_LEVEL_QUIT, self._on_quit)
        self.event_bus.subscribe(EVENT_LEVEL_PAUSE_TOGGLE, self._on_pause_toggle)
        self.event_bus.subscribe(EVENT_POWER_UP_REWARD_CHOSEN, self._on_reward_chosen)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start_level(self, level_number: int) -> None:
        """Reset score and timer and deal a fresh board for ``level_number``."""
        progress = get_player_progress(self.world)
        if level_number > progress.unlocked_level:
            raise ValueError(f"Level {level_number} is locked")
        config = generate_level_config(level_number)
        level = get_level_progress(self.world)
        level.config = config
        level.score = 0
        level.time_left = float(config.timer_seconds)
        get_board_state(self.world).board = create_board(config.kinds, rng=self._rng)
        cascade = get_or_create_cascade_state(self.world)
        cascade.pending.clear()
        cascade.active = False
        cascade.elapsed = 0.0
        progress.armed = None
        self._reward_pending = False
        self._seconds_shown = config.timer_seconds
        set_game_status(self.world, self.event_bus, GameStatus.PLAYING)
        self.event_bus.emit(EVENT_LEVEL_STARTED, level_number=level_number, config=config)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, target=config.target_score)
        self.event_bus.emit(EVENT_TIMER_CHANGED, seconds_left=config.timer_seconds)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_start_request(self, sender, **payload) -> None:
        level_number = payload.get("level_number")
        if level_number is None:
            return
        if level_number < 1 or level_number > get_player_progress(self.world).unlocked_level:
            return
        self.start_level(level_number)

    def _on_score_gained(self, sender, **payload) -> None:
        points = payload.get("points") or 0
        if points <= 0 or get_game_state(self.world).status is not GameStatus.PLAYING:
            return
        level = get_level_progress(self.world)
        level.score += points
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=level.score, target=level.config.target_score)
        if level.target_reached:
            self._win()

    def _on_tick(self, sender, **payload) -> None:
        if get_game_state(self.world).status is not GameStatus.PLAYING:
            return
        level = get_level_progress(self.world)
        level.time_left = max(0.0, level.time_left - payload.get("dt", 0.0))
        seconds = math.ceil(level.time_left)
        if seconds != self._seconds_shown:
            self._seconds_shown = seconds
            self.event_bus.emit(EVENT_TIMER_CHANGED, seconds_left=seconds)
        if level.time_left <= 0.0:
            set_game_status(self.world, self.event_bus, GameStatus.LOST)
            self.event_bus.emit(EVENT_LEVEL_LOST, level_number=level.config.level_number, score=level.score)

    def _on_quit(self, sender, **payload) -> None:
        get_player_progress(self.world).armed = None
        set_game_status(self.world, self.event_bus, GameStatus.IDLE)

    def _on_pause_toggle(self, sender, **payload) -> None:
        status = get_game_state(self.world).status
        if status is GameStatus.PLAYING:
            set_game_status(self.world, self.event_bus, GameStatus.PAUSED)
        elif status is GameStatus.PAUSED:
            set_game_status(self.world, self.event_bus, GameStatus.PLAYING)

    def _on_reward_chosen(self, sender, **payload) -> None:
        shape = payload.get("shape")
        if not self._reward_pending or not isinstance(shape, EffectShape):
            return
        grant_power_up(self.world, self.event_bus, shape)
        self._reward_pending = False
        self._unlock_next()
        set_game_status(self.world, self.event_bus, GameStatus.IDLE)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _win(self) -> None:
        level = get_level_progress(self.world)
        level_number = level.config.level_number
        set_game_status(self.world, self.event_bus, GameStatus.WON)
        self.event_bus.emit(EVENT_LEVEL_WON, level_number=level_number, score=level.score)
        if level_number != get_player_progress(self.world).unlocked_level:
            return
        if level_number % REWARD_LEVEL_INTERVAL == 0:
            self._reward_pending = True
            set_game_status(self.world, self.event_bus, GameStatus.REWARD_SELECT)
            self.event_bus.emit(EVENT_POWER_UP_REWARD_OFFERED, level_number=level_number, choices=reward_choices())
            return
        self._unlock_next()

    def _unlock_next(self) -> None:
        progress = get_player_progress(self.world)
        progress.unlocked_level = min(progress.unlocked_level + 1, MAX_LEVELS)
