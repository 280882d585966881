from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references keep systems that are not stored in a variable subscribed.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c), reason=str
EVENT_MOVE_RESOLVED = "move_resolved"              # payload: source=str, outcome=MoveOutcome
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], size=int, depth=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], depth=int
EVENT_SPECIAL_CREATED = "special_created"          # payload: row, col, special=SpecialKind
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove,...]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...], board=Board
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, board=Board


# ============================================================================
# SCORING & LEVEL FLOW
# ============================================================================
EVENT_SCORE_GAINED = "score_gained"                # payload: points=int, source=str
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, target=int
EVENT_TIMER_CHANGED = "timer_changed"              # payload: seconds_left=int
EVENT_LEVEL_START_REQUEST = "level_start_request"  # payload: level_number=int
EVENT_LEVEL_STARTED = "level_started"              # payload: level_number=int, config=LevelConfig
EVENT_LEVEL_WON = "level_won"                      # payload: level_number=int, score=int
EVENT_LEVEL_LOST = "level_lost"                    # payload: level_number=int, score=int
EVENT_LEVEL_QUIT = "level_quit"                    # payload: none
EVENT_LEVEL_PAUSE_TOGGLE = "level_pause_toggle"    # payload: none
EVENT_GAME_STATUS_CHANGED = "game_status_changed"  # payload: previous_status, new_status


# ============================================================================
# POWER-UPS
# ============================================================================
EVENT_POWER_UP_SELECTED = "power_up_selected"      # payload: shape=EffectShape
EVENT_POWER_UP_CLEARED = "power_up_cleared"        # payload: shape=EffectShape|None, reason=str
EVENT_POWER_UP_REQUEST = "power_up_request"        # payload: shape=EffectShape, row, col
EVENT_POWER_UP_APPLIED = "power_up_applied"        # payload: shape, row, col, positions=[(r,c),...]
EVENT_POWER_UP_DENIED = "power_up_denied"          # payload: shape, reason=str
EVENT_POWER_UP_GRANTED = "power_up_granted"        # payload: shape, amount=int, count=int
EVENT_POWER_UP_REWARD_OFFERED = "power_up_reward_offered"  # payload: level_number=int, choices=[EffectShape,...]
EVENT_POWER_UP_REWARD_CHOSEN = "power_up_reward_chosen"    # payload: shape=EffectShape
