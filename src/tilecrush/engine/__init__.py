"""Pure board simulation: creation, matching, cascades, power-ups and refill.

This package never imports esper or any presentation code.
"""
from tilecrush.engine.board_ops import board_from_kinds, create_board, is_adjacent, swap_tiles
from tilecrush.engine.effects import apply_power_up
from tilecrush.engine.match import find_match_groups
from tilecrush.engine.match_resolution import Resolution, SwapContext, resolve
from tilecrush.engine.moves import (
    CascadePass,
    MoveOutcome,
    iter_cascade,
    iter_power_up,
    perform_power_up,
    perform_swap,
    stabilize,
)
from tilecrush.engine.refill import refill, refill_board

__all__ = [
    "CascadePass",
    "MoveOutcome",
    "Resolution",
    "SwapContext",
    "apply_power_up",
    "board_from_kinds",
    "create_board",
    "find_match_groups",
    "is_adjacent",
    "iter_cascade",
    "iter_power_up",
    "perform_power_up",
    "perform_swap",
    "refill",
    "refill_board",
    "resolve",
    "stabilize",
    "swap_tiles",
]
