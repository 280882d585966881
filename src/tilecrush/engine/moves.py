"""Move entry points: player swaps, power-ups and the cascade loop that follows.

Every function here is pure with respect to its ``Board`` argument. A move
returns a ``MoveOutcome`` holding the idle-stable end board, the cumulative
score and the per-pass records a front end can replay for animation.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from tilecrush.components.board import Board
from tilecrush.components.effect_shape import EffectShape
from tilecrush.components.match_group import MatchGroup
from tilecrush.components.tile import Position, SpecialKind, TileKind
from tilecrush.constants import MAX_CASCADE_PASSES
from tilecrush.engine.board_ops import spawnable_kinds, swap_tiles
from tilecrush.engine.effects import apply_power_up
from tilecrush.engine.match import find_match_groups
from tilecrush.engine.match_resolution import Resolution, SwapContext, clear_tiles, resolve
from tilecrush.engine.refill import GravityMove, refill_board
from tilecrush.errors import CascadeLimitError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CascadePass:
    """One detect -> resolve -> refill cycle."""
    depth: int
    groups: Tuple[MatchGroup, ...]
    resolution: Resolution
    gravity_moves: Tuple[GravityMove, ...]
    spawned: Tuple[Position, ...]
    board: Board

    @property
    def points(self) -> int:
        return self.resolution.points

    @property
    def cleared_board(self) -> Board:
        return self.resolution.board


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    board: Board
    points: int
    passes: Tuple[CascadePass, ...]
    accepted: bool = True

    @property
    def depth(self) -> int:
        return len(self.passes)


def _settle(resolution: Resolution, kinds, rng, *, depth: int, groups=()) -> CascadePass:
    refilled = refill_board(resolution.board, kinds, rng=rng)
    return CascadePass(
        depth=depth,
        groups=tuple(groups),
        resolution=resolution,
        gravity_moves=refilled.moves,
        spawned=refilled.spawned,
        board=refilled.board,
    )


def iter_cascade(
    board: Board,
    kinds: Iterable[TileKind],
    *,
    rng: random.Random | None = None,
    swap: SwapContext | None = None,
    first_depth: int = 1,
    max_passes: int = MAX_CASCADE_PASSES,
) -> Iterator[CascadePass]:
    """Yield passes until the board holds no match groups.

    Only the first pass carries ``swap``; every later pass is a combo. Raises
    ``CascadeLimitError`` after ``max_passes`` passes, which random refills
    make vanishingly unlikely but cannot rule out.
    """
    choices = spawnable_kinds(kinds)
    rng = rng or random.Random()
    context = swap
    depth = first_depth
    count = 0
    while True:
        groups = find_match_groups(board)
        if not groups:
            return
        count += 1
        if count > max_passes:
            raise CascadeLimitError(f"Board did not settle after {max_passes} cascade passes")
        resolution = resolve(board, groups, context)
        step = _settle(resolution, choices, rng, depth=depth, groups=groups)
        logger.debug("Cascade pass %d scored %d", depth, step.points)
        yield step
        board = step.board
        context = None
        depth += 1


def _collect(board: Board, passes: Iterable[CascadePass]) -> MoveOutcome:
    collected = tuple(passes)
    final = collected[-1].board if collected else board
    return MoveOutcome(board=final, points=sum(p.points for p in collected), passes=collected)


def stabilize(
    board: Board, kinds: Iterable[TileKind], *, rng: random.Random | None = None
) -> MoveOutcome:
    """Run the cascade loop on ``board``. An idle-stable board comes back unchanged."""
    return _collect(board, iter_cascade(board, kinds, rng=rng))


def _swap_triggers_special(board: Board, src: Position, dst: Position) -> bool:
    return any(board.tile_at(*pos).special is SpecialKind.COLOR_CLEAR for pos in (src, dst))


def perform_swap(
    board: Board,
    src: Position,
    dst: Position,
    kinds: Iterable[TileKind],
    *,
    rng: random.Random | None = None,
) -> MoveOutcome:
    """Swap two neighbouring tiles and resolve the resulting cascade.

    Raises ``OutOfBoundsError`` or ``InvalidSwapError`` before touching the
    board. A swap that forms no run and moves no colour-clear special is
    rejected: the original board comes back with ``accepted=False``.
    """
    swapped = swap_tiles(board, src, dst)
    if not find_match_groups(swapped) and not _swap_triggers_special(board, src, dst):
        logger.debug("Rejected swap %s <-> %s: no match", src, dst)
        return MoveOutcome(board=board, points=0, passes=(), accepted=False)
    outcome = _collect(swapped, iter_cascade(swapped, kinds, rng=rng, swap=SwapContext(src=src, dst=dst)))
    logger.debug("Swap %s <-> %s resolved in %d passes for %d points", src, dst, outcome.depth, outcome.points)
    return outcome


def iter_power_up(
    board: Board,
    shape: EffectShape,
    target_col: int,
    target_row: int,
    kinds: Iterable[TileKind],
    *,
    rng: random.Random | None = None,
) -> Iterator[CascadePass]:
    """Yield the power-up blast as an unscored first pass, then the cascade it starts."""
    choices = spawnable_kinds(kinds)
    rng = rng or random.Random()
    targets = apply_power_up(board, shape, target_col, target_row)
    resolution = clear_tiles(board, {tile.position for tile in targets})
    blast = _settle(resolution, choices, rng, depth=1)
    yield blast
    yield from iter_cascade(blast.board, choices, rng=rng, first_depth=2)


def perform_power_up(
    board: Board,
    shape: EffectShape,
    target_col: int,
    target_row: int,
    kinds: Iterable[TileKind],
    *,
    rng: random.Random | None = None,
) -> MoveOutcome:
    return _collect(board, iter_power_up(board, shape, target_col, target_row, kinds, rng=rng))
