from __future__ import annotations

import logging
import random
from typing import Iterable, List, Sequence

from tilecrush.components.board import Board
from tilecrush.components.tile import Position, Tile, TileKind
from tilecrush.constants import GRID_SIZE
from tilecrush.errors import InvalidSwapError, OutOfBoundsError

logger = logging.getLogger(__name__)


def spawnable_kinds(kinds: Iterable[TileKind]) -> List[TileKind]:
    """Validate and de-duplicate the kinds a board may spawn, preserving order."""
    seen: set[TileKind] = set()
    filtered: List[TileKind] = []
    for kind in kinds:
        if kind is TileKind.EMPTY:
            raise ValueError("EMPTY is not a spawnable tile kind")
        if kind not in seen:
            filtered.append(kind)
            seen.add(kind)
    if not filtered:
        raise ValueError("At least one tile kind is required")
    return filtered


def create_board(
    kinds: Iterable[TileKind],
    *,
    size: int = GRID_SIZE,
    rng: random.Random | None = None,
    max_attempts: int = 200,
) -> Board:
    """Fill a fresh board so that no row or column starts out with a run of three.

    Each slot picks uniformly among the kinds that would not complete a run
    with the two tiles to its left or the two tiles above it.
    """
    choices = spawnable_kinds(kinds)
    rng = rng or random.Random()
    for attempt in range(max_attempts):
        layout: List[List[TileKind]] = []
        valid_layout = True
        for row in range(size):
            row_values: List[TileKind] = []
            for col in range(size):
                available = list(choices)
                if col >= 2:
                    left1 = row_values[col - 1]
                    left2 = row_values[col - 2]
                    if left1 == left2 and left1 in available:
                        available = [k for k in available if k != left1]
                if row >= 2:
                    up1 = layout[row - 1][col]
                    up2 = layout[row - 2][col]
                    if up1 == up2 and up1 in available:
                        available = [k for k in available if k != up1]
                if not available:
                    valid_layout = False
                    break
                row_values.append(rng.choice(available))
            if not valid_layout:
                break
            layout.append(row_values)
        if not valid_layout:
            logger.debug("Board layout attempt %d left a slot without a legal kind", attempt + 1)
            continue
        tiles = tuple(
            tuple(Tile(id=row * size + col, kind=layout[row][col], row=row, col=col) for col in range(size))
            for row in range(size)
        )
        return Board(tiles=tiles, next_id=size * size)
    raise RuntimeError("Unable to create a board without matches")


def board_from_kinds(layout: Sequence[Sequence[TileKind]]) -> Board:
    """Build a board from an explicit kind grid, numbering tiles row by row."""
    size = len(layout)
    if any(len(row) != size for row in layout):
        raise ValueError("Board layout must be square")
    tiles = tuple(
        tuple(Tile(id=r * size + c, kind=kind, row=r, col=c) for c, kind in enumerate(row))
        for r, row in enumerate(layout)
    )
    return Board(tiles=tiles, next_id=size * size)


def ensure_in_bounds(board: Board, row: int, col: int) -> None:
    if not board.in_bounds(row, col):
        raise OutOfBoundsError(row, col, board.size)


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def swap_tiles(board: Board, src: Position, dst: Position) -> Board:
    """Exchange two neighbouring tiles. Ids travel with the tiles."""
    ensure_in_bounds(board, *src)
    ensure_in_bounds(board, *dst)
    if not is_adjacent(src, dst):
        raise InvalidSwapError(src, dst)
    first = board.tile_at(*src)
    second = board.tile_at(*dst)
    return board.with_tiles([first.moved_to(*dst), second.moved_to(*src)])


def mark_positions(board: Board, positions: Iterable[Position]) -> Board:
    return board.with_tiles(board.tile_at(*pos).marked() for pos in positions)


def clear_positions(board: Board, positions: Iterable[Position]) -> Board:
    """Replace the tiles at ``positions`` with EMPTY placeholders."""
    return board.with_tiles(board.tile_at(*pos).cleared() for pos in positions)
