from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from tilecrush.components.board import Board
from tilecrush.components.tile import Position, Tile, TileKind
from tilecrush.engine.board_ops import spawnable_kinds


@dataclass(frozen=True, slots=True)
class GravityMove:
    source: Position
    target: Position
    tile_id: int


@dataclass(frozen=True, slots=True)
class RefillResult:
    board: Board
    moves: Tuple[GravityMove, ...]
    spawned: Tuple[Position, ...]


def apply_gravity(board: Board) -> Tuple[Board, List[GravityMove]]:
    """Drop every non-empty tile to the bottom of its column, keeping their order."""
    moves: List[GravityMove] = []
    updates: List[Tile] = []
    size = board.size
    for col in range(size):
        column = board.column_tiles(col)
        filled = [tile for tile in column if not tile.is_empty]
        empties = [tile for tile in column if tile.is_empty]
        if not empties:
            continue
        offset = size - len(filled)
        for target_row, tile in enumerate(empties):
            updates.append(tile.moved_to(target_row, col))
        for index, tile in enumerate(filled):
            target_row = offset + index
            if target_row != tile.row:
                moves.append(GravityMove(source=tile.position, target=(target_row, col), tile_id=tile.id))
            updates.append(tile.moved_to(target_row, col))
    return board.with_tiles(updates), moves


def spawn_tiles(
    board: Board, kinds: Iterable[TileKind], *, rng: random.Random | None = None
) -> Tuple[Board, List[Position]]:
    """Fill every EMPTY slot with a fresh random tile, column by column, top to bottom."""
    choices = spawnable_kinds(kinds)
    rng = rng or random.Random()
    next_id = board.next_id
    spawned: List[Position] = []
    updates: List[Tile] = []
    for col in range(board.size):
        for row in range(board.size):
            if not board.tile_at(row, col).is_empty:
                continue
            updates.append(Tile(id=next_id, kind=rng.choice(choices), row=row, col=col))
            spawned.append((row, col))
            next_id += 1
    return board.with_tiles(updates, next_id=next_id), spawned


def refill_board(
    board: Board, kinds: Iterable[TileKind], *, rng: random.Random | None = None
) -> RefillResult:
    """Apply gravity then spawn tiles into the vacated top slots.

    Spawns are not filtered against matches; new runs drive the next cascade pass.
    """
    settled, moves = apply_gravity(board)
    refilled, spawned = spawn_tiles(settled, kinds, rng=rng)
    return RefillResult(board=refilled, moves=tuple(moves), spawned=tuple(spawned))


def refill(board: Board, kinds: Iterable[TileKind], *, rng: random.Random | None = None) -> Board:
    return refill_board(board, kinds, rng=rng).board
