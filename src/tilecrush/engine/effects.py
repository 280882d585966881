from __future__ import annotations

from typing import Iterable, List, Set, Tuple

from tilecrush.components.board import Board
from tilecrush.components.effect_shape import EffectShape, shape_for_special
from tilecrush.components.tile import Position, Tile
from tilecrush.engine.board_ops import ensure_in_bounds


def _row_positions(board: Board, row: int) -> List[Position]:
    return [(row, c) for c in range(board.size)]


def _column_positions(board: Board, col: int) -> List[Position]:
    return [(r, col) for r in range(board.size)]


def effect_positions(board: Board, shape: EffectShape, col: int, row: int) -> Set[Position]:
    """Return the cells covered by ``shape`` aimed at (col, row)."""
    if shape is EffectShape.NONE:
        return set()
    if shape is EffectShape.LINE:
        return set(_row_positions(board, row))
    if shape is EffectShape.AREA:
        return {
            (row + dr, col + dc)
            for dr in (-1, 0, 1)
            for dc in (-1, 0, 1)
            if board.in_bounds(row + dr, col + dc)
        }
    if shape is EffectShape.CROSS:
        return set(_row_positions(board, row)) | set(_column_positions(board, col))
    if shape is EffectShape.MATCH_ALL:
        target = board.tile_at(row, col)
        if target.is_empty:
            return set()
        return {tile.position for tile in board if tile.kind == target.kind}
    raise ValueError(f"Unhandled effect shape {shape!r}")


def tiles_at(board: Board, positions: Iterable[Position]) -> Tuple[Tile, ...]:
    return tuple(board.tile_at(*pos) for pos in sorted(set(positions)))


def apply_power_up(board: Board, shape: EffectShape, target_col: int, target_row: int) -> Tuple[Tile, ...]:
    """Tiles a player power-up removes at the target cell, ordered by position.

    No points are awarded here; the cascade that follows the removal scores.
    """
    ensure_in_bounds(board, target_row, target_col)
    if shape is EffectShape.NONE:
        raise ValueError("A power-up needs a shape other than NONE")
    return tiles_at(board, effect_positions(board, shape, target_col, target_row))


def special_effect_positions(board: Board, tile: Tile) -> Set[Position]:
    return effect_positions(board, shape_for_special(tile.special), tile.col, tile.row)


def expand_through_specials(
    board: Board,
    removal: Set[Position],
    triggers: Iterable[Position] = (),
    protected: Set[Position] | None = None,
) -> Tuple[Set[Position], Tuple[Position, ...]]:
    """Grow ``removal`` by the areas of every special tile that fires.

    ``triggers`` fire unconditionally (specials inside a matched group), as do
    specials that end up inside the removal set. Each special fires once, so
    chains terminate. ``protected`` cells are never removed.
    Returns the expanded removal set and the positions that fired, in firing order.
    """
    protected = protected or set()
    expanded = set(removal) - protected
    fired: List[Position] = []
    seen: Set[Position] = set()
    queue: List[Position] = list(triggers)
    queue.extend(sorted(pos for pos in expanded if board.tile_at(*pos).is_special))
    while queue:
        pos = queue.pop(0)
        if pos in seen:
            continue
        tile = board.tile_at(*pos)
        if not tile.is_special:
            continue
        seen.add(pos)
        fired.append(pos)
        for hit in sorted(special_effect_positions(board, tile)):
            if hit in protected or hit in expanded:
                continue
            expanded.add(hit)
            if board.tile_at(*hit).is_special:
                queue.append(hit)
    return expanded, tuple(fired)
