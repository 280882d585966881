from __future__ import annotations

from typing import Dict, Mapping, Sequence, Tuple

from tilecrush.components.board import Board
from tilecrush.components.tile import ALL_TILE_KINDS, SpecialKind, TileKind
from tilecrush.engine.board_ops import board_from_kinds

KIND_CODES: Dict[str, TileKind] = {
    'P': TileKind.PISTOL,
    'H': TileKind.HAT,
    'C': TileKind.CASH,
    'R': TileKind.CIGAR,
    'G': TileKind.GEM,
    'K': TileKind.KNUCKLES,
    '.': TileKind.EMPTY,
}
CODE_FOR_KIND = {kind: code for code, kind in KIND_CODES.items()}

# Four-kind background without any run; P and K never appear in it.
FILLER = "HCRG"

ALL_KINDS = ALL_TILE_KINDS


def filler_rows(size: int = 8) -> list[str]:
    return ["".join(FILLER[(c + 2 * r) % 4] for c in range(size)) for r in range(size)]


def board_from_rows(
    rows: Sequence[str], specials: Mapping[Tuple[int, int], SpecialKind] | None = None
) -> Board:
    """Build a board from letter rows, e.g. ``["PPPH", ...]``."""
    board = board_from_kinds([[KIND_CODES[ch] for ch in row] for row in rows])
    if specials:
        board = board.with_tiles(board.tile_at(r, c).with_special(s) for (r, c), s in specials.items())
    return board


def board_with(
    cells: Mapping[Tuple[int, int], str],
    specials: Mapping[Tuple[int, int], SpecialKind] | None = None,
    size: int = 8,
) -> Board:
    """Filler board with the given cells overridden by letter code."""
    rows = [list(row) for row in filler_rows(size)]
    for (r, c), code in cells.items():
        rows[r][c] = code
    return board_from_rows(["".join(row) for row in rows], specials)


def board_codes(board: Board) -> list[str]:
    return ["".join(CODE_FOR_KIND[tile.kind] for tile in row) for row in board.tiles]


def assert_slots_consistent(board: Board) -> None:
    for r, row in enumerate(board.tiles):
        for c, tile in enumerate(row):
            assert (tile.row, tile.col) == (r, c), f"tile {tile.id} at {(r, c)} claims {(tile.row, tile.col)}"
