from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

Position = Tuple[int, int]


class TileKind(Enum):
    """Token categories. EMPTY only exists while a pass is being resolved."""
    PISTOL = "pistol"
    HAT = "hat"
    CASH = "cash"
    CIGAR = "cigar"
    GEM = "gem"
    KNUCKLES = "knuckles"
    EMPTY = "empty"


ALL_TILE_KINDS: Tuple[TileKind, ...] = (
    TileKind.PISTOL,
    TileKind.HAT,
    TileKind.CASH,
    TileKind.CIGAR,
    TileKind.GEM,
    TileKind.KNUCKLES,
)


class SpecialKind(Enum):
    NONE = "none"
    LINE_CLEAR = "line_clear"    # created by a run of 4
    COLOR_CLEAR = "color_clear"  # created by a run of 5+


@dataclass(frozen=True, slots=True)
class Tile:
    """A single token on the board.

    ``row``/``col`` always mirror the slot holding the tile. ``id`` survives
    swaps and gravity; refill spawns receive fresh ids.
    """
    id: int
    kind: TileKind
    row: int
    col: int
    special: SpecialKind = SpecialKind.NONE
    marked_for_removal: bool = False

    @property
    def position(self) -> Position:
        return (self.row, self.col)

    @property
    def is_empty(self) -> bool:
        return self.kind is TileKind.EMPTY

    @property
    def is_special(self) -> bool:
        return self.special is not SpecialKind.NONE

    def moved_to(self, row: int, col: int) -> "Tile":
        return replace(self, row=row, col=col)

    def marked(self) -> "Tile":
        return replace(self, marked_for_removal=True)

    def cleared(self) -> "Tile":
        return replace(self, kind=TileKind.EMPTY, special=SpecialKind.NONE, marked_for_removal=False)

    def with_special(self, special: SpecialKind) -> "Tile":
        return replace(self, special=special, marked_for_removal=False)
