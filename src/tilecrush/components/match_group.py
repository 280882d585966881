from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from tilecrush.components.tile import Position, Tile, TileKind


class MatchAxis(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True, slots=True)
class MatchGroup:
    """A maximal run of three or more same-kind tiles along one axis.

    Tiles are ordered left-to-right for horizontal runs and top-to-bottom for
    vertical ones.
    """
    tiles: Tuple[Tile, ...]
    axis: MatchAxis

    @property
    def kind(self) -> TileKind:
        return self.tiles[0].kind

    def __len__(self) -> int:
        return len(self.tiles)

    @property
    def positions(self) -> Tuple[Position, ...]:
        return tuple(tile.position for tile in self.tiles)

    @property
    def middle(self) -> Tile:
        return self.tiles[len(self.tiles) // 2]
