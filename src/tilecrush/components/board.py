from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Tuple

from tilecrush.components.tile import Position, Tile, TileKind


@dataclass(frozen=True, slots=True)
class Board:
    """Immutable square grid of tiles, indexed ``tiles[row][col]``.

    ``next_id`` is the id that the next spawned tile receives; it is owned by
    the board so each simulation run numbers its tiles independently.
    """
    tiles: Tuple[Tuple[Tile, ...], ...]
    next_id: int = 0

    @property
    def size(self) -> int:
        return len(self.tiles)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def tile_at(self, row: int, col: int) -> Tile:
        return self.tiles[row][col]

    def row_tiles(self, row: int) -> Tuple[Tile, ...]:
        return self.tiles[row]

    def column_tiles(self, col: int) -> Tuple[Tile, ...]:
        return tuple(row[col] for row in self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        for row in self.tiles:
            yield from row

    def kinds(self) -> List[List[TileKind]]:
        return [[tile.kind for tile in row] for row in self.tiles]

    def has_empty(self) -> bool:
        return any(tile.is_empty for tile in self)

    def with_tiles(self, updates: Iterable[Tile], *, next_id: int | None = None) -> "Board":
        """Return a copy with each updated tile placed at its own coordinates."""
        by_position: Dict[Position, Tile] = {tile.position: tile for tile in updates}
        if not by_position:
            if next_id is None or next_id == self.next_id:
                return self
            return replace(self, next_id=next_id)
        rows = tuple(
            tuple(by_position.get((r, c), tile) for c, tile in enumerate(row))
            for r, row in enumerate(self.tiles)
        )
        return Board(tiles=rows, next_id=self.next_id if next_id is None else next_id)
