from typing import List, Sequence

from tilecrush.components.board import Board
from tilecrush.components.match_group import MatchAxis, MatchGroup
from tilecrush.components.tile import Tile
from tilecrush.constants import MIN_MATCH_LENGTH


def _scan_line(line: Sequence[Tile], axis: MatchAxis) -> List[MatchGroup]:
    groups: List[MatchGroup] = []
    run: List[Tile] = []
    for tile in line:
        if run and not tile.is_empty and tile.kind == run[-1].kind:
            run.append(tile)
            continue
        if len(run) >= MIN_MATCH_LENGTH:
            groups.append(MatchGroup(tiles=tuple(run), axis=axis))
        run = [] if tile.is_empty else [tile]
    if len(run) >= MIN_MATCH_LENGTH:
        groups.append(MatchGroup(tiles=tuple(run), axis=axis))
    return groups


def find_match_groups(board: Board) -> List[MatchGroup]:
    """Detect every maximal run of three or more along rows, then columns.

    A run longer than three is reported once at its full length. Horizontal
    and vertical groups may share tiles.
    """
    groups: List[MatchGroup] = []
    for row in range(board.size):
        groups.extend(_scan_line(board.row_tiles(row), MatchAxis.HORIZONTAL))
    for col in range(board.size):
        groups.extend(_scan_line(board.column_tiles(col), MatchAxis.VERTICAL))
    return groups


def has_matches(board: Board) -> bool:
    return bool(find_match_groups(board))
