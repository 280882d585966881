from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Set, Tuple

from tilecrush.components.board import Board
from tilecrush.components.match_group import MatchGroup
from tilecrush.components.tile import Position, SpecialKind, Tile
from tilecrush.constants import (
    BASE_POINTS_PER_TILE,
    COLOR_CLEAR_LENGTH,
    COMBO_MULTIPLIER,
    LINE_CLEAR_LENGTH,
    SWAP_MULTIPLIER,
)
from tilecrush.engine.board_ops import clear_positions, mark_positions
from tilecrush.engine.effects import expand_through_specials

logger = logging.getLogger(__name__)

_SPECIAL_RANK = {
    SpecialKind.NONE: 0,
    SpecialKind.LINE_CLEAR: 1,
    SpecialKind.COLOR_CLEAR: 2,
}


@dataclass(frozen=True, slots=True)
class SwapContext:
    """The two cells exchanged by the player move that started a pass."""
    src: Position
    dst: Position

    def __contains__(self, position: Position) -> bool:
        return position == self.src or position == self.dst


@dataclass(frozen=True, slots=True)
class CreatedSpecial:
    position: Position
    special: SpecialKind
    tile_id: int


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of clearing one set of tiles.

    ``marked_board`` shows the matched tiles flagged for removal, ``board``
    the same grid with them turned EMPTY and new specials placed.
    """
    board: Board
    marked_board: Board
    points: int
    created_specials: Tuple[CreatedSpecial, ...]
    removed: Tuple[Position, ...]
    fired: Tuple[Position, ...]


@dataclass(slots=True)
class _CarrierClaim:
    special: SpecialKind
    length: int
    tile: Tile


def pass_multiplier(swap: SwapContext | None) -> float:
    return SWAP_MULTIPLIER if swap is not None else COMBO_MULTIPLIER


def group_points(group: MatchGroup, multiplier: float) -> float:
    return len(group) * BASE_POINTS_PER_TILE * multiplier


def special_for_length(length: int) -> SpecialKind:
    if length >= COLOR_CLEAR_LENGTH:
        return SpecialKind.COLOR_CLEAR
    if length == LINE_CLEAR_LENGTH:
        return SpecialKind.LINE_CLEAR
    return SpecialKind.NONE


def choose_carrier(group: MatchGroup, swap: SwapContext | None) -> Tile:
    """The tile that survives a group to carry its new special.

    Prefers a swapped cell so the moved piece becomes the special; otherwise
    the middle tile of the run.
    """
    if swap is not None:
        for tile in group.tiles:
            if tile.position in swap:
                return tile
    return group.middle


def _claim(claims: Dict[Position, _CarrierClaim], tile: Tile, special: SpecialKind, length: int) -> None:
    # Stronger special wins a contested cell, then the longer group, then the earlier one.
    existing = claims.get(tile.position)
    if existing is not None:
        if _SPECIAL_RANK[special] < _SPECIAL_RANK[existing.special]:
            return
        if special == existing.special and length <= existing.length:
            return
    claims[tile.position] = _CarrierClaim(special=special, length=length, tile=tile)


def clear_tiles(
    board: Board,
    removal: Set[Position],
    *,
    triggers: Sequence[Position] = (),
    carriers: Dict[Position, SpecialKind] | None = None,
    points: int = 0,
) -> Resolution:
    """Expand ``removal`` through specials, then mark and clear it.

    Carriers are never removed; they stay in place with their new special.
    """
    carriers = carriers or {}
    expanded, fired = expand_through_specials(board, removal, triggers, protected=set(carriers))
    removed = tuple(sorted(expanded))
    marked_board = mark_positions(board, removed)
    created = tuple(
        CreatedSpecial(position=pos, special=special, tile_id=board.tile_at(*pos).id)
        for pos, special in sorted(carriers.items())
    )
    cleared = clear_positions(board, removed)
    cleared = cleared.with_tiles(cleared.tile_at(*item.position).with_special(item.special) for item in created)
    return Resolution(
        board=cleared,
        marked_board=marked_board,
        points=points,
        created_specials=created,
        removed=removed,
        fired=fired,
    )


def resolve(board: Board, groups: Sequence[MatchGroup], swap: SwapContext | None = None) -> Resolution:
    """Score the groups of one pass, place new specials and clear the rest.

    Each group scores ``length * BASE_POINTS_PER_TILE * multiplier``; the pass
    total is floored once. A tile shared by a horizontal and a vertical group is
    removed once. Specials already inside a group fire and their areas join
    the removal set, chaining into further specials.
    """
    multiplier = pass_multiplier(swap)
    total = 0.0
    claims: Dict[Position, _CarrierClaim] = {}
    removal: Set[Position] = set()
    triggers: List[Position] = []
    for group in groups:
        total += group_points(group, multiplier)
        special = special_for_length(len(group))
        carrier = None
        if special is not SpecialKind.NONE:
            carrier = choose_carrier(group, swap)
            _claim(claims, carrier, special, len(group))
        for tile in group.tiles:
            if carrier is None or tile.position != carrier.position:
                removal.add(tile.position)
            if tile.is_special and tile.position not in triggers:
                triggers.append(tile.position)
    carriers = {pos: claim.special for pos, claim in claims.items()}
    resolution = clear_tiles(board, removal, triggers=triggers, carriers=carriers, points=math.floor(total))
    logger.debug(
        "Resolved %d groups: %d tiles removed, %d specials created, %d points",
        len(groups),
        len(resolution.removed),
        len(resolution.created_specials),
        resolution.points,
    )
    return resolution
