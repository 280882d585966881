import random

from tilecrush.components.tile import TileKind
from tilecrush.engine.refill import apply_gravity, refill, refill_board
from tests.helpers import assert_slots_consistent, board_from_rows, board_with


def _gap_board():
    # Column 0 top to bottom: EMPTY, PISTOL, EMPTY, KNUCKLES
    return board_from_rows([".CRG", "PGHC", ".CRG", "KGHC"])


def test_gravity_keeps_order_and_ids():
    board = _gap_board()
    pistol_id = board.tile_at(1, 0).id
    knuckles_id = board.tile_at(3, 0).id
    settled, moves = apply_gravity(board)
    column = [tile.kind for tile in settled.column_tiles(0)]
    assert column == [TileKind.EMPTY, TileKind.EMPTY, TileKind.PISTOL, TileKind.KNUCKLES]
    assert settled.tile_at(2, 0).id == pistol_id
    assert settled.tile_at(3, 0).id == knuckles_id
    assert [(m.source, m.target) for m in moves] == [((1, 0), (2, 0))]
    assert_slots_consistent(settled)


def test_refill_spawns_fresh_tiles_on_top():
    board = _gap_board()
    result = refill_board(board, [TileKind.GEM], rng=random.Random(0))
    column = result.board.column_tiles(0)
    assert [t.kind for t in column] == [TileKind.GEM, TileKind.GEM, TileKind.PISTOL, TileKind.KNUCKLES]
    assert [column[0].id, column[1].id] == [16, 17]
    assert result.board.next_id == 18
    assert result.spawned == ((0, 0), (1, 0))
    assert not result.board.has_empty()
    assert_slots_consistent(result.board)


def test_untouched_columns_keep_their_tiles():
    board = _gap_board()
    refilled = refill(board, [TileKind.GEM], rng=random.Random(0))
    for col in range(1, 4):
        assert refilled.column_tiles(col) == board.column_tiles(col)


def test_refill_uses_only_level_kinds():
    cleared = {(r, c): '.' for r in range(3) for c in range(8)}
    board = board_with(cleared)
    kinds = [TileKind.PISTOL, TileKind.KNUCKLES]
    refilled = refill(board, kinds, rng=random.Random(5))
    spawned = [refilled.tile_at(r, c) for r in range(3) for c in range(8)]
    assert {tile.kind for tile in spawned} <= set(kinds)
    assert len({tile.id for tile in refilled}) == 64


def test_full_board_is_left_alone():
    board = board_with({})
    result = refill_board(board, [TileKind.GEM], rng=random.Random(0))
    assert result.board == board
    assert result.moves == () and result.spawned == ()
