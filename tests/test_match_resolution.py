from tilecrush.components.tile import SpecialKind, TileKind
from tilecrush.engine.match import find_match_groups
from tilecrush.engine.match_resolution import SwapContext, choose_carrier, resolve, special_for_length
from tests.helpers import assert_slots_consistent, board_with


def _resolve(board, swap=None):
    return resolve(board, find_match_groups(board), swap)


def test_special_thresholds():
    assert special_for_length(3) is SpecialKind.NONE
    assert special_for_length(4) is SpecialKind.LINE_CLEAR
    assert special_for_length(5) is SpecialKind.COLOR_CLEAR
    assert special_for_length(8) is SpecialKind.COLOR_CLEAR


def test_run_of_three_is_removed_without_special():
    board = board_with({(0, 0): 'P', (0, 1): 'P', (0, 2): 'P'})
    result = _resolve(board)
    assert result.removed == ((0, 0), (0, 1), (0, 2))
    assert result.created_specials == ()
    for pos in result.removed:
        assert result.board.tile_at(*pos).kind is TileKind.EMPTY


def test_run_of_four_leaves_line_clear_carrier_in_the_middle():
    board = board_with({(2, 1): 'K', (2, 2): 'K', (2, 3): 'K', (2, 4): 'K'})
    result = _resolve(board)
    assert len(result.removed) == 3
    assert len(result.created_specials) == 1
    created = result.created_specials[0]
    assert created.position == (2, 3)
    assert created.special is SpecialKind.LINE_CLEAR
    carrier = result.board.tile_at(2, 3)
    assert carrier.kind is TileKind.KNUCKLES
    assert carrier.special is SpecialKind.LINE_CLEAR
    assert carrier.id == board.tile_at(2, 3).id
    assert_slots_consistent(result.board)


def test_run_of_five_creates_color_clear():
    board = board_with({(5, c): 'K' for c in range(5)})
    result = _resolve(board)
    assert [c.special for c in result.created_specials] == [SpecialKind.COLOR_CLEAR]
    assert result.created_specials[0].position == (5, 2)
    assert len(result.removed) == 4


def test_swapped_cell_becomes_the_carrier():
    board = board_with({(2, 1): 'K', (2, 2): 'K', (2, 3): 'K', (2, 4): 'K'})
    swap = SwapContext(src=(3, 4), dst=(2, 4))
    result = _resolve(board, swap)
    assert result.created_specials[0].position == (2, 4)
    assert (2, 4) not in result.removed


def test_carrier_falls_back_to_middle_when_swap_is_elsewhere():
    board = board_with({(2, 1): 'K', (2, 2): 'K', (2, 3): 'K', (2, 4): 'K'})
    group = find_match_groups(board)[0]
    carrier = choose_carrier(group, SwapContext(src=(6, 6), dst=(6, 7)))
    assert carrier.position == (2, 3)


def test_score_is_additive_across_groups():
    board = board_with({
        (0, 0): 'P', (0, 1): 'P', (0, 2): 'P',
        (6, 3): 'K', (6, 4): 'K', (6, 5): 'K', (6, 6): 'K',
    })
    swap = SwapContext(src=(7, 0), dst=(7, 1))
    assert _resolve(board, swap).points == 3 * 20 + 4 * 20
    # Without a swap the pass is a combo.
    assert _resolve(board).points == int((3 * 20 + 4 * 20) * 1.5)


def test_l_shape_removes_shared_tile_once():
    board = board_with({(4, 2): 'P', (4, 3): 'P', (4, 4): 'P', (5, 2): 'P', (6, 2): 'P'})
    result = _resolve(board)
    assert len(result.removed) == 5
    assert result.points == (3 + 3) * 20 * 1.5


def test_color_clear_in_match_removes_every_tile_of_that_kind():
    scattered = {(0, 5): 'P', (6, 6): 'P', (7, 0): 'P'}
    run = {(3, 0): 'P', (3, 1): 'P', (3, 2): 'P'}
    board = board_with({**scattered, **run}, specials={(3, 1): SpecialKind.COLOR_CLEAR})
    result = _resolve(board)
    assert set(result.removed) == set(scattered) | set(run)
    assert not any(tile.kind is TileKind.PISTOL for tile in result.board)
    assert result.fired == ((3, 1),)


def test_line_clear_in_match_clears_its_row():
    board = board_with({(2, 0): 'K', (2, 1): 'K', (2, 2): 'K'}, specials={(2, 1): SpecialKind.LINE_CLEAR})
    result = _resolve(board)
    assert set(result.removed) == {(2, c) for c in range(8)}


def test_specials_chain_into_other_specials():
    # Row 2 of the filler holds a cigar at (2, 6); its colour clear fires when the line clear hits it.
    board = board_with(
        {(2, 0): 'K', (2, 1): 'K', (2, 2): 'K'},
        specials={(2, 1): SpecialKind.LINE_CLEAR, (2, 6): SpecialKind.COLOR_CLEAR},
    )
    assert board.tile_at(2, 6).kind is TileKind.CIGAR
    result = _resolve(board)
    cigars = {tile.position for tile in board if tile.kind is TileKind.CIGAR}
    assert cigars <= set(result.removed)
    assert {(2, c) for c in range(8)} <= set(result.removed)
    assert result.fired == ((2, 1), (2, 6))
    assert not any(tile.kind is TileKind.CIGAR for tile in result.board)


def test_contested_carrier_keeps_the_stronger_special():
    # Horizontal run of 4 and vertical run of 5 meet at the swapped cell (4, 4).
    cells = {(4, c): 'K' for c in range(1, 5)}
    cells.update({(r, 4): 'K' for r in range(0, 5)})
    board = board_with(cells)
    swap = SwapContext(src=(4, 4), dst=(4, 5))
    result = _resolve(board, swap)
    assert len(result.created_specials) == 1
    assert result.created_specials[0].position == (4, 4)
    assert result.created_specials[0].special is SpecialKind.COLOR_CLEAR
    assert len(result.removed) == 3 + 4
    assert result.board.tile_at(4, 4).special is SpecialKind.COLOR_CLEAR


def test_marked_board_flags_only_removed_tiles():
    board = board_with({(0, 0): 'P', (0, 1): 'P', (0, 2): 'P'})
    result = _resolve(board)
    marked = {tile.position for tile in result.marked_board if tile.marked_for_removal}
    assert marked == set(result.removed)
    assert not any(tile.marked_for_removal for tile in result.board)


def test_resolve_does_not_mutate_input():
    board = board_with({(0, 0): 'P', (0, 1): 'P', (0, 2): 'P'})
    before = board.kinds()
    _resolve(board)
    assert board.kinds() == before
