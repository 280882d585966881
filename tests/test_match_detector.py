from tilecrush.components.match_group import MatchAxis
from tilecrush.components.tile import TileKind
from tilecrush.engine.match import find_match_groups, has_matches
from tests.helpers import board_with


def test_single_horizontal_run_of_four():
    board = board_with({(3, 2): 'K', (3, 3): 'K', (3, 4): 'K', (3, 5): 'K'})
    groups = find_match_groups(board)
    assert len(groups) == 1
    group = groups[0]
    assert len(group) == 4
    assert group.axis is MatchAxis.HORIZONTAL
    assert group.kind is TileKind.KNUCKLES
    assert group.positions == ((3, 2), (3, 3), (3, 4), (3, 5))


def test_vertical_run_reported_top_to_bottom():
    board = board_with({(5, 7): 'P', (6, 7): 'P', (7, 7): 'P'})
    groups = find_match_groups(board)
    assert len(groups) == 1
    assert groups[0].axis is MatchAxis.VERTICAL
    assert groups[0].positions == ((5, 7), (6, 7), (7, 7))


def test_long_run_is_not_split():
    board = board_with({(0, c): 'K' for c in range(7)})
    groups = find_match_groups(board)
    assert [len(g) for g in groups] == [7]


def test_full_row_run_ending_at_edge():
    board = board_with({(2, c): 'P' for c in range(8)})
    groups = find_match_groups(board)
    assert len(groups) == 1 and len(groups[0]) == 8


def test_l_shape_yields_overlapping_groups():
    board = board_with({(4, 2): 'P', (4, 3): 'P', (4, 4): 'P', (5, 2): 'P', (6, 2): 'P'})
    groups = find_match_groups(board)
    assert [g.axis for g in groups] == [MatchAxis.HORIZONTAL, MatchAxis.VERTICAL]
    shared = set(groups[0].positions) & set(groups[1].positions)
    assert shared == {(4, 2)}


def test_empty_cells_break_runs():
    board = board_with({(1, 0): '.', (1, 1): '.', (1, 2): '.', (1, 3): '.'})
    assert not has_matches(board)
    board = board_with({(1, 0): 'K', (1, 1): 'K', (1, 2): '.', (1, 3): 'K', (1, 4): 'K'})
    assert find_match_groups(board) == []


def test_rows_are_reported_before_columns():
    board = board_with({
        (0, 0): 'K', (1, 0): 'K', (2, 0): 'K',
        (7, 4): 'P', (7, 5): 'P', (7, 6): 'P',
    })
    groups = find_match_groups(board)
    assert [g.axis for g in groups] == [MatchAxis.HORIZONTAL, MatchAxis.VERTICAL]
    assert groups[0].kind is TileKind.PISTOL
    assert groups[1].kind is TileKind.KNUCKLES


def test_two_runs_in_one_row():
    board = board_with({(6, 0): 'K', (6, 1): 'K', (6, 2): 'K', (6, 4): 'P', (6, 5): 'P', (6, 6): 'P'})
    groups = find_match_groups(board)
    assert [g.kind for g in groups] == [TileKind.KNUCKLES, TileKind.PISTOL]
