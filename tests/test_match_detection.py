from fruitmatch.engine.matching import find_matches, has_any_match, has_line_match
from fruitmatch.engine.resolution import clear_groups
from helpers import board_from_rows


def test_single_run_of_four_is_one_group():
    board = board_from_rows([
        [2, 3, 2, 3, 2],
        [3, 2, 3, 2, 3],
        [1, 1, 1, 1, 2],
        [3, 2, 3, 2, 3],
        [2, 3, 2, 3, 2],
    ])
    assert find_matches(board) == [[(2, 0), (2, 1), (2, 2), (2, 3)]]
    assert has_any_match(board)


def test_obstacle_breaks_runs():
    board = board_from_rows([
        [1, 1, "X", 1, 1],
        [2, 3, 2, 3, 2],
    ])
    assert find_matches(board) == []
    assert not has_any_match(board)


def test_empty_cells_break_runs():
    board = board_from_rows([[1, 1, None, 1, 1]], fruit_type_count=2)
    assert find_matches(board) == []


def test_vertical_run_detected():
    board = board_from_rows([
        [1, 2],
        [1, 3],
        [1, 2],
        [2, 3],
    ])
    assert find_matches(board) == [[(0, 0), (1, 0), (2, 0)]]


def test_crossing_runs_stay_separate_groups():
    board = board_from_rows([
        [2, 1, 3],
        [1, 1, 1],
        [3, 1, 2],
    ])
    groups = find_matches(board)
    assert groups == [
        [(1, 0), (1, 1), (1, 2)],
        [(0, 1), (1, 1), (2, 1)],
    ]
    cleared = clear_groups(board, groups)
    # The shared centre cell is cleared once.
    assert len(cleared) == 5
    assert board.empty_positions() == [(0, 1), (1, 0), (1, 1), (1, 2), (2, 1)]


def test_find_matches_does_not_mutate():
    layout = [[1, 1, 1], [2, 3, 2]]
    board = board_from_rows(layout)
    find_matches(board)
    assert board.type_grid() == layout


def test_has_line_match_at_position():
    board = board_from_rows([
        [1, 1, 1, 2],
        [2, 3, 2, 3],
    ])
    assert has_line_match(board, (0, 1))
    assert not has_line_match(board, (0, 3))
    assert not has_line_match(board, (1, 0))
