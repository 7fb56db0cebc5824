from fruitmatch.engine.hints import find_all_swaps, find_chain_hint, find_hint, has_available_move
from helpers import SWAP_BOARD, board_from_rows, stalemate_layout


def test_first_hint_in_scan_order():
    board = board_from_rows([
        [1, 2, 3],
        [4, 3, 5],
        [5, 3, 4],
    ])
    assert find_hint(board) == ((0, 1), (0, 2))


def test_stalemate_board_has_no_hint():
    board = board_from_rows(stalemate_layout(), fruit_type_count=3)
    assert find_hint(board) is None
    assert find_all_swaps(board) == []
    assert not has_available_move(board)


def test_hint_search_leaves_board_untouched():
    board = board_from_rows(SWAP_BOARD)
    find_hint(board)
    find_all_swaps(board)
    assert board.type_grid() == SWAP_BOARD


def test_hints_skip_obstacles():
    board = board_from_rows([
        [1, "X", 1, 1],
        [2, 1, 3, 2],
    ])
    # Swapping into the obstacle would complete the row; it is never offered.
    assert find_hint(board) is None


def test_find_all_swaps_lists_each_pair_once():
    board = board_from_rows(SWAP_BOARD)
    swaps = find_all_swaps(board)
    assert ((0, 2), (1, 2)) in swaps
    assert ((1, 2), (0, 2)) not in swaps
    assert len(swaps) == len(set(swaps))


def test_chain_hint_follows_scan_order():
    board = board_from_rows([
        [1, 1, 2],
        [2, 1, 3],
        [3, 2, 1],
    ])
    assert find_chain_hint(board) == [(0, 0), (0, 1), (1, 1)]


def test_chain_hint_none_without_three_connected():
    board = board_from_rows(stalemate_layout(3, 3), fruit_type_count=3)
    assert find_chain_hint(board) is None


def test_chain_hint_longer_path():
    board = board_from_rows([
        [1, 1, 1, 1],
        [2, 3, 2, 3],
    ])
    assert find_chain_hint(board, length=4) == [(0, 0), (0, 1), (0, 2), (0, 3)]
