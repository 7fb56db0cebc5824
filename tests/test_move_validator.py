import pytest

from fruitmatch.engine.moves import SelectResult, are_adjacent, is_committable, is_valid_swap, try_select, validate_chain
from fruitmatch.errors import InvalidMoveError, OutOfBoundsError
from helpers import SWAP_BOARD, board_from_rows


@pytest.fixture
def board():
    return board_from_rows([
        [1, 1, 2, 3],
        [2, 1, "X", 3],
        [1, 2, 1, 3],
    ])


def test_first_pick_appends(board):
    assert try_select(board, [], (0, 0)) is SelectResult.APPEND


def test_adjacent_same_type_appends(board):
    assert try_select(board, [(0, 0)], (0, 1)) is SelectResult.APPEND
    assert try_select(board, [(0, 0), (0, 1)], (1, 1)) is SelectResult.APPEND


def test_picking_last_again_removes_it(board):
    assert try_select(board, [(0, 0), (0, 1)], (0, 1)) is SelectResult.REMOVE_LAST


def test_non_adjacent_candidate_rejected_and_chain_untouched(board):
    chain = [(0, 0)]
    assert try_select(board, chain, (2, 0)) is SelectResult.REJECTED
    assert try_select(board, chain, (1, 1)) is SelectResult.REJECTED  # diagonal
    assert chain == [(0, 0)]


def test_other_fruit_type_rejected(board):
    assert try_select(board, [(0, 0)], (1, 0)) is SelectResult.REJECTED


def test_obstacle_rejected(board):
    assert try_select(board, [], (1, 2)) is SelectResult.REJECTED
    assert try_select(board, [(0, 2)], (1, 2)) is SelectResult.REJECTED


def test_earlier_chain_member_rejected(board):
    assert try_select(board, [(0, 0), (0, 1), (1, 1)], (0, 1)) is SelectResult.REJECTED


def test_out_of_bounds_candidate_raises(board):
    with pytest.raises(OutOfBoundsError):
        try_select(board, [], (3, 0))


def test_validate_chain(board):
    assert validate_chain(board, [(0, 0), (0, 1), (1, 1)]) == 1
    assert is_committable(board, [(0, 0), (0, 1), (1, 1)])
    assert not is_committable(board, [(0, 0), (0, 1)])
    with pytest.raises(InvalidMoveError):
        validate_chain(board, [(0, 3), (1, 3), (2, 3), (2, 2)])
    with pytest.raises(InvalidMoveError):
        validate_chain(board, [(0, 0), (0, 1), (2, 2)])


def test_are_adjacent():
    assert are_adjacent((1, 1), (0, 1))
    assert are_adjacent((1, 1), (1, 2))
    assert not are_adjacent((1, 1), (2, 2))
    assert not are_adjacent((1, 1), (1, 1))


def test_is_valid_swap():
    board = board_from_rows(SWAP_BOARD)
    before = board.type_grid()
    assert is_valid_swap(board, (0, 2), (1, 2))
    assert is_valid_swap(board, (1, 2), (0, 2))
    assert not is_valid_swap(board, (2, 2), (2, 3))
    assert not is_valid_swap(board, (0, 0), (0, 2))
    assert board.type_grid() == before


def test_swap_with_obstacle_is_never_valid():
    board = board_from_rows([[1, 1, "X", 1]])
    assert not is_valid_swap(board, (0, 1), (0, 2))
