import random
from collections import Counter

import pytest

from fruitmatch.engine.generator import generate
from fruitmatch.engine.hints import find_hint
from fruitmatch.engine.matching import find_matches
from fruitmatch.engine.shuffler import force_available_move, is_playable, shuffle
from helpers import board_from_rows, stalemate_layout


def _fruit_counts(board):
    return Counter(board.fruit_type_at(pos) for pos in board.fruit_positions())


@pytest.mark.parametrize("seed", range(8))
def test_shuffle_of_stalemate_is_playable(seed):
    board = board_from_rows(stalemate_layout(6, 6), fruit_type_count=3)
    shuffled = shuffle(board, rng=random.Random(seed))
    assert find_matches(shuffled) == []
    assert find_hint(shuffled) is not None
    assert _fruit_counts(shuffled) == _fruit_counts(board)


def test_shuffle_keeps_obstacles_and_returns_new_board():
    board = generate(7, 6, 5, {(2, 2), (4, 3)}, rng=random.Random(3))
    before = board.type_grid()
    shuffled = shuffle(board, rng=random.Random(3))
    assert shuffled is not board
    assert board.type_grid() == before
    assert shuffled.obstacle_positions() == board.obstacle_positions()
    assert is_playable(shuffled)


def test_exhausted_retries_plant_a_move():
    board = board_from_rows(stalemate_layout(), fruit_type_count=3)
    shuffled = shuffle(board, rng=random.Random(0), max_attempts=0)
    assert find_matches(shuffled) == []
    assert find_hint(shuffled) is not None


def test_fallback_breaks_existing_matches_first():
    board = board_from_rows([[1] * 5 for _ in range(5)], fruit_type_count=3)
    shuffled = shuffle(board, rng=random.Random(0), max_attempts=0)
    assert find_matches(shuffled) == []
    assert find_hint(shuffled) is not None


def test_force_available_move_on_small_board():
    board = board_from_rows(stalemate_layout(3, 4), fruit_type_count=3)
    forced = force_available_move(board, random.Random(7))
    assert is_playable(forced)
