"""Shuffling fruit tiles into a playable arrangement."""
from __future__ import annotations

import logging
import random
from typing import Optional, Sequence, Tuple

from fruitmatch.components.board import Board, Position
from fruitmatch.components.tile import Tile
from fruitmatch.constants import MIN_MATCH_LENGTH, SHUFFLE_ATTEMPTS
from fruitmatch.engine.hints import has_available_move
from fruitmatch.engine.matching import completing_types, has_any_match
from fruitmatch.engine.resolution import stabilize
from fruitmatch.errors import GenerationExhaustedError

log = logging.getLogger("fruitmatch.engine")

# Near-match layouts that always hold a one-swap move: three cells take the
# same type, the blocker cell takes another one.
_MOVE_PATTERNS: Tuple[Tuple[Tuple[Position, ...], Position], ...] = (
    (((0, 0), (0, 1), (0, 3)), (0, 2)),
    (((0, 0), (1, 0), (3, 0)), (2, 0)),
    (((0, 0), (0, 1), (1, 2)), (0, 2)),
    (((0, 0), (1, 0), (2, 1)), (2, 0)),
    (((1, 0), (1, 1), (0, 2)), (1, 2)),
    (((0, 1), (1, 1), (2, 0)), (2, 1)),
)


def is_playable(board: Board) -> bool:
    """No pre-formed match and at least one available move."""
    return not has_any_match(board) and has_available_move(board)


def permute_fruit(board: Board, rng: random.Random) -> Board:
    """Return a copy with fruit types randomly redistributed over the fruit cells.

    The fruit types are drawn from a shuffled pool in row-major order; each
    cell takes the first pooled type that does not complete a run with the
    cells already placed to its left or above, so the multiset of fruit types
    is kept and most permutations come out free of matches.
    """
    shuffled = board.copy()
    positions = shuffled.fruit_positions()
    pool = [shuffled.fruit_type_at(pos) for pos in positions]
    rng.shuffle(pool)
    for row, col in positions:
        shuffled.cells[row][col] = None
    for row, col in positions:
        banned = completing_types(shuffled, row, col)
        index = next((i for i, fruit_type in enumerate(pool) if fruit_type not in banned), 0)
        shuffled.cells[row][col] = Tile.fruit(pool.pop(index))
    return shuffled


def permute_until_playable(board: Board, rng: random.Random, max_attempts: int) -> Board:
    for attempt in range(max_attempts):
        candidate = permute_fruit(board, rng)
        if is_playable(candidate):
            log.debug("shuffle succeeded after %d attempt(s)", attempt + 1)
            return candidate
    raise GenerationExhaustedError(f"no playable permutation in {max_attempts} attempts")


def force_available_move(board: Board, rng: random.Random) -> Board:
    """Return a copy with a one-swap move planted and no pre-formed match.

    Tries every anchor (row-major), layout and fruit type until the result is
    playable. A board too small for any of the layouts gets a ready-made
    match from force_match instead.
    """
    fruit_types = list(range(1, board.fruit_type_count + 1))
    rng.shuffle(fruit_types)
    for anchor_row, anchor_col in board.positions():
        for members, blocker in _MOVE_PATTERNS:
            cells = [(anchor_row + dr, anchor_col + dc) for dr, dc in members]
            blocker_pos = (anchor_row + blocker[0], anchor_col + blocker[1])
            if not all(board.in_bounds(pos) and board.is_fruit(pos) for pos in cells + [blocker_pos]):
                continue
            for fruit_type in fruit_types:
                candidate = _plant(board, cells, blocker_pos, fruit_type, fruit_types)
                if is_playable(candidate):
                    return candidate
    return force_match(board, rng)


def force_match(board: Board, rng: random.Random) -> Board:
    """Return a copy with three collinear adjacent fruit cells set to one type.

    Last resort for boards that cannot hold a one-swap move: the result has a
    match on it rather than a move. Raises GenerationExhaustedError when no
    three fruit cells line up anywhere.
    """
    for row, col in board.positions():
        for dr, dc in ((0, 1), (1, 0)):
            cells = [(row + dr * i, col + dc * i) for i in range(MIN_MATCH_LENGTH)]
            if not all(board.in_bounds(pos) and board.is_fruit(pos) for pos in cells):
                continue
            fruit_type = rng.randint(1, board.fruit_type_count)
            forced = board.copy()
            for r, c in cells:
                forced.cells[r][c] = Tile.fruit(fruit_type)
            log.warning("%dx%d board cannot hold a move; forced a match at %s", board.rows, board.cols, cells)
            return forced
    raise GenerationExhaustedError(f"a {board.rows}x{board.cols} board with this layout cannot hold a match")


def _plant(
    board: Board,
    cells: Sequence[Position],
    blocker: Position,
    fruit_type: int,
    fruit_types: Sequence[int],
) -> Board:
    candidate = board.copy()
    for row, col in cells:
        candidate.cells[row][col] = Tile.fruit(fruit_type)
    if candidate.fruit_type_at(blocker) == fruit_type:
        other = next(t for t in fruit_types if t != fruit_type)
        candidate.cells[blocker[0]][blocker[1]] = Tile.fruit(other)
    return candidate


def shuffle(
    board: Board,
    *,
    rng: Optional[random.Random] = None,
    max_attempts: int = SHUFFLE_ATTEMPTS,
) -> Board:
    """Return a new board with the fruit tiles of board redistributed.

    Obstacles and empty cells keep their positions. The result has no
    pre-formed match and at least one available move; after max_attempts
    failed permutations a move is planted instead, or a match on boards too
    small to hold a move.
    """
    rng = rng or random.Random()
    try:
        return permute_until_playable(board, rng, max_attempts)
    except GenerationExhaustedError:
        log.warning("shuffle retry cap %d exhausted; planting a move", max_attempts)
    base = board.copy()
    if has_any_match(base):
        stabilize(base)
    return force_available_move(base, rng)

