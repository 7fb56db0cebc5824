"""Move legality: selection chains and adjacent swaps."""
from __future__ import annotations

from enum import Enum
from typing import Sequence

from fruitmatch.components.board import Board, Position
from fruitmatch.components.tile import NO_FRUIT
from fruitmatch.constants import MIN_MATCH_LENGTH
from fruitmatch.engine.matching import has_line_match
from fruitmatch.errors import InvalidMoveError


class SelectResult(Enum):
    APPEND = "append"
    REMOVE_LAST = "remove_last"
    REJECTED = "rejected"


def are_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def try_select(board: Board, chain: Sequence[Position], candidate: Position) -> SelectResult:
    """Classify picking candidate while chain is selected.

    The chain is never modified; the caller applies the result. Picking the
    last tile again deselects it. Obstacles, empty cells, tiles already in
    the chain, tiles not 4-adjacent to the last pick and tiles of another
    fruit type are rejected.
    """
    board.require_in_bounds(candidate)
    if chain and chain[-1] == candidate:
        return SelectResult.REMOVE_LAST
    candidate_type = board.fruit_type_at(candidate)
    if candidate_type == NO_FRUIT:
        return SelectResult.REJECTED
    if candidate in chain:
        return SelectResult.REJECTED
    if chain:
        if not are_adjacent(chain[-1], candidate):
            return SelectResult.REJECTED
        if board.fruit_type_at(chain[0]) != candidate_type:
            return SelectResult.REJECTED
    return SelectResult.APPEND


def is_committable(board: Board, chain: Sequence[Position]) -> bool:
    try:
        validate_chain(board, chain)
    except InvalidMoveError:
        return False
    return True


def validate_chain(board: Board, chain: Sequence[Position]) -> int:
    """Check the resolution precondition and return the chain's fruit type.

    Raises InvalidMoveError for short, repeating, disconnected or mixed
    chains and OutOfBoundsError for coordinates off the board.
    """
    for pos in chain:
        board.require_in_bounds(pos)
    if len(chain) < MIN_MATCH_LENGTH:
        raise InvalidMoveError(f"chain needs at least {MIN_MATCH_LENGTH} tiles, got {len(chain)}")
    if len(set(chain)) != len(chain):
        raise InvalidMoveError("chain repeats a tile")
    fruit_type = board.fruit_type_at(chain[0])
    if fruit_type == NO_FRUIT:
        raise InvalidMoveError(f"chain starts on a non-fruit cell {chain[0]}")
    for prev, pos in zip(chain, chain[1:]):
        if not are_adjacent(prev, pos):
            raise InvalidMoveError(f"{prev} and {pos} are not adjacent")
    for pos in chain:
        if board.fruit_type_at(pos) != fruit_type:
            raise InvalidMoveError(f"tile at {pos} is not fruit type {fruit_type}")
    return fruit_type


def is_valid_swap(board: Board, a: Position, b: Position) -> bool:
    """True if a and b are adjacent fruit tiles whose swap creates a match."""
    board.require_in_bounds(a)
    board.require_in_bounds(b)
    if not are_adjacent(a, b):
        return False
    if not (board.is_fruit(a) and board.is_fruit(b)):
        return False
    if board.fruit_type_at(a) == board.fruit_type_at(b):
        return False
    swapped = board.copy()
    swapped.swap(a, b)
    return has_line_match(swapped, a) or has_line_match(swapped, b)
