"""Hint search: find a legal move without touching the caller's board."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from fruitmatch.components.board import Board, Position
from fruitmatch.constants import DIRECTIONS, MIN_MATCH_LENGTH
from fruitmatch.engine.matching import has_any_match
from fruitmatch.engine.moves import is_valid_swap

log = logging.getLogger("fruitmatch.engine")

SwapHint = Tuple[Position, Position]


def find_hint(board: Board) -> Optional[SwapHint]:
    """Return the first adjacent swap that produces a match, or None.

    Cells are scanned row-major and neighbours in up, down, left, right order.
    Swaps are simulated on a throwaway copy of the board.
    """
    work = board.copy()
    for pos in work.positions():
        if not work.is_fruit(pos):
            continue
        for other in work.neighbors(pos, DIRECTIONS):
            if not work.is_fruit(other):
                continue
            if work.fruit_type_at(pos) == work.fruit_type_at(other):
                continue
            work.swap(pos, other)
            matched = has_any_match(work)
            work.swap(pos, other)
            if matched:
                log.debug("hint %s <-> %s", pos, other)
                return pos, other
    return None


def find_all_swaps(board: Board) -> List[SwapHint]:
    """Enumerate every match-producing swap, each pair once (right and down neighbours)."""
    swaps: List[SwapHint] = []
    for row, col in board.positions():
        pos = (row, col)
        for other in ((row, col + 1), (row + 1, col)):
            if board.in_bounds(other) and is_valid_swap(board, pos, other):
                swaps.append((pos, other))
    return swaps


def has_available_move(board: Board) -> bool:
    return find_hint(board) is not None


def find_chain_hint(board: Board, length: int = MIN_MATCH_LENGTH) -> Optional[List[Position]]:
    """Return the first connected same-type path of ``length`` tiles, or None.

    Search order matches find_hint: row-major start cells, then up, down,
    left, right at each step.
    """

    def extend(path: List[Position], fruit_type: int) -> Optional[List[Position]]:
        if len(path) == length:
            return list(path)
        for other in board.neighbors(path[-1], DIRECTIONS):
            if other in path or board.fruit_type_at(other) != fruit_type:
                continue
            path.append(other)
            found = extend(path, fruit_type)
            if found is not None:
                return found
            path.pop()
        return None

    for pos in board.positions():
        if not board.is_fruit(pos):
            continue
        found = extend([pos], board.fruit_type_at(pos))
        if found is not None:
            return found
    return None
