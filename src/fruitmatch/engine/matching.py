"""Match detection: maximal same-type runs along rows and columns."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Set

from fruitmatch.components.board import Board, Position
from fruitmatch.components.tile import NO_FRUIT
from fruitmatch.constants import MIN_MATCH_LENGTH


def _lines(board: Board) -> Iterable[List[Position]]:
    for row in range(board.rows):
        yield [(row, col) for col in range(board.cols)]
    for col in range(board.cols):
        yield [(row, col) for row in range(board.rows)]


def _runs_in_line(board: Board, line: Sequence[Position], *, first_only: bool = False) -> List[List[Position]]:
    runs: List[List[Position]] = []
    run: List[Position] = []
    last_type = NO_FRUIT
    for pos in line:
        tval = board.fruit_type_at(pos)
        if tval != NO_FRUIT and tval == last_type:
            run.append(pos)
            continue
        if len(run) >= MIN_MATCH_LENGTH:
            runs.append(run)
            if first_only:
                return runs
        run = [pos] if tval != NO_FRUIT else []
        last_type = tval
    if len(run) >= MIN_MATCH_LENGTH:
        runs.append(run)
    return runs


def find_matches(board: Board) -> List[List[Position]]:
    """Return every maximal run of >= 3 same-typed fruit tiles.

    Rows are scanned left to right first, then columns top to bottom. A run
    longer than three is one group. A cell shared by a horizontal and a
    vertical run appears in both groups; callers deduplicate cell removal.
    Empty cells and obstacles break runs.
    """
    matches: List[List[Position]] = []
    for line in _lines(board):
        matches.extend(_runs_in_line(board, line))
    return matches


def has_any_match(board: Board) -> bool:
    """Short-circuiting variant of find_matches."""
    for line in _lines(board):
        if _runs_in_line(board, line, first_only=True):
            return True
    return False


def matched_positions(groups: Iterable[Sequence[Position]]) -> Set[Position]:
    return {pos for group in groups for pos in group}


def completing_types(board: Board, row: int, col: int) -> Set[int]:
    """Fruit types that would finish a run of three at (row, col) with the two cells to its left or above."""
    banned: Set[int] = set()
    if col >= 2:
        left1 = board.fruit_type_at((row, col - 1))
        if left1 != NO_FRUIT and left1 == board.fruit_type_at((row, col - 2)):
            banned.add(left1)
    if row >= 2:
        up1 = board.fruit_type_at((row - 1, col))
        if up1 != NO_FRUIT and up1 == board.fruit_type_at((row - 2, col)):
            banned.add(up1)
    return banned


def has_line_match(board: Board, pos: Position) -> bool:
    """Return True if a horizontal or vertical run of >= 3 passes through pos."""
    tval = board.fruit_type_at(pos)
    if tval == NO_FRUIT:
        return False
    row, col = pos
    for d_row, d_col in ((0, 1), (1, 0)):
        length = 1
        for sign in (-1, 1):
            r, c = row + sign * d_row, col + sign * d_col
            while board.in_bounds((r, c)) and board.fruit_type_at((r, c)) == tval:
                length += 1
                r += sign * d_row
                c += sign * d_col
        if length >= MIN_MATCH_LENGTH:
            return True
    return False
