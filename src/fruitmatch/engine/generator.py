"""Initial board generation."""
from __future__ import annotations

import logging
import random
from typing import Iterable, Mapping, Optional

from fruitmatch.components.board import Board, Position
from fruitmatch.components.tile import Tile
from fruitmatch.constants import GENERATION_ATTEMPTS, GENERATION_SHUFFLE_ATTEMPTS, MIN_FRUIT_TYPES
from fruitmatch.engine.hints import has_available_move
from fruitmatch.engine.matching import completing_types
from fruitmatch.engine.shuffler import force_available_move, permute_until_playable
from fruitmatch.errors import GenerationExhaustedError

log = logging.getLogger("fruitmatch.engine")


def generate(
    rows: int,
    cols: int,
    fruit_type_count: int,
    obstacles: Iterable[Position] = (),
    *,
    obstacle_health: Optional[Mapping[Position, int]] = None,
    rng: Optional[random.Random] = None,
    max_attempts: int = GENERATION_ATTEMPTS,
    shuffle_attempts: int = GENERATION_SHUFFLE_ATTEMPTS,
) -> Board:
    """Create a board with no pre-formed match and at least one available move.

    Obstacles are placed first and skipped by every fruit placement. Fruit
    types are drawn uniformly from ``1..fruit_type_count``; a draw that would
    complete a run of three with the two cells to its left or above is
    redrawn from the remaining types. A fill without any move is reshuffled
    a few times before it is discarded. When max_attempts fills fail, a move
    is planted on the last fill; a board too small to hold any move gets
    three fruit of one type in a row instead.
    """
    if fruit_type_count < MIN_FRUIT_TYPES:
        raise ValueError(f"need at least {MIN_FRUIT_TYPES} fruit types, got {fruit_type_count}")
    rng = rng or random.Random()
    template = _board_with_obstacles(rows, cols, fruit_type_count, obstacles, obstacle_health or {})

    last_fill: Optional[Board] = None
    for attempt in range(max_attempts):
        board = template.copy()
        if not _fill(board, rng):
            continue
        last_fill = board
        if has_available_move(board):
            log.debug("generated %dx%d board on attempt %d", rows, cols, attempt + 1)
            return board
        try:
            return permute_until_playable(board, rng, shuffle_attempts)
        except GenerationExhaustedError:
            continue

    log.warning("generation retry cap %d exhausted; planting a move", max_attempts)
    base = last_fill or _parity_fill(template.copy())
    return force_available_move(base, rng)


def _board_with_obstacles(
    rows: int,
    cols: int,
    fruit_type_count: int,
    obstacles: Iterable[Position],
    obstacle_health: Mapping[Position, int],
) -> Board:
    board = Board(rows=rows, cols=cols, fruit_type_count=fruit_type_count)
    for pos in set(obstacles) | set(obstacle_health):
        board.set(pos, Tile.obstacle(obstacle_health.get(pos)))
    return board


def _fill(board: Board, rng: random.Random) -> bool:
    for row, col in board.positions():
        if board.is_obstacle((row, col)):
            continue
        banned = completing_types(board, row, col)
        fruit_type = rng.randint(1, board.fruit_type_count)
        if fruit_type in banned:
            allowed = [t for t in range(1, board.fruit_type_count + 1) if t not in banned]
            if not allowed:
                return False
            fruit_type = rng.choice(allowed)
        board.cells[row][col] = Tile.fruit(fruit_type)
    return True


def _parity_fill(board: Board) -> Board:
    for row, col in board.positions():
        if not board.is_obstacle((row, col)):
            board.cells[row][col] = Tile.fruit(1 + (row + col) % 2)
    return board
