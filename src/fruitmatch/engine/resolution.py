"""Move resolution: clear, gravity, refill and cascade until the board is stable."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from fruitmatch.components.board import Board, Position
from fruitmatch.components.tile import Tile
from fruitmatch.constants import MAX_CASCADE_DEPTH
from fruitmatch.engine.matching import find_matches, matched_positions
from fruitmatch.engine.moves import is_valid_swap, validate_chain
from fruitmatch.engine.scoring import DEFAULT_RULES, ScoreRules
from fruitmatch.errors import InvalidMoveError

log = logging.getLogger("fruitmatch.engine")

TypeEntry = Tuple[int, int, int]

PHASE_CLEAR = "clear"
PHASE_GRAVITY = "gravity"
PHASE_REFILL = "refill"


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    fruit_type: int


@dataclass(slots=True)
class ResolutionStep:
    """One stage of a resolution, for incremental rendering.

    depth is 0 for the player's own groups and 1+ for cascade passes.
    board is a snapshot taken after the stage was applied.
    """

    depth: int
    phase: str
    board: Board
    positions: List[Position] = field(default_factory=list)
    cleared: List[TypeEntry] = field(default_factory=list)
    moves: List[GravityMove] = field(default_factory=list)
    groups: List[List[Position]] = field(default_factory=list)
    points: int = 0


@dataclass(slots=True)
class ResolveResult:
    board: Board
    points_awarded: int
    combo_count: int
    cascaded: bool
    passes: int
    cleared_by_type: Dict[int, int] = field(default_factory=dict)


def clear_groups(board: Board, groups: Sequence[Sequence[Position]]) -> List[TypeEntry]:
    """Null out every cell in groups; shared cells are cleared once."""
    cleared: List[TypeEntry] = []
    for row, col in sorted(matched_positions(groups)):
        tile = board.get((row, col))
        if tile is None or tile.is_obstacle:
            continue
        cleared.append((row, col, tile.fruit_type))
        board.cells[row][col] = None
    return cleared


def compute_gravity_moves(board: Board) -> List[GravityMove]:
    """Plan per-column falls; obstacles stay put and act as a floor for tiles above them."""
    moves: List[GravityMove] = []
    for col in range(board.cols):
        target_row = board.rows - 1
        for row in range(board.rows - 1, -1, -1):
            tile = board.cells[row][col]
            if tile is None:
                continue
            if tile.is_obstacle:
                target_row = row - 1
                continue
            if row != target_row:
                moves.append(GravityMove(source=(row, col), target=(target_row, col), fruit_type=tile.fruit_type))
            target_row -= 1
    return moves


def apply_gravity_moves(board: Board, moves: Sequence[GravityMove]) -> None:
    # Moves are planned bottom-up per column, so each target is free when reached.
    for move in moves:
        src_row, src_col = move.source
        dst_row, dst_col = move.target
        board.cells[dst_row][dst_col] = board.cells[src_row][src_col]
        board.cells[src_row][src_col] = None


def apply_gravity(board: Board) -> List[GravityMove]:
    moves = compute_gravity_moves(board)
    apply_gravity_moves(board, moves)
    return moves


def refill(board: Board, rng: random.Random) -> List[Position]:
    """Fill every empty cell, row-major, with a uniformly drawn fruit type."""
    spawned: List[Position] = []
    for row in range(board.rows):
        for col in range(board.cols):
            if board.cells[row][col] is not None:
                continue
            board.cells[row][col] = Tile.fruit(rng.randint(1, board.fruit_type_count))
            spawned.append((row, col))
    return spawned


def stabilize(board: Board) -> List[Position]:
    """Break every remaining match by retyping cells on a two-colour parity pattern.

    Only used when the cascade cap is hit. Returns the retyped positions.
    """
    colours = min(2, board.fruit_type_count)
    changed: List[Position] = []
    for _ in range(board.rows * board.cols):
        groups = find_matches(board)
        if not groups:
            return changed
        for row, col in sorted(matched_positions(groups)):
            board.cells[row][col] = Tile.fruit(1 + (row + col) % colours)
            changed.append((row, col))
    for row, col in board.fruit_positions():
        board.cells[row][col] = Tile.fruit(1 + (row + col) % colours)
        changed.append((row, col))
    return changed


def iter_resolution(
    board: Board,
    groups: Sequence[Sequence[Position]],
    *,
    combo_count: int = 0,
    rng: Optional[random.Random] = None,
    rules: ScoreRules = DEFAULT_RULES,
    max_depth: int = MAX_CASCADE_DEPTH,
) -> Iterator[ResolutionStep]:
    """Resolve groups and every cascade they trigger, yielding each stage.

    The board is mutated in place. Draining the iterator leaves the board
    free of matches; the points of all clear steps sum to the move's score.
    """
    rng = rng or random.Random()
    pending = [list(group) for group in groups]
    depth = 0
    while pending:
        cascade = depth > 0
        points = sum(rules.group_points(len(group), combo_count, cascade=cascade) for group in pending)
        cleared = clear_groups(board, pending)
        yield ResolutionStep(
            depth=depth,
            phase=PHASE_CLEAR,
            board=board.copy(),
            positions=[(row, col) for row, col, _ in cleared],
            cleared=cleared,
            groups=pending,
            points=points,
        )
        moves = apply_gravity(board)
        yield ResolutionStep(depth=depth, phase=PHASE_GRAVITY, board=board.copy(), moves=moves)
        spawned = refill(board, rng)
        yield ResolutionStep(depth=depth, phase=PHASE_REFILL, board=board.copy(), positions=spawned)
        depth += 1
        pending = find_matches(board)
        if pending:
            log.debug("cascade depth %d: %d group(s)", depth, len(pending))
        if pending and depth >= max_depth:
            log.warning("cascade cap %d reached; forcing a stable board", max_depth)
            stabilize(board)
            pending = []


def _collect(board: Board, steps: Iterator[ResolutionStep], combo_count: int) -> ResolveResult:
    points = 0
    passes = 0
    cleared_by_type: Dict[int, int] = {}
    for step in steps:
        if step.phase != PHASE_CLEAR:
            continue
        passes += 1
        points += step.points
        for _, _, fruit_type in step.cleared:
            cleared_by_type[fruit_type] = cleared_by_type.get(fruit_type, 0) + 1
    return ResolveResult(
        board=board,
        points_awarded=points,
        combo_count=combo_count + 1,
        cascaded=passes > 1,
        passes=passes,
        cleared_by_type=cleared_by_type,
    )


def iter_resolve(
    board: Board,
    chain: Sequence[Position],
    combo_count: int = 0,
    *,
    rng: Optional[random.Random] = None,
    rules: ScoreRules = DEFAULT_RULES,
    max_depth: int = MAX_CASCADE_DEPTH,
) -> Iterator[ResolutionStep]:
    """Staged form of resolve. The chain is validated before anything is yielded."""
    validate_chain(board, chain)
    return iter_resolution(board, [list(chain)], combo_count=combo_count, rng=rng, rules=rules, max_depth=max_depth)


def resolve(
    board: Board,
    chain: Sequence[Position],
    combo_count: int = 0,
    *,
    rng: Optional[random.Random] = None,
    rules: ScoreRules = DEFAULT_RULES,
    max_depth: int = MAX_CASCADE_DEPTH,
) -> ResolveResult:
    """Apply a committed selection chain and return the stabilised board.

    The chain itself is the first match group. Raises InvalidMoveError when
    the chain is shorter than three tiles, mixes fruit types or is not
    connected.
    """
    steps = iter_resolve(board, chain, combo_count, rng=rng, rules=rules, max_depth=max_depth)
    return _collect(board, steps, combo_count)


def iter_resolve_swap(
    board: Board,
    a: Position,
    b: Position,
    combo_count: int = 0,
    *,
    rng: Optional[random.Random] = None,
    rules: ScoreRules = DEFAULT_RULES,
    max_depth: int = MAX_CASCADE_DEPTH,
) -> Iterator[ResolutionStep]:
    if not is_valid_swap(board, a, b):
        raise InvalidMoveError(f"swapping {a} and {b} does not create a match")
    board.swap(a, b)
    groups = find_matches(board)
    return iter_resolution(board, groups, combo_count=combo_count, rng=rng, rules=rules, max_depth=max_depth)


def resolve_swap(
    board: Board,
    a: Position,
    b: Position,
    combo_count: int = 0,
    *,
    rng: Optional[random.Random] = None,
    rules: ScoreRules = DEFAULT_RULES,
    max_depth: int = MAX_CASCADE_DEPTH,
) -> ResolveResult:
    """Swap two adjacent tiles and resolve the matches it creates."""
    steps = iter_resolve_swap(board, a, b, combo_count, rng=rng, rules=rules, max_depth=max_depth)
    return _collect(board, steps, combo_count)
