"""Structured errors raised by the board engine.

User-facing rejections (an illegal tile pick, a swap that makes no match) are
not errors; they come back as results or events. These exceptions signal
caller bugs or exhausted internal retry loops.
"""
from __future__ import annotations

from typing import Tuple


class FruitMatchError(Exception):
    """Base class for every engine error."""


class InvalidMoveError(FruitMatchError, ValueError):
    """A committed move does not satisfy the resolution precondition."""


class OutOfBoundsError(FruitMatchError, IndexError):
    """A coordinate lies outside ``[0, rows) x [0, cols)``."""

    def __init__(self, position: Tuple[int, int], rows: int, cols: int):
        self.position = position
        self.rows = rows
        self.cols = cols
        super().__init__(f"position {position} outside {rows}x{cols} board")


class GenerationExhaustedError(FruitMatchError, RuntimeError):
    """Retry caps ran out while building or shuffling a board."""
