from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from fruitmatch.components.tile import NO_FRUIT, Tile
from fruitmatch.errors import OutOfBoundsError

Position = Tuple[int, int]
Cell = Optional[Tile]

OBSTACLE_MARK = "X"
_EMPTY_GLYPH = "."
_OBSTACLE_GLYPH = "#"


@dataclass(slots=True)
class Board:
    """Fixed-size grid of tiles owned by one game session.

    ``cells[row][col]`` holds a Tile or None for a transiently empty slot.
    Row 0 is the top of the board; gravity pulls towards higher row indices.
    fruit_type_count bounds the fruit types used for fills and refills.
    """

    rows: int
    cols: int
    fruit_type_count: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.rows}x{self.cols}")
        if self.fruit_type_count <= 0:
            raise ValueError(f"fruit_type_count must be positive, got {self.fruit_type_count}")
        if not self.cells:
            self.cells = [[None] * self.cols for _ in range(self.rows)]
        elif len(self.cells) != self.rows or any(len(row) != self.cols for row in self.cells):
            raise ValueError("cells do not match board dimensions")

    @classmethod
    def from_rows(
        cls,
        layout: Sequence[Sequence[Union[int, str, None]]],
        fruit_type_count: Optional[int] = None,
    ) -> Board:
        """Build a board from a literal layout.

        Integers are fruit types, ``"X"`` marks an obstacle and None an empty
        cell. fruit_type_count defaults to the largest fruit type present.
        """
        rows = len(layout)
        cols = len(layout[0]) if rows else 0
        cells: List[List[Cell]] = []
        highest = 0
        for row_values in layout:
            row_cells: List[Cell] = []
            for value in row_values:
                if value is None:
                    row_cells.append(None)
                elif value == OBSTACLE_MARK:
                    row_cells.append(Tile.obstacle())
                else:
                    fruit_type = int(value)
                    highest = max(highest, fruit_type)
                    row_cells.append(Tile.fruit(fruit_type))
            cells.append(row_cells)
        return cls(rows=rows, cols=cols, fruit_type_count=fruit_type_count or max(highest, 1), cells=cells)

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.rows and 0 <= col < self.cols

    def require_in_bounds(self, pos: Position) -> None:
        if not self.in_bounds(pos):
            raise OutOfBoundsError(pos, self.rows, self.cols)

    def get(self, pos: Position) -> Cell:
        self.require_in_bounds(pos)
        return self.cells[pos[0]][pos[1]]

    def set(self, pos: Position, tile: Cell) -> None:
        self.require_in_bounds(pos)
        self.cells[pos[0]][pos[1]] = tile

    def fruit_type_at(self, pos: Position) -> int:
        """Fruit type at pos, or NO_FRUIT for empty and obstacle cells."""
        tile = self.get(pos)
        if tile is None or tile.is_obstacle:
            return NO_FRUIT
        return tile.fruit_type

    def is_obstacle(self, pos: Position) -> bool:
        tile = self.get(pos)
        return tile is not None and tile.is_obstacle

    def is_fruit(self, pos: Position) -> bool:
        tile = self.get(pos)
        return tile is not None and tile.is_fruit

    def positions(self) -> Iterator[Position]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def fruit_positions(self) -> List[Position]:
        return [pos for pos in self.positions() if self.is_fruit(pos)]

    def obstacle_positions(self) -> List[Position]:
        return [pos for pos in self.positions() if self.is_obstacle(pos)]

    def empty_positions(self) -> List[Position]:
        return [pos for pos in self.positions() if self.cells[pos[0]][pos[1]] is None]

    def neighbors(self, pos: Position, directions: Sequence[Position]) -> Iterator[Position]:
        row, col = pos
        for d_row, d_col in directions:
            candidate = (row + d_row, col + d_col)
            if self.in_bounds(candidate):
                yield candidate

    def swap(self, a: Position, b: Position) -> None:
        self.require_in_bounds(a)
        self.require_in_bounds(b)
        (ar, ac), (br, bc) = a, b
        self.cells[ar][ac], self.cells[br][bc] = self.cells[br][bc], self.cells[ar][ac]

    def copy(self) -> Board:
        cells = [[tile.copy() if tile is not None else None for tile in row] for row in self.cells]
        return Board(rows=self.rows, cols=self.cols, fruit_type_count=self.fruit_type_count, cells=cells)

    def type_grid(self) -> List[List[Union[int, str, None]]]:
        """Inverse of from_rows: fruit types, ``"X"`` for obstacles, None for empty."""
        grid: List[List[Union[int, str, None]]] = []
        for row in self.cells:
            grid.append([
                None if tile is None else (OBSTACLE_MARK if tile.is_obstacle else tile.fruit_type)
                for tile in row
            ])
        return grid

    def render(self) -> str:
        lines = []
        for row in self.cells:
            glyphs = []
            for tile in row:
                if tile is None:
                    glyphs.append(_EMPTY_GLYPH)
                elif tile.is_obstacle:
                    glyphs.append(_OBSTACLE_GLYPH)
                else:
                    glyphs.append(str(tile.fruit_type) if tile.fruit_type < 10 else chr(ord("a") + tile.fruit_type - 10))
            lines.append(" ".join(glyphs))
        return "\n".join(lines)
