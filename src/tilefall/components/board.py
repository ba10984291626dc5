from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Sequence, Tuple

from tilefall.components.token import EMPTY, Token

Position = Tuple[int, int]


@dataclass(slots=True)
class Board:
    """Fixed-size grid of tokens addressed by (row, col).

    Row 0 is the top edge where refills enter; row ``rows - 1`` is the bottom
    that tokens fall towards. Dimensions never change after construction.
    """
    rows: int
    cols: int
    cells: List[List[Token]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.rows}x{self.cols}")
        if not self.cells:
            self.cells = [[EMPTY for _ in range(self.cols)] for _ in range(self.rows)]
        elif len(self.cells) != self.rows or any(len(row) != self.cols for row in self.cells):
            raise ValueError("Cell rows do not match board dimensions")

    @classmethod
    def filled(cls, rows: int, cols: int, factory: Callable[[], Token]) -> "Board":
        return cls(rows, cols, [[factory() for _ in range(cols)] for _ in range(rows)])

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Token]]) -> "Board":
        if not rows or not rows[0]:
            raise ValueError("Board needs at least one row and one column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("All rows must have the same length")
        return cls(len(rows), width, [list(row) for row in rows])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int) -> Token | None:
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def set(self, row: int, col: int, token: Token) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(f"({row}, {col}) is outside a {self.rows}x{self.cols} board")
        self.cells[row][col] = token

    def row(self, row: int) -> List[Token]:
        return list(self.cells[row])

    def column(self, col: int) -> List[Token]:
        return [self.cells[row][col] for row in range(self.rows)]

    def rows_iter(self) -> Iterator[List[Token]]:
        for row in range(self.rows):
            yield self.row(row)

    def columns_iter(self) -> Iterator[List[Token]]:
        for col in range(self.cols):
            yield self.column(col)

    def positions(self) -> Iterator[Position]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col)

    def snapshot(self) -> Tuple[Tuple[Token, ...], ...]:
        """Immutable copy of the cells, for comparisons and rendering."""
        return tuple(tuple(row) for row in self.cells)

