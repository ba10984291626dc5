"""Single-ply lookahead used by the automatic player.

Every orthogonal swap is tried on the live board, scored by how many match
records it produces, and undone before the next candidate is tried.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, NamedTuple, Tuple

from tilefall.components.board import Board, Position
from tilefall.systems.board_ops import count_matches, swap_cells

# Order matters: ties go to the first candidate found.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


class Move(NamedTuple):
    row1: int
    col1: int
    row2: int
    col2: int

    @property
    def src(self) -> Position:
        return (self.row1, self.col1)

    @property
    def dst(self) -> Position:
        return (self.row2, self.col2)


# Returned when no swap produces a match. Callers must treat it as "no move".
NO_MOVE = Move(0, 0, 0, 0)


@contextmanager
def speculative_swap(board: Board, src: Position, dst: Position) -> Iterator[bool]:
    """Swap two cells for the duration of the block, then swap them back."""
    swapped = swap_cells(board, src, dst)
    try:
        yield swapped
    finally:
        if swapped:
            swap_cells(board, src, dst)


def candidate_moves(board: Board) -> Iterator[Move]:
    for col in range(board.cols):
        for row in range(board.rows):
            for d_row, d_col in DIRECTIONS:
                n_row, n_col = row + d_row, col + d_col
                if board.in_bounds(n_row, n_col):
                    yield Move(row, col, n_row, n_col)


def evaluate_moves(board: Board) -> Iterator[Tuple[Move, int]]:
    """Yield each candidate swap with the number of matches it would leave on the board."""
    for move in candidate_moves(board):
        with speculative_swap(board, move.src, move.dst):
            count = count_matches(board)
        yield move, count


def best_move(board: Board) -> Move:
    return best_move_with_count(board)[0]


def best_move_with_count(board: Board) -> Tuple[Move, int]:
    """Pick the swap yielding the most matches; first found wins ties."""
    best = NO_MOVE
    best_count = 0
    for move, count in evaluate_moves(board):
        if count > best_count:
            best, best_count = move, count
    return best, best_count
