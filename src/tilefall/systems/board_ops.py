from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Set

from esper import World

from tilefall.components.board import Board, Position
from tilefall.components.palette import Palette
from tilefall.components.score import Score
from tilefall.components.token import (
    EMPTY,
    Color,
    Deleting,
    Empty,
    Normal,
    Token,
    color_of,
    is_colored,
)
from tilefall.constants import MIN_MATCH_LENGTH


class Axis(Enum):
    ROW = "row"
    COLUMN = "column"


@dataclass(frozen=True, slots=True)
class Match:
    """One detected run along a row or column.

    ``inner_index`` is one past the run's last cell, so the run covers
    ``[inner_index - length, inner_index)`` along the scanned line.
    """
    color: Color
    length: int
    outer_index: int
    inner_index: int
    axis: Axis

    def positions(self) -> List[Position]:
        span = range(self.inner_index - self.length, self.inner_index)
        if self.axis is Axis.ROW:
            return [(self.outer_index, inner) for inner in span]
        return [(inner, self.outer_index) for inner in span]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    token: Token


# --- World lookups ----------------------------------------------------------

def get_board_entity(world: World) -> int:
    for entity, _ in world.get_component(Board):
        return entity
    raise RuntimeError("Board entity not found")


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board entity not found")


def get_score(world: World) -> int:
    for _, score in world.get_component(Score):
        return score.value
    return 0


def get_palette(world: World) -> Palette:
    for _, palette in world.get_component(Palette):
        return palette
    raise RuntimeError("Palette definitions not found")


def world_random(world: World) -> random.Random:
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    rng = random.Random()
    setattr(world, "random", rng)
    return rng


# --- Construction -----------------------------------------------------------

def random_token(rng: random.Random, colors: Sequence[Color]) -> Normal:
    if not colors:
        raise ValueError("Cannot spawn a token from an empty palette")
    return Normal(rng.choice(list(colors)))


def new_board(
    rows: int,
    cols: int,
    *,
    rng: random.Random | None = None,
    colors: Sequence[Color] | None = None,
) -> Board:
    """Build a board filled with random tokens. Matches may be present."""
    rng = rng or random.Random()
    choices = list(colors) if colors is not None else list(Color)
    return Board.filled(rows, cols, lambda: random_token(rng, choices))


def fill_random(board: Board, rng: random.Random, colors: Sequence[Color]) -> List[Position]:
    """Overwrite every cell with a fresh random token."""
    positions = list(board.positions())
    for row, col in positions:
        board.cells[row][col] = random_token(rng, colors)
    return positions


# --- Match scanning ---------------------------------------------------------

def scan_line(line: Sequence[Token], outer_index: int, axis: Axis = Axis.ROW) -> List[Match]:
    """Report maximal same-color runs of MIN_MATCH_LENGTH or more in one line.

    Deleting tokens count as their color. Empty cells end a run.
    """
    matches: List[Match] = []
    previous: Optional[Token] = None
    run_length = 1
    for position, token in enumerate(line):
        color = color_of(token)
        if color is not None and color_of(previous) == color:
            run_length += 1
        else:
            prev_color = color_of(previous)
            if run_length >= MIN_MATCH_LENGTH and prev_color is not None:
                matches.append(Match(prev_color, run_length, outer_index, position, axis))
            run_length = 1
        previous = token
    last_color = color_of(previous)
    if run_length >= MIN_MATCH_LENGTH and last_color is not None:
        matches.append(Match(last_color, run_length, outer_index, len(line), axis))
    return matches


def find_all_matches(board: Board) -> List[Match]:
    """Scan every row, then every column. Row and column matches may share cells."""
    matches: List[Match] = []
    for row_index, line in enumerate(board.rows_iter()):
        matches.extend(scan_line(line, row_index, Axis.ROW))
    for col_index, line in enumerate(board.columns_iter()):
        matches.extend(scan_line(line, col_index, Axis.COLUMN))
    return matches


def count_matches(board: Board) -> int:
    return len(find_all_matches(board))


def matched_positions(matches: Iterable[Match]) -> List[Position]:
    cells: Set[Position] = set()
    for match in matches:
        cells.update(match.positions())
    return sorted(cells)


def match_score(matches: Iterable[Match]) -> int:
    """Triangular score over the summed lengths of one deletion pass.

    A cell in both a row and a column match counts in both lengths.
    """
    total = sum(match.length for match in matches)
    return total * (total + 1) // 2


# --- Clearing ---------------------------------------------------------------

def mark_matches(board: Board, matches: Iterable[Match]) -> List[Position]:
    """Flag every matched cell as Deleting. Cells already flagged stay as they are."""
    marked: List[Position] = []
    for row, col in matched_positions(matches):
        token = board.cells[row][col]
        if isinstance(token, Normal):
            board.cells[row][col] = Deleting(token.color)
            marked.append((row, col))
    return marked


def sweep_deleting(board: Board) -> List[Position]:
    cleared: List[Position] = []
    for row, col in board.positions():
        if isinstance(board.cells[row][col], Deleting):
            board.cells[row][col] = EMPTY
            cleared.append((row, col))
    return cleared


def delete_matches(board: Board) -> int:
    """Run one scan/mark/sweep pass and return the points it earns (0 if no match)."""
    matches = find_all_matches(board)
    if not matches:
        return 0
    mark_matches(board, matches)
    sweep_deleting(board)
    return match_score(matches)


# --- Gravity & refill -------------------------------------------------------

def do_gravity_step(board: Board) -> List[GravityMove]:
    """Drop every token with an empty cell below it by exactly one row."""
    moves: List[GravityMove] = []
    for col in range(board.cols):
        # Bottom-to-top: a token moved this step is never revisited.
        for row in range(board.rows - 1, 0, -1):
            if not isinstance(board.cells[row][col], Empty):
                continue
            above = board.cells[row - 1][col]
            if not is_colored(above):
                continue
            board.cells[row][col] = above
            board.cells[row - 1][col] = EMPTY
            moves.append(GravityMove(source=(row - 1, col), target=(row, col), token=above))
    return moves


def do_gravity(board: Board) -> List[GravityMove]:
    """Repeat gravity steps until nothing moves; return every move performed."""
    moves: List[GravityMove] = []
    while True:
        step = do_gravity_step(board)
        if not step:
            return moves
        moves.extend(step)


def refill_top_row(board: Board, rng: random.Random, colors: Sequence[Color]) -> List[Position]:
    spawned: List[Position] = []
    for col in range(board.cols):
        if isinstance(board.cells[0][col], Empty):
            board.cells[0][col] = random_token(rng, colors)
            spawned.append((0, col))
    return spawned


# --- Swaps ------------------------------------------------------------------

def swap_cells(board: Board, src: Position, dst: Position) -> bool:
    """Exchange two cells. Out-of-bounds or identical addresses leave the board untouched."""
    if not (board.in_bounds(*src) and board.in_bounds(*dst)):
        return False
    if src == dst:
        return False
    (sr, sc), (dr, dc) = src, dst
    board.cells[sr][sc], board.cells[dr][dc] = board.cells[dr][dc], board.cells[sr][sc]
    return True


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def is_stable(board: Board) -> bool:
    """True when every cell is a Normal token and no match remains."""
    if any(not isinstance(token, Normal) for line in board.cells for token in line):
        return False
    return not find_all_matches(board)

