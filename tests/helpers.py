from __future__ import annotations

from typing import List, Sequence

from tilefall.components.board import Board
from tilefall.components.token import EMPTY, Color, Deleting, Normal, Token

LETTER_TO_COLOR = {
    'R': Color.RED,
    'G': Color.GREEN,
    'B': Color.BLUE,
    'Y': Color.YELLOW,
}


def token_for(letter: str) -> Token:
    """'.' is empty, upper case is a normal tile, lower case a tile being deleted."""
    if letter == '.':
        return EMPTY
    color = LETTER_TO_COLOR[letter.upper()]
    return Normal(color) if letter.isupper() else Deleting(color)


def board_from_letters(rows: Sequence[str]) -> Board:
    return Board.from_rows([[token_for(ch) for ch in row] for row in rows])


def load_letters(board: Board, rows: Sequence[str]) -> None:
    """Overwrite an existing board in place so systems holding it see the change."""
    assert len(rows) == board.rows and all(len(row) == board.cols for row in rows)
    for r, row in enumerate(rows):
        for c, letter in enumerate(row):
            board.set(r, c, token_for(letter))


def pattern_letters(rows: int, cols: int) -> List[str]:
    """Diagonal three-color pattern: no matches and no swap creates one."""
    return [''.join('RGB'[(r + c) % 3] for c in range(cols)) for r in range(rows)]
