import pytest

from tilefall.components.token import EMPTY, Color, Deleting, Normal
from tilefall.systems.board_ops import Axis, Match, find_all_matches, matched_positions, scan_line
from tests.helpers import board_from_letters, pattern_letters

R, G, B = Normal(Color.RED), Normal(Color.GREEN), Normal(Color.BLUE)


def test_row_scan_finds_leading_triple():
    rows = pattern_letters(5, 5)
    rows[0] = "RRRBG"
    board = board_from_letters(rows)
    matches = scan_line(board.row(0), 0)
    assert matches == [Match(color=Color.RED, length=3, outer_index=0, inner_index=3, axis=Axis.ROW)]
    assert matches[0].positions() == [(0, 0), (0, 1), (0, 2)]


def test_trailing_run_uses_line_length():
    matches = scan_line([G, B, B, B, B], 2, Axis.COLUMN)
    assert matches == [Match(Color.BLUE, 4, 2, 5, Axis.COLUMN)]
    assert matches[0].positions() == [(1, 2), (2, 2), (3, 2), (4, 2)]


def test_runs_shorter_than_three_ignored():
    assert scan_line([R, R, G, G, R], 0) == []


def test_empty_breaks_run():
    assert scan_line([R, R, EMPTY, R, R], 0) == []
    matches = scan_line([R, R, R, EMPTY, R], 0)
    assert matches == [Match(Color.RED, 3, 0, 3, Axis.ROW)]


def test_run_after_empty_is_counted_from_one():
    matches = scan_line([EMPTY, B, B, B], 1)
    assert matches == [Match(Color.BLUE, 3, 1, 4, Axis.ROW)]


def test_deleting_tokens_count_as_their_color():
    matches = scan_line([Deleting(Color.RED), R, R, G], 0)
    assert matches == [Match(Color.RED, 3, 0, 3, Axis.ROW)]


def test_multiple_runs_in_one_line():
    matches = scan_line([R, R, R, G, G, G, B], 0)
    assert matches == [Match(Color.RED, 3, 0, 3, Axis.ROW), Match(Color.GREEN, 3, 0, 6, Axis.ROW)]


def test_all_empty_line():
    assert scan_line([EMPTY, EMPTY, EMPTY], 0) == []


def test_row_and_column_matches_overlap():
    rows = pattern_letters(5, 5)
    rows[2] = "Y" + rows[2][1:]
    rows[3] = "Y" + rows[3][1:]
    rows[4] = "YYY" + rows[4][3:]
    board = board_from_letters(rows)
    matches = find_all_matches(board)
    assert Match(Color.YELLOW, 3, 4, 3, Axis.ROW) in matches
    assert Match(Color.YELLOW, 3, 0, 5, Axis.COLUMN) in matches
    assert len(matches) == 2
    # Shared corner is listed once.
    assert matched_positions(matches) == [(2, 0), (3, 0), (4, 0), (4, 1), (4, 2)]


def test_pattern_board_has_no_matches():
    assert find_all_matches(board_from_letters(pattern_letters(6, 7))) == []


def test_match_requires_axis():
    with pytest.raises(TypeError):
        Match(Color.RED, 3, 0, 3)
