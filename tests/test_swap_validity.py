import random

import pytest

from tilefall.events.bus import (EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_INVALID,
                                 EVENT_TILE_SWAP_FINALIZE)
from tilefall.systems.board import BoardSystem
from tilefall.systems.board_ops import is_adjacent, swap_cells
from tilefall.components.token import Color, Normal
from tilefall.world import create_world
from tests.helpers import board_from_letters, load_letters, pattern_letters


@pytest.mark.parametrize("src, dst", [((0, 0), (0, 1)), ((1, 2), (2, 0)), ((2, 2), (2, 2)), ((0, 2), (2, 0))])
def test_swap_twice_restores_board(src, dst):
    board = board_from_letters(["RGB", "YRG", "BYR"])
    before = board.snapshot()
    swap_cells(board, src, dst)
    swap_cells(board, src, dst)
    assert board.snapshot() == before


def test_swap_exchanges_tokens():
    board = board_from_letters(["RG"])
    assert swap_cells(board, (0, 0), (0, 1))
    assert board.row(0) == [Normal(Color.GREEN), Normal(Color.RED)]


def test_swap_with_self_is_noop():
    board = board_from_letters(["RG"])
    assert not swap_cells(board, (0, 1), (0, 1))
    assert board.row(0) == [Normal(Color.RED), Normal(Color.GREEN)]


@pytest.mark.parametrize("dst", [(0, 3), (3, 0), (-1, 0), (0, -1)])
def test_out_of_bounds_swap_leaves_board_unchanged(dst):
    board = board_from_letters(["RGB", "YRG", "BYR"])
    before = board.snapshot()
    assert not swap_cells(board, (0, 0), dst)
    assert not swap_cells(board, dst, (0, 0))
    assert board.snapshot() == before


def test_is_adjacent():
    assert is_adjacent((1, 1), (0, 1))
    assert is_adjacent((1, 1), (1, 2))
    assert not is_adjacent((1, 1), (2, 2))
    assert not is_adjacent((1, 1), (1, 3))
    assert not is_adjacent((1, 1), (1, 1))


def _setup(rows=4, cols=4):
    bus = EventBus()
    world = create_world(rng=random.Random(3))
    board_system = BoardSystem(world, bus, rows, cols)
    load_letters(board_system.board, pattern_letters(rows, cols))
    invalid, finalized = [], []
    bus.subscribe(EVENT_TILE_SWAP_INVALID, lambda s, **k: invalid.append(k))
    bus.subscribe(EVENT_TILE_SWAP_FINALIZE, lambda s, **k: finalized.append(k))
    return bus, board_system, invalid, finalized


def test_non_adjacent_request_rejected():
    bus, board_system, invalid, finalized = _setup()
    before = board_system.board.snapshot()
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 0), dst=(0, 2))
    assert invalid and invalid[0]['reason'] == 'not_adjacent'
    assert not finalized
    assert board_system.board.snapshot() == before


def test_out_of_bounds_request_rejected():
    bus, board_system, invalid, finalized = _setup()
    before = board_system.board.snapshot()
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 0), dst=(-1, 0))
    assert invalid and invalid[0]['reason'] == 'out_of_bounds'
    assert not finalized
    assert board_system.board.snapshot() == before


def test_valid_request_applies_swap():
    bus, board_system, invalid, finalized = _setup()
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 0), dst=(0, 1))
    assert not invalid
    assert finalized == [{'src': (0, 0), 'dst': (0, 1)}]
    assert board_system.board.get(0, 0) == Normal(Color.GREEN)
    assert board_system.board.get(0, 1) == Normal(Color.RED)
