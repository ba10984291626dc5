import logging
from typing import List

from esper import World

from tilefall.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_BOARD_RESPAWNED,
    EVENT_TILE_SWAP_DO,
    EVENT_TILE_SWAP_FINALIZE,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
)
from tilefall.components.board import Board, Position
from tilefall.components.resolve_state import ResolveState
from tilefall.components.score import Score
from tilefall.constants import GRID_COLS, GRID_ROWS
from tilefall.systems.board_ops import (
    fill_random,
    get_palette,
    is_adjacent,
    new_board,
    swap_cells,
    world_random,
)

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the board entity and applies swaps requested over the bus."""

    def __init__(self, world: World, event_bus: EventBus, rows: int = GRID_ROWS, cols: int = GRID_COLS):
        self.world = world
        self.event_bus = event_bus
        self.rng = world_random(world)
        board = new_board(rows, cols, rng=self.rng, colors=get_palette(world).colors())
        self.board_entity = self.world.create_entity(board, Score(), ResolveState())
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_TILE_SWAP_DO, self.on_swap_do)

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        reason = self.validate_move(src, dst)
        if reason is not None:
            logger.debug("Rejected swap %s -> %s: %s", src, dst, reason)
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason=reason)
            return
        self.event_bus.emit(EVENT_TILE_SWAP_DO, src=src, dst=dst)

    def validate_move(self, src: Position, dst: Position) -> str | None:
        """Return why an interactive swap is not allowed, or None if it is."""
        board = self.board
        if not board.in_bounds(*src) or not board.in_bounds(*dst):
            return 'out_of_bounds'
        if not is_adjacent(src, dst):
            return 'not_adjacent'
        return None

    def on_swap_do(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        if not swap_cells(self.board, src, dst):
            return
        self.event_bus.emit(EVENT_TILE_SWAP_FINALIZE, src=src, dst=dst)

    def respawn(self) -> List[Position]:
        """Replace every token with a fresh random one and hand the board back to resolution."""
        positions = fill_random(self.board, self.rng, get_palette(self.world).colors())
        logger.debug("Respawned %d tiles", len(positions))
        self.event_bus.emit(EVENT_BOARD_RESPAWNED, positions=positions)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='respawn')
        return positions
