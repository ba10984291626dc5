import logging
from typing import List

from esper import World

from tilefall.events.bus import (EventBus, EVENT_TILE_SWAP_FINALIZE, EVENT_BOARD_CHANGED,
                                 EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED,
                                 EVENT_REFILL_COMPLETED, EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE,
                                 EVENT_SCORE_CHANGED)
from tilefall.components.board import Board, Position
from tilefall.components.resolve_state import ResolvePhase, ResolveState
from tilefall.components.score import Score
from tilefall.systems.board_ops import (
    do_gravity,
    do_gravity_step,
    find_all_matches,
    get_board_entity,
    get_palette,
    mark_matches,
    match_score,
    refill_top_row,
    sweep_deleting,
    world_random,
)

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Runs the scan -> clear -> settle -> refill cycle until the board is stable.

    Every intermediate state is announced on the bus so a renderer can draw it;
    listeners never change the outcome.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_SWAP_FINALIZE, self.on_swap_finalize)
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)
        self.last_score_delta = 0

    def on_swap_finalize(self, sender, **kwargs):
        self.resolve()

    def on_board_changed(self, sender, **kwargs):
        self.resolve()

    def resolve(self) -> int:
        """Resolve the board to quiescence and return the points earned."""
        entity = get_board_entity(self.world)
        board = self.world.component_for_entity(entity, Board)
        state = self.world.component_for_entity(entity, ResolveState)
        score = self.world.component_for_entity(entity, Score)
        if state.cascade_active:
            # A listener triggered another resolve mid-cascade; the running one covers it.
            return 0
        state.cascade_active = True
        state.cascade_depth = 0
        earned = 0
        try:
            while True:
                earned += self._clear_until_settled(board, state, score)
                self._set_phase(state, ResolvePhase.REFILLING)
                if not self._refill(board):
                    break
                self._gravity_step(board, state)
                while self._refill(board):
                    self._gravity_step(board, state)
        finally:
            state.cascade_active = False
        self._set_phase(state, ResolvePhase.STABLE)
        self.last_score_delta = earned
        logger.debug("Board stable after %d deletion passes, +%d points", state.cascade_depth, earned)
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=state.cascade_depth, score_delta=earned)
        return earned

    def _clear_until_settled(self, board: Board, state: ResolveState, score: Score) -> int:
        earned = 0
        while True:
            self._set_phase(state, ResolvePhase.SCANNING)
            matches = find_all_matches(board)
            if not matches:
                return earned
            state.cascade_depth += 1
            self._set_phase(state, ResolvePhase.CLEARING)
            marked = mark_matches(board, matches)
            self.event_bus.emit(EVENT_MATCH_FOUND, matches=matches, positions=marked, size=len(marked))
            cleared = sweep_deleting(board)
            delta = match_score(matches)
            earned += delta
            score.add(delta)
            logger.debug("Pass %d cleared %d cells from %d matches (+%d)",
                         state.cascade_depth, len(cleared), len(matches), delta)
            self.event_bus.emit(EVENT_MATCH_CLEARED, positions=cleared, score_delta=delta)
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=score.value, delta=delta)
            self._set_phase(state, ResolvePhase.SETTLING)
            moves = do_gravity(board)
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves)
            if not moves:
                return earned

    def _refill(self, board: Board) -> List[Position]:
        new_tiles = refill_top_row(board, world_random(self.world), get_palette(self.world).colors())
        if new_tiles:
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles)
        return new_tiles

    def _gravity_step(self, board: Board, state: ResolveState) -> None:
        self._set_phase(state, ResolvePhase.SETTLING)
        moves = do_gravity_step(board)
        if moves:
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves)
        self._set_phase(state, ResolvePhase.REFILLING)

    def _set_phase(self, state: ResolveState, phase: ResolvePhase) -> None:
        if state.phase is phase:
            return
        state.phase = phase
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=state.cascade_depth, phase=phase)
