from __future__ import annotations

import logging
from typing import Optional

from esper import World

from tilefall.ai.move_evaluator import NO_MOVE, Move, best_move_with_count
from tilefall.components.auto_player import AutoPlayer
from tilefall.constants import AUTO_PLAYER_DECISION_DELAY
from tilefall.events.bus import (
    EventBus,
    EVENT_AUTO_MOVE_SELECTED,
    EVENT_NO_MOVE_AVAILABLE,
    EVENT_TICK,
    EVENT_TILE_SWAP_REQUEST,
)
from tilefall.systems.board import BoardSystem
from tilefall.systems.board_ops import get_board

logger = logging.getLogger(__name__)


class AutoPlayerSystem:
    """Plays the board on its own using the one-ply move evaluator.

    Decisions are paced by tick time only; the chosen move never depends on it.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        board_system: Optional[BoardSystem] = None,
        *,
        decision_delay: float = AUTO_PLAYER_DECISION_DELAY,
        reset_on_stalemate: bool = False,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self.agent_entity = world.create_entity(
            AutoPlayer(decision_delay=decision_delay, reset_on_stalemate=reset_on_stalemate)
        )
        self.delay_remaining = decision_delay
        self.enabled = True
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    @property
    def agent(self) -> AutoPlayer:
        return self.world.component_for_entity(self.agent_entity, AutoPlayer)

    def on_tick(self, sender, **payload) -> None:
        if not self.enabled:
            return
        dt = payload.get("dt", 0.0) or 0.0
        self.delay_remaining -= dt
        if self.delay_remaining > 0:
            return
        self.delay_remaining = self.agent.decision_delay
        self.take_turn()

    def take_turn(self) -> Move | None:
        """Submit the best available swap; returns None when there is nothing to play."""
        move, match_count = best_move_with_count(get_board(self.world))
        if move == NO_MOVE:
            logger.debug("No beneficial move available")
            self.event_bus.emit(EVENT_NO_MOVE_AVAILABLE)
            if self.agent.reset_on_stalemate and self.board_system is not None:
                self.board_system.respawn()
            return None
        logger.debug("Auto player picked %s -> %s (%d matches)", move.src, move.dst, match_count)
        self.agent.moves_made += 1
        self.event_bus.emit(EVENT_AUTO_MOVE_SELECTED, src=move.src, dst=move.dst, match_count=match_count)
        self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=move.src, dst=move.dst)
        return move
