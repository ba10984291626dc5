from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere else.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# SWAPS
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c), reason=str
EVENT_TILE_SWAP_DO = "tile_swap_do"                # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_FINALIZE = "tile_swap_finalize"    # payload: src=(r,c), dst=(r,c)


# ============================================================================
# RESOLUTION & CASCADES
# ============================================================================
EVENT_MATCH_FOUND = "match_found"                  # payload: matches=[Match,...], positions=[(r,c),...], size=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], score_delta=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove,...]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, phase=ResolvePhase
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, score_delta=int
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str
EVENT_BOARD_RESPAWNED = "board_respawned"          # payload: positions=[(r,c),...]


# ============================================================================
# AUTO PLAY
# ============================================================================
EVENT_AUTO_MOVE_SELECTED = "auto_move_selected"    # payload: src=(r,c), dst=(r,c), match_count=int
EVENT_NO_MOVE_AVAILABLE = "no_move_available"      # payload: None
