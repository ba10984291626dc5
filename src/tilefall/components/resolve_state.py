from dataclasses import dataclass
from enum import Enum, auto


class ResolvePhase(Enum):
    """States of the cascade state machine."""
    SCANNING = auto()
    CLEARING = auto()
    SETTLING = auto()
    REFILLING = auto()
    STABLE = auto()


@dataclass(slots=True)
class ResolveState:
    """Tracks where the board is in the cascade cycle."""

    phase: ResolvePhase = ResolvePhase.STABLE
    cascade_active: bool = False
    cascade_depth: int = 0
