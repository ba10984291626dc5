from dataclasses import dataclass


@dataclass(slots=True)
class AutoPlayer:
    """Marker component for the automatic player and its pacing."""

    decision_delay: float = 0.0
    reset_on_stalemate: bool = False
    moves_made: int = 0
