from dataclasses import dataclass


@dataclass(slots=True)
class Score:
    """Cumulative points earned on the board entity. Never decreases."""
    value: int = 0

    def add(self, delta: int) -> int:
        if delta < 0:
            raise ValueError(f"Score delta must be non-negative, got {delta}")
        self.value += delta
        return self.value
