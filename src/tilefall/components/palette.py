from dataclasses import dataclass, field
from typing import Iterable, List

from tilefall.components.token import Color


@dataclass(slots=True)
class Palette:
    """Colors that random fill and refill may spawn.

    Registered on its own entity by ``create_world``; order is preserved and
    duplicates dropped.
    """
    spawnable: List[Color] = field(default_factory=lambda: list(Color))

    def __post_init__(self) -> None:
        self.set_spawnable(self.spawnable)

    def set_spawnable(self, colors: Iterable[Color]) -> None:
        seen: set[Color] = set()
        filtered: List[Color] = []
        for color in colors:
            if color not in seen:
                filtered.append(color)
                seen.add(color)
        if not filtered:
            raise ValueError("Palette needs at least one spawnable color")
        self.spawnable = filtered

    def colors(self) -> List[Color]:
        return list(self.spawnable)
