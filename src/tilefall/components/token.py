"""Cell contents: a colored tile, a tile being removed, or nothing."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Color(Enum):
    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"


@dataclass(frozen=True, slots=True)
class Normal:
    """An active tile of a given color."""
    color: Color


@dataclass(frozen=True, slots=True)
class Deleting:
    """A tile marked for removal this pass.

    Keeps its color so the removal frame can still be drawn.
    """
    color: Color


@dataclass(frozen=True, slots=True)
class Empty:
    """A vacant cell."""


EMPTY = Empty()

Token = Union[Normal, Deleting, Empty]


def color_of(token: Token | None) -> Optional[Color]:
    """Return the token's color, or None for empty/missing cells."""
    if isinstance(token, (Normal, Deleting)):
        return token.color
    return None


def is_colored(token: Token | None) -> bool:
    return isinstance(token, (Normal, Deleting))
