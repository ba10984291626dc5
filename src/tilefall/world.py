import random
from typing import Iterable

from esper import World

from tilefall.components.palette import Palette
from tilefall.components.token import Color


def create_world(
    *,
    colors: Iterable[Color] | None = None,
    rng: random.Random | None = None,
) -> World:
    """Create the ECS world with its shared random source and spawn palette.

    The board itself is created by ``BoardSystem``.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    world.create_entity(Palette(list(colors) if colors is not None else list(Color)))
    return world
