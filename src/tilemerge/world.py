import random

from esper import World

from tilemerge.components.board import Board
from tilemerge.components.turn_state import TurnState
from tilemerge.constants import GRID_HEIGHT, GRID_WIDTH
from tilemerge.events.bus import EventBus
from tilemerge.systems.grid_ops import build_cells


def create_world(
    event_bus: EventBus,
    *,
    width: int = GRID_WIDTH,
    height: int = GRID_HEIGHT,
    rng: random.Random | None = None,
) -> World:
    if width < 1 or height < 1:
        raise ValueError(f"Board must be at least 1x1, got {width}x{height}")
    world = World()
    setattr(world, "random", rng or random.Random())

    board = Board(width=width, height=height)
    world.create_entity(board)
    build_cells(world, board)

    # Register the shared turn state resource.
    world.create_entity(TurnState())
    return world
