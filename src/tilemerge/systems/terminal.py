from esper import World

from tilemerge.components.cell import Cell
from tilemerge.components.tile import Tile
from tilemerge.systems.grid_ops import ORTHOGONAL, adjacent_cell, is_full
from tilemerge.systems.merge_rules import can_merge


def has_available_merge(world: World) -> bool:
    """Return True if any tile can merge with an orthogonal neighbour."""
    for _, tile in world.get_component(Tile):
        for direction in ORTHOGONAL:
            neighbour_cell = adjacent_cell(world, tile.cell, direction)
            if neighbour_cell is None:
                continue
            neighbour = world.component_for_entity(neighbour_cell, Cell).tile
            if neighbour is None:
                continue
            if can_merge(tile, world.component_for_entity(neighbour, Tile)):
                return True
    return False


def is_game_over(world: World) -> bool:
    """A board is terminal only when it is full and no neighbouring pair can merge."""
    if not is_full(world):
        return False
    return not has_available_merge(world)
