from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from esper import World

from tilemerge.components.cell import Cell
from tilemerge.components.direction import Direction
from tilemerge.components.tile import Tile
from tilemerge.systems.grid_ops import Position, adjacent_cell, get_board, move_tile
from tilemerge.systems.merge_rules import MergeOutcome, can_merge, merge_tiles


@dataclass(slots=True)
class TileMove:
    tile: int
    source: Position
    target: Position


@dataclass(slots=True)
class MoveResult:
    direction: Direction
    moves: List[TileMove] = field(default_factory=list)
    merges: List[MergeOutcome] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.moves or self.merges)


def traversal_order(direction: Direction, width: int, height: int) -> List[Position]:
    """Cell coordinates in the order a move in `direction` must resolve them.

    The scan starts on the line next to the wall the tiles travel toward and walks
    backward, so a tile is always resolved after every tile in front of it. The
    wall line is skipped: its tiles have nowhere to go.
    """
    if direction is Direction.RIGHT:
        start_x, step_x, start_y, step_y = width - 2, -1, 0, 1
    elif direction is Direction.LEFT:
        start_x, step_x, start_y, step_y = 1, 1, 0, 1
    elif direction is Direction.DOWN:
        start_x, step_x, start_y, step_y = 0, 1, height - 2, -1
    else:
        start_x, step_x, start_y, step_y = 0, 1, 1, 1
    order: List[Position] = []
    x = start_x
    while 0 <= x < width:
        y = start_y
        while 0 <= y < height:
            order.append((x, y))
            y += step_y
        x += step_x
    return order


def resolve_move(world: World, direction: Direction) -> MoveResult:
    """Slide and merge every tile once in `direction`.

    Coordinates are fixed up front; occupancy is read live, so a cell visited later
    in the pass sees the board as earlier slides and merges left it.
    """
    board = get_board(world)
    result = MoveResult(direction=direction)
    for x, y in traversal_order(direction, board.width, board.height):
        cell_entity = board.cells[(x, y)]
        tile_entity = world.component_for_entity(cell_entity, Cell).tile
        if tile_entity is None:
            continue
        _resolve_tile(world, tile_entity, direction, result)
    return result


def _resolve_tile(world: World, tile_entity: int, direction: Direction, result: MoveResult) -> None:
    tile = world.component_for_entity(tile_entity, Tile)
    source_cell = world.component_for_entity(tile.cell, Cell)
    source = (source_cell.x, source_cell.y)
    destination: int | None = None
    adjacent = adjacent_cell(world, tile.cell, direction)

    while adjacent is not None:
        blocker = world.component_for_entity(adjacent, Cell).tile
        if blocker is not None:
            if can_merge(tile, world.component_for_entity(blocker, Tile)):
                result.merges.append(merge_tiles(world, tile_entity, blocker))
                return
            break
        destination = adjacent
        adjacent = adjacent_cell(world, adjacent, direction)

    if destination is not None:
        move_tile(world, tile_entity, destination)
        target_cell = world.component_for_entity(destination, Cell)
        result.moves.append(TileMove(tile=tile_entity, source=source, target=(target_cell.x, target_cell.y)))
