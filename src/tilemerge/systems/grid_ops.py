from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple

from esper import World

from tilemerge.components.board import Board
from tilemerge.components.cell import Cell
from tilemerge.components.direction import Direction
from tilemerge.components.modifier import TileModifier
from tilemerge.components.tile import Tile
from tilemerge.constants import MAX_TIER

Position = Tuple[int, int]

ORTHOGONAL = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


class BoardFullError(RuntimeError):
    """Raised when an empty cell is requested from a board with none left."""


class BoardInvariantError(RuntimeError):
    """Raised when cell/tile links or tile counts are inconsistent."""


@dataclass(slots=True, frozen=True)
class TileSnapshot:
    tile: int
    x: int
    y: int
    value: int
    modifier: TileModifier
    locked: bool
    tier: int


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def build_cells(world: World, board: Board) -> None:
    """Create one Cell entity per grid position and index it on the board."""
    for y in range(board.height):
        for x in range(board.width):
            board.cells[(x, y)] = world.create_entity(Cell(x=x, y=y))


def cell_at(world: World, x: int, y: int) -> int | None:
    return get_board(world).cells.get((x, y))


def cell_position(world: World, cell_entity: int) -> Position:
    cell = world.component_for_entity(cell_entity, Cell)
    return cell.x, cell.y


def adjacent_cell(world: World, cell_entity: int, direction: Direction) -> int | None:
    cell = world.component_for_entity(cell_entity, Cell)
    return cell_at(world, cell.x + direction.dx, cell.y + direction.dy)


def occupant(world: World, cell_entity: int) -> int | None:
    return world.component_for_entity(cell_entity, Cell).tile


def tile_at(world: World, x: int, y: int) -> int | None:
    cell_entity = cell_at(world, x, y)
    if cell_entity is None:
        return None
    return occupant(world, cell_entity)


def tile_position(world: World, tile_entity: int) -> Position:
    tile = world.component_for_entity(tile_entity, Tile)
    return cell_position(world, tile.cell)


def live_tiles(world: World) -> List[int]:
    return [entity for entity, _ in world.get_component(Tile)]


def tile_count(world: World) -> int:
    return len(world.get_component(Tile))


def is_full(world: World) -> bool:
    return tile_count(world) >= get_board(world).capacity


def empty_cells(world: World) -> List[int]:
    """Empty cell entities in row-major order."""
    board = get_board(world)
    cells: List[int] = []
    for y in range(board.height):
        for x in range(board.width):
            cell_entity = board.cells[(x, y)]
            if world.component_for_entity(cell_entity, Cell).tile is None:
                cells.append(cell_entity)
    return cells


def random_empty_cell(world: World, rng: random.Random | None = None) -> int:
    candidates = empty_cells(world)
    if not candidates:
        raise BoardFullError("No empty cell available")
    chooser = rng or getattr(world, "random", None) or random.Random()
    return chooser.choice(candidates)


def place_tile(
    world: World,
    x: int,
    y: int,
    value: int,
    modifier: TileModifier = TileModifier.NONE,
    *,
    locked: bool = False,
    tier: int | None = None,
) -> int:
    """Create a tile entity at (x, y). The cell must exist and be empty."""
    board = get_board(world)
    if not board.contains(x, y):
        raise ValueError(f"Cell ({x}, {y}) is outside a {board.width}x{board.height} board")
    cell_entity = board.cells[(x, y)]
    cell = world.component_for_entity(cell_entity, Cell)
    if cell.tile is not None:
        raise ValueError(f"Cell ({x}, {y}) is already occupied by tile {cell.tile}")
    if tier is None:
        tier = tier_for_value(value)
    tile_entity = world.create_entity(
        Tile(value=value, cell=cell_entity, modifier=modifier, locked=locked, tier=tier)
    )
    cell.tile = tile_entity
    return tile_entity


def move_tile(world: World, tile_entity: int, target_cell: int) -> None:
    """Transfer ownership of tile_entity to target_cell (which must be empty)."""
    tile = world.component_for_entity(tile_entity, Tile)
    target = world.component_for_entity(target_cell, Cell)
    if target.tile is not None:
        raise BoardInvariantError(
            f"Tile {tile_entity} cannot move into ({target.x}, {target.y}) held by tile {target.tile}"
        )
    source = world.component_for_entity(tile.cell, Cell)
    source.tile = None
    target.tile = tile_entity
    tile.cell = target_cell


def remove_tile(world: World, tile_entity: int) -> Position:
    """Detach tile_entity from its cell and delete it; returns the freed position."""
    tile = world.component_for_entity(tile_entity, Tile)
    cell = world.component_for_entity(tile.cell, Cell)
    if cell.tile == tile_entity:
        cell.tile = None
    world.delete_entity(tile_entity, immediate=True)
    return cell.x, cell.y


def clear_board(world: World) -> List[int]:
    removed = live_tiles(world)
    for tile_entity in removed:
        remove_tile(world, tile_entity)
    return removed


def unlock_all(world: World) -> None:
    for _, tile in world.get_component(Tile):
        tile.locked = False


def tier_for_value(value: int) -> int:
    """Tier index of a power-of-two value (2 -> 0), clamped to the defined tiers."""
    tier = max(0, int(value).bit_length() - 2)
    return min(tier, MAX_TIER)


def board_snapshot(world: World) -> List[TileSnapshot]:
    """Read-only view of all live tiles, ordered by row then column."""
    snapshot: List[TileSnapshot] = []
    for entity, tile in world.get_component(Tile):
        cell = world.component_for_entity(tile.cell, Cell)
        snapshot.append(
            TileSnapshot(
                tile=entity,
                x=cell.x,
                y=cell.y,
                value=tile.value,
                modifier=tile.modifier,
                locked=tile.locked,
                tier=tile.tier,
            )
        )
    snapshot.sort(key=lambda snap: (snap.y, snap.x))
    return snapshot


def value_grid(world: World) -> List[List[int]]:
    """Row-major grid of tile values with 0 for empty cells."""
    board = get_board(world)
    grid = [[0] * board.width for _ in range(board.height)]
    for snap in board_snapshot(world):
        grid[snap.y][snap.x] = snap.value
    return grid


def check_board_invariants(world: World) -> None:
    board = get_board(world)
    tiles = list(world.get_component(Tile))
    if len(tiles) > board.capacity:
        raise BoardInvariantError(f"{len(tiles)} tiles exceed board capacity {board.capacity}")
    claimed: dict[int, int] = {}
    for entity, tile in tiles:
        if tile.cell in claimed:
            raise BoardInvariantError(
                f"Tiles {claimed[tile.cell]} and {entity} both claim cell {tile.cell}"
            )
        claimed[tile.cell] = entity
        try:
            cell = world.component_for_entity(tile.cell, Cell)
        except KeyError:
            raise BoardInvariantError(f"Tile {entity} references missing cell {tile.cell}") from None
        if cell.tile != entity:
            raise BoardInvariantError(
                f"Tile {entity} claims ({cell.x}, {cell.y}) but the cell holds {cell.tile}"
            )
    for cell_entity in board.cells.values():
        cell = world.component_for_entity(cell_entity, Cell)
        if cell.tile is not None and claimed.get(cell_entity) != cell.tile:
            raise BoardInvariantError(
                f"Cell ({cell.x}, {cell.y}) references dangling tile {cell.tile}"
            )
