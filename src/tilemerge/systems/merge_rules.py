from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from esper import World

from tilemerge.components.cell import Cell
from tilemerge.components.modifier import TileModifier
from tilemerge.components.tile import Tile
from tilemerge.constants import MAX_TIER, MILESTONE_VALUE
from tilemerge.systems.grid_ops import ORTHOGONAL, Position, adjacent_cell, remove_tile

MERGE_DOUBLER = "doubler"
MERGE_HALVER = "halver"
MERGE_COMBINE = "combine"


@dataclass(slots=True)
class MergeOutcome:
    survivor: int
    consumed: int
    value: int
    kind: str
    position: Position
    # (tile, position) pairs cleared by a milestone merge.
    cascade: List[Tuple[int, Position]] = field(default_factory=list)


def can_merge(a: Tile, b: Tile) -> bool:
    if a.locked or b.locked:
        return False
    if a.special or b.special:
        return True
    return a.value == b.value


def merge_tiles(world: World, moving: int, stationary: int) -> MergeOutcome:
    """Merge moving into stationary. Caller must have checked can_merge.

    Modifier merges keep the survivor in its own cell and leave it unlocked, so it
    may merge again in the same pass. A plain merge always keeps the stationary
    tile, advances its tier and locks it for the rest of the turn.
    """
    a = world.component_for_entity(moving, Tile)
    b = world.component_for_entity(stationary, Tile)

    if a.modifier is TileModifier.DOUBLER:
        return _apply_modifier(world, survivor=stationary, consumed=moving, kind=MERGE_DOUBLER)
    if b.modifier is TileModifier.DOUBLER:
        return _apply_modifier(world, survivor=moving, consumed=stationary, kind=MERGE_DOUBLER)
    if a.modifier is TileModifier.HALVER:
        return _apply_modifier(world, survivor=stationary, consumed=moving, kind=MERGE_HALVER)
    if b.modifier is TileModifier.HALVER:
        return _apply_modifier(world, survivor=moving, consumed=stationary, kind=MERGE_HALVER)
    if a.value != b.value:
        raise ValueError(f"Tiles {moving} ({a.value}) and {stationary} ({b.value}) cannot merge")

    remove_tile(world, moving)
    b.value *= 2
    b.tier = min(b.tier + 1, MAX_TIER)
    b.modifier = TileModifier.NONE
    b.locked = True
    survivor_cell = world.component_for_entity(b.cell, Cell)
    outcome = MergeOutcome(
        survivor=stationary,
        consumed=moving,
        value=b.value,
        kind=MERGE_COMBINE,
        position=(survivor_cell.x, survivor_cell.y),
    )
    if b.value == MILESTONE_VALUE:
        outcome.cascade = destroy_neighbours(world, stationary)
    return outcome


def _apply_modifier(world: World, *, survivor: int, consumed: int, kind: str) -> MergeOutcome:
    remove_tile(world, consumed)
    tile = world.component_for_entity(survivor, Tile)
    if kind == MERGE_DOUBLER:
        tile.value *= 2
    else:
        tile.value = max(2, tile.value // 2)
    tile.modifier = TileModifier.NONE
    cell = world.component_for_entity(tile.cell, Cell)
    return MergeOutcome(
        survivor=survivor,
        consumed=consumed,
        value=tile.value,
        kind=kind,
        position=(cell.x, cell.y),
    )


def destroy_neighbours(world: World, tile_entity: int) -> List[Tuple[int, Position]]:
    """Remove every tile orthogonally adjacent to tile_entity, ignoring locks and values."""
    tile = world.component_for_entity(tile_entity, Tile)
    destroyed: List[Tuple[int, Position]] = []
    for direction in ORTHOGONAL:
        neighbour_cell = adjacent_cell(world, tile.cell, direction)
        if neighbour_cell is None:
            continue
        neighbour = world.component_for_entity(neighbour_cell, Cell).tile
        if neighbour is None:
            continue
        destroyed.append((neighbour, remove_tile(world, neighbour)))
    return destroyed
