from __future__ import annotations

import logging
import random

from esper import World

from tilemerge.components.cell import Cell
from tilemerge.components.modifier import TileModifier
from tilemerge.constants import DOUBLER_CHANCE, HALVER_CHANCE, SPAWN_VALUE
from tilemerge.systems.grid_ops import place_tile, random_empty_cell

logger = logging.getLogger(__name__)


class SpawnPolicy:
    """Chooses the modifier and cell for each new tile.

    A single uniform draw decides the modifier: below ``doubler_chance`` gives a
    Doubler, below ``halver_chance`` a Halver, anything else a plain tile. The
    cell is picked uniformly from the empty cells with the same generator.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        value: int = SPAWN_VALUE,
        doubler_chance: float = DOUBLER_CHANCE,
        halver_chance: float = HALVER_CHANCE,
    ) -> None:
        if not 0.0 <= doubler_chance <= halver_chance <= 1.0:
            raise ValueError("Spawn thresholds must satisfy 0 <= doubler_chance <= halver_chance <= 1")
        self.rng = rng
        self.value = value
        self.doubler_chance = doubler_chance
        self.halver_chance = halver_chance

    def _rng(self, world: World | None = None) -> random.Random:
        if self.rng is not None:
            return self.rng
        candidate = getattr(world, "random", None)
        if candidate is not None:
            return candidate
        self.rng = random.Random()
        return self.rng

    def roll_modifier(self, world: World | None = None) -> TileModifier:
        roll = self._rng(world).random()
        if roll < self.doubler_chance:
            return TileModifier.DOUBLER
        if roll < self.halver_chance:
            return TileModifier.HALVER
        return TileModifier.NONE

    def spawn_tile(self, world: World) -> int:
        """Place one new tile; raises BoardFullError when no cell is free."""
        modifier = self.roll_modifier(world)
        cell_entity = random_empty_cell(world, self._rng(world))
        cell = world.component_for_entity(cell_entity, Cell)
        tile_entity = place_tile(world, cell.x, cell.y, self.value, modifier)
        logger.debug("Spawned tile %d (%d, %s) at (%d, %d)", tile_entity, self.value, modifier.value, cell.x, cell.y)
        return tile_entity
