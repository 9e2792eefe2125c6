from __future__ import annotations

import random
from typing import Sequence

from esper import World

from tilemerge.components.modifier import TileModifier
from tilemerge.events.bus import EVENT_TICK, EventBus
from tilemerge.systems.grid_ops import place_tile
from tilemerge.world import create_world

MODIFIER_CODES = {
    "d": TileModifier.DOUBLER,
    "h": TileModifier.HALVER,
}


class FixedRandom(random.Random):
    """Random source that replays queued draws and picks the first candidate."""

    def __init__(self, draws: Sequence[float] = (), pick: int = 0) -> None:
        super().__init__(0)
        self._draws = list(draws)
        self._pick = pick

    def random(self) -> float:
        if self._draws:
            return self._draws.pop(0)
        return 0.99

    def choice(self, seq):
        return seq[min(self._pick, len(seq) - 1)]


def build_world(width: int = 4, height: int = 4, *, rng: random.Random | None = None) -> tuple[World, EventBus]:
    bus = EventBus()
    world = create_world(bus, width=width, height=height, rng=rng or random.Random(0))
    return world, bus


def place_rows(world: World, rows: Sequence[Sequence[object]]) -> dict[tuple[int, int], int]:
    """Place tiles from a row-major layout.

    Cells hold 0/None for empty, an int for a plain tile, or "d"/"h" for a value-2
    Doubler/Halver. Returns the created tile entities keyed by (x, y).
    """
    placed: dict[tuple[int, int], int] = {}
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            if not cell:
                continue
            if isinstance(cell, str):
                placed[(x, y)] = place_tile(world, x, y, 2, MODIFIER_CODES[cell])
            else:
                placed[(x, y)] = place_tile(world, x, y, cell)
    return placed


def drive_ticks(bus: EventBus, count: int = 10, dt: float = 0.05) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)
