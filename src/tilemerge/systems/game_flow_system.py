"""High-level coordinator for starting games and latching game over."""
from __future__ import annotations

import logging

from esper import World

from tilemerge.components.tile import Tile
from tilemerge.constants import STARTING_TILES
from tilemerge.events.bus import (
    EVENT_BOARD_CLEARED,
    EVENT_GAME_OVER,
    EVENT_NEW_GAME_REQUEST,
    EVENT_NEW_GAME_STARTED,
    EVENT_TILE_SPAWNED,
    EventBus,
)
from tilemerge.systems.grid_ops import clear_board, get_board, tile_count, tile_position
from tilemerge.systems.turn_system import TurnSystem

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Clears the board and deals the opening tiles for each new game."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        turn_system: TurnSystem,
        *,
        starting_tiles: int = STARTING_TILES,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.turn_system = turn_system
        self.starting_tiles = starting_tiles
        self.games_started = 0
        self.game_over = False
        self.final_moves: int | None = None

        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self._on_new_game_request)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_new_game_request(self, sender, **payload) -> None:
        self.start_new_game()

    def _on_game_over(self, sender, **payload) -> None:
        self.game_over = True
        self.final_moves = payload.get("moves")

    # ------------------------------------------------------------------
    # Flow
    # ------------------------------------------------------------------

    def start_new_game(self) -> list[int]:
        self.turn_system.reset()
        removed = clear_board(self.world)
        if removed:
            self.event_bus.emit(EVENT_BOARD_CLEARED)
        self.game_over = False
        self.final_moves = None

        capacity = get_board(self.world).capacity
        spawned: list[int] = []
        policy = self.turn_system.spawn_policy
        for _ in range(min(self.starting_tiles, capacity)):
            if tile_count(self.world) >= capacity:
                break
            tile_entity = policy.spawn_tile(self.world)
            tile = self.world.component_for_entity(tile_entity, Tile)
            self.event_bus.emit(
                EVENT_TILE_SPAWNED,
                tile=tile_entity,
                position=tile_position(self.world, tile_entity),
                value=tile.value,
                modifier=tile.modifier,
            )
            spawned.append(tile_entity)
        self.games_started += 1
        logger.info("New game %d started with %d tiles", self.games_started, len(spawned))
        self.event_bus.emit(EVENT_NEW_GAME_STARTED, tiles=spawned)
        return spawned
