from __future__ import annotations

import logging

from esper import World

from tilemerge.components.direction import Direction
from tilemerge.components.tile import Tile
from tilemerge.components.turn_state import TurnPhase, TurnState
from tilemerge.constants import SETTLE_DELAY
from tilemerge.events.bus import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_MOVE_IGNORED,
    EVENT_MOVE_REQUEST,
    EVENT_MOVE_RESOLVED,
    EVENT_SETTLE_COMPLETED,
    EVENT_SETTLE_STARTED,
    EVENT_TICK,
    EVENT_TILE_DESTROYED,
    EVENT_TILE_MERGED,
    EVENT_TILE_MOVED,
    EVENT_TILE_SPAWNED,
    EVENT_TURN_PHASE_CHANGED,
)
from tilemerge.systems.grid_ops import check_board_invariants, get_board, tile_count, tile_position, unlock_all
from tilemerge.systems.move_resolver import MoveResult, resolve_move
from tilemerge.systems.spawn_policy import SpawnPolicy
from tilemerge.systems.terminal import is_game_over
from tilemerge.systems.turn_state_utils import get_or_create_turn_state
from tilemerge.utils.settle_timer import SettleTimer

logger = logging.getLogger(__name__)


class TurnSystem:
    """Runs one move at a time through IDLE -> RESOLVING -> SETTLING -> IDLE.

    Flow:
      - A direction arrives (submit_move or EVENT_MOVE_REQUEST) and is accepted only in IDLE.
      - The resolver runs synchronously. A move that changes nothing returns straight to IDLE.
      - Otherwise the turn enters SETTLING and a single continuation is scheduled on the
        settle timer, which advances on EVENT_TICK. Input stays blocked until it fires.
      - The continuation unlocks every tile, spawns one tile if the board has room and runs
        the terminal check. A terminal board latches GAME_OVER and emits EVENT_GAME_OVER once.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        spawn_policy: SpawnPolicy | None = None,
        settle_delay: float = SETTLE_DELAY,
        timer: SettleTimer | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.spawn_policy = spawn_policy or SpawnPolicy(rng=getattr(world, "random", None))
        self.settle_delay = settle_delay
        self.timer = timer or SettleTimer()
        self.event_bus.subscribe(EVENT_MOVE_REQUEST, self.on_move_request)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        get_or_create_turn_state(self.world)

    @property
    def state(self) -> TurnState:
        return get_or_create_turn_state(self.world)

    @property
    def phase(self) -> TurnPhase:
        return self.state.phase

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_move_request(self, sender, **kwargs):
        direction = kwargs.get("direction")
        if not isinstance(direction, Direction):
            return
        self.submit_move(direction)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get("dt", 1 / 60)
        self.timer.advance(dt)

    # ------------------------------------------------------------------
    # Move lifecycle
    # ------------------------------------------------------------------

    def submit_move(self, direction: Direction) -> bool:
        """Resolve a move; returns True if the board changed and a settle began."""
        state = self.state
        if not state.accepting_input:
            logger.debug("Ignoring %s while %s", direction.name, state.phase.name)
            self.event_bus.emit(EVENT_MOVE_IGNORED, direction=direction, reason=state.phase.name.lower())
            return False

        state.direction = direction
        self._set_phase(TurnPhase.RESOLVING)
        result = resolve_move(self.world, direction)
        check_board_invariants(self.world)
        state.changed = result.changed
        self._emit_result(result)

        if not result.changed:
            self._set_phase(TurnPhase.IDLE)
            return False

        state.moves_made += 1
        self._set_phase(TurnPhase.SETTLING)
        self.event_bus.emit(EVENT_SETTLE_STARTED, delay=self.settle_delay)
        self.timer.schedule(self.settle_delay, self._on_settled)
        return True

    def _emit_result(self, result: MoveResult) -> None:
        for move in result.moves:
            self.event_bus.emit(EVENT_TILE_MOVED, tile=move.tile, source=move.source, target=move.target)
        for merge in result.merges:
            self.event_bus.emit(
                EVENT_TILE_MERGED,
                survivor=merge.survivor,
                consumed=merge.consumed,
                value=merge.value,
                kind=merge.kind,
            )
            for tile_entity, position in merge.cascade:
                self.event_bus.emit(EVENT_TILE_DESTROYED, tile=tile_entity, position=position, reason="milestone")
        self.event_bus.emit(
            EVENT_MOVE_RESOLVED,
            direction=result.direction,
            changed=result.changed,
            moves=result.moves,
            merges=result.merges,
        )

    def _on_settled(self) -> None:
        unlock_all(self.world)
        if tile_count(self.world) < get_board(self.world).capacity:
            tile_entity = self.spawn_policy.spawn_tile(self.world)
            tile = self.world.component_for_entity(tile_entity, Tile)
            self.event_bus.emit(
                EVENT_TILE_SPAWNED,
                tile=tile_entity,
                position=tile_position(self.world, tile_entity),
                value=tile.value,
                modifier=tile.modifier,
            )
        self.event_bus.emit(EVENT_SETTLE_COMPLETED)
        if is_game_over(self.world):
            state = self.state
            logger.info("Game over after %d moves", state.moves_made)
            self._set_phase(TurnPhase.GAME_OVER)
            self.event_bus.emit(EVENT_GAME_OVER, moves=state.moves_made)
            return
        self._set_phase(TurnPhase.IDLE)

    def reset(self) -> None:
        """Drop any pending settle and return to IDLE with fresh counters."""
        self.timer.reset()
        state = self.state
        state.direction = None
        state.changed = False
        state.moves_made = 0
        self._set_phase(TurnPhase.IDLE)

    def _set_phase(self, phase: TurnPhase) -> None:
        state = self.state
        previous = state.phase
        if previous is phase:
            return
        state.phase = phase
        self.event_bus.emit(EVENT_TURN_PHASE_CHANGED, previous=previous, phase=phase)
