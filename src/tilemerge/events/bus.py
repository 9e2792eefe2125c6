from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"  # payload: dt=float (seconds)


# ============================================================================
# INPUT
# ============================================================================
EVENT_KEY_PRESS = "key_press"                # payload: symbol=int, modifiers=int
EVENT_MOVE_REQUEST = "move_request"          # payload: direction=Direction
EVENT_MOVE_IGNORED = "move_ignored"          # payload: direction=Direction, reason=str


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_MOVE_RESOLVED = "move_resolved"        # payload: direction=Direction, changed=bool, moves=list[TileMove], merges=list[MergeOutcome]
EVENT_TILE_MOVED = "tile_moved"              # payload: tile=int, source=(x,y), target=(x,y)
EVENT_TILE_MERGED = "tile_merged"            # payload: survivor=int, consumed=int, value=int, kind=str
EVENT_TILE_DESTROYED = "tile_destroyed"      # payload: tile=int, position=(x,y), reason=str
EVENT_TILE_SPAWNED = "tile_spawned"          # payload: tile=int, position=(x,y), value=int, modifier=TileModifier
EVENT_BOARD_CLEARED = "board_cleared"        # payload: none


# ============================================================================
# TURN LIFECYCLE
# ============================================================================
EVENT_TURN_PHASE_CHANGED = "turn_phase_changed"  # payload: previous=TurnPhase, phase=TurnPhase
EVENT_SETTLE_STARTED = "settle_started"          # payload: delay=float
EVENT_SETTLE_COMPLETED = "settle_completed"      # payload: none


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_NEW_GAME_REQUEST = "new_game_request"      # payload: none
EVENT_NEW_GAME_STARTED = "new_game_started"      # payload: tiles=list[int]
EVENT_GAME_OVER = "game_over"                    # payload: moves=int
