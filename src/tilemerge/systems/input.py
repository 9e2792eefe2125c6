from tilemerge.components.direction import Direction
from tilemerge.constants import (
    KEY_A,
    KEY_D,
    KEY_DOWN,
    KEY_LEFT,
    KEY_R,
    KEY_RIGHT,
    KEY_S,
    KEY_UP,
    KEY_W,
)
from tilemerge.events.bus import (
    EventBus,
    EVENT_KEY_PRESS,
    EVENT_MOVE_REQUEST,
    EVENT_NEW_GAME_REQUEST,
)

KEY_DIRECTIONS = {
    KEY_UP: Direction.UP,
    KEY_W: Direction.UP,
    KEY_DOWN: Direction.DOWN,
    KEY_S: Direction.DOWN,
    KEY_LEFT: Direction.LEFT,
    KEY_A: Direction.LEFT,
    KEY_RIGHT: Direction.RIGHT,
    KEY_D: Direction.RIGHT,
}


class KeyInputSystem:
    """Translates raw key presses into move and new-game requests."""

    def __init__(self, event_bus: EventBus, key_map: dict[int, Direction] | None = None):
        self.event_bus = event_bus
        self.key_map = dict(key_map) if key_map is not None else dict(KEY_DIRECTIONS)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol is None:
            return
        if symbol == KEY_R:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)
            return
        direction = self.key_map.get(symbol)
        if direction is None:
            return
        self.event_bus.emit(EVENT_MOVE_REQUEST, direction=direction)
