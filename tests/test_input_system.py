from tilemerge.components.direction import Direction
from tilemerge.constants import KEY_A, KEY_DOWN, KEY_LEFT, KEY_R, KEY_RIGHT, KEY_UP, KEY_W
from tilemerge.events.bus import EventBus, EVENT_KEY_PRESS, EVENT_MOVE_REQUEST, EVENT_NEW_GAME_REQUEST
from tilemerge.systems.input import KeyInputSystem


def _bus_with_capture():
    bus = EventBus()
    moves = []
    new_games = []
    bus.subscribe(EVENT_MOVE_REQUEST, lambda s, **k: moves.append(k["direction"]))
    bus.subscribe(EVENT_NEW_GAME_REQUEST, lambda s, **k: new_games.append(k))
    KeyInputSystem(bus)
    return bus, moves, new_games


def test_arrow_and_wasd_keys_map_to_directions():
    bus, moves, _ = _bus_with_capture()
    for symbol in (KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_W, KEY_A):
        bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=0)
    assert moves == [
        Direction.UP,
        Direction.DOWN,
        Direction.LEFT,
        Direction.RIGHT,
        Direction.UP,
        Direction.LEFT,
    ]


def test_r_requests_new_game_and_unknown_keys_are_ignored():
    bus, moves, new_games = _bus_with_capture()
    bus.emit(EVENT_KEY_PRESS, symbol=KEY_R, modifiers=0)
    bus.emit(EVENT_KEY_PRESS, symbol=32, modifiers=0)
    bus.emit(EVENT_KEY_PRESS, modifiers=0)
    assert new_games == [{}]
    assert moves == []
