"""Entry point for the tilemerge sliding-tile puzzle.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color
from tilemerge.world import create_world
from tilemerge.constants import WINDOW_WIDTH, WINDOW_HEIGHT
from tilemerge.events.bus import EVENT_TICK, EVENT_KEY_PRESS, EventBus
from tilemerge.systems.game_flow_system import GameFlowSystem
from tilemerge.systems.input import KeyInputSystem
from tilemerge.systems.render import RenderSystem
from tilemerge.systems.turn_system import TurnSystem

class TileMergeWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Tile Merge")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)

        # Input systems
        self.input_system = KeyInputSystem(self.event_bus)

        # Turn and flow systems
        self.turn_system = TurnSystem(self.world, self.event_bus)
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus, self.turn_system)

        # Interface systems
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        set_background_color(color.BLACK)
        self.game_flow_system.start_new_game()

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)

def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    window = TileMergeWindow()
    run()

if __name__ == "__main__":
    main()
