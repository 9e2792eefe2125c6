from esper import World

from tilemerge.components.turn_state import TurnPhase
from tilemerge.constants import BOARD_COLOR, TILE_PADDING
from tilemerge.events.bus import EventBus, EVENT_GAME_OVER, EVENT_NEW_GAME_STARTED
from tilemerge.rendering.board_renderer import BoardRenderer
from tilemerge.systems.grid_ops import get_board
from tilemerge.systems.turn_state_utils import get_or_create_turn_state
from tilemerge.ui.layout import compute_board_geometry


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)
        self.event_bus.subscribe(EVENT_NEW_GAME_STARTED, self.on_new_game_started)
        self.game_over_shown = False
        self._last_tile_layout: dict[tuple[int, int], dict] = {}
        self._board_renderer = BoardRenderer(self, padding=TILE_PADDING)

    def on_game_over(self, sender, **kwargs):
        self.game_over_shown = True

    def on_new_game_started(self, sender, **kwargs):
        self.game_over_shown = False

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        # Headless safeguard: if no active Arcade window (unit tests), skip actual draw calls but still build layout cache.
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        board = get_board(self.world)
        tile_size, board_left, board_bottom = compute_board_geometry(
            self.window.width, self.window.height, board.width, board.height
        )
        if not headless:
            arcade.draw_lbwh_rectangle_filled(
                board_left, board_bottom, tile_size * board.width, tile_size * board.height, BOARD_COLOR
            )
        self._board_renderer.render(
            arcade, tile_size, board_left, board_bottom, board.height, board.width, headless
        )
        if headless:
            return
        state = get_or_create_turn_state(self.world)
        top = board_bottom + tile_size * board.height
        arcade.draw_text(
            f"Moves: {state.moves_made}", board_left, top + 16, arcade.color.WHITE, 18,
        )
        if self.game_over_shown or state.phase is TurnPhase.GAME_OVER:
            arcade.draw_text(
                "Game over - press R", self.window.width / 2, top + 16, arcade.color.GOLD, 18,
                anchor_x="center",
            )
