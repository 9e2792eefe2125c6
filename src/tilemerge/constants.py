GRID_WIDTH = 4
GRID_HEIGHT = 4

# Plain merge reaching this value clears the four orthogonal neighbours of the survivor.
MILESTONE_VALUE = 2048

SPAWN_VALUE = 2
STARTING_TILES = 2
# Cumulative thresholds against a single uniform draw in [0, 1).
DOUBLER_CHANCE = 0.05
HALVER_CHANCE = 0.10

# Seconds during which new moves are ignored after a move that changed the board.
SETTLE_DELAY = 0.1

# Presentation tiers, indexed by Tile.tier (value 2 -> tier 0). Background, text colour.
TILE_TIERS = [
    ((238, 228, 218), (119, 110, 101)),  # 2
    ((237, 224, 200), (119, 110, 101)),  # 4
    ((242, 177, 121), (249, 246, 242)),  # 8
    ((245, 149, 99), (249, 246, 242)),   # 16
    ((246, 124, 95), (249, 246, 242)),   # 32
    ((246, 94, 59), (249, 246, 242)),    # 64
    ((237, 207, 114), (249, 246, 242)),  # 128
    ((237, 204, 97), (249, 246, 242)),   # 256
    ((237, 200, 80), (249, 246, 242)),   # 512
    ((237, 197, 63), (249, 246, 242)),   # 1024
    ((237, 194, 46), (249, 246, 242)),   # 2048
]
MAX_TIER = len(TILE_TIERS) - 1

# Outline colours for modifier tiles.
DOUBLER_OUTLINE = (80, 170, 80)
HALVER_OUTLINE = (180, 60, 60)
EMPTY_CELL_COLOR = (205, 193, 180)
BOARD_COLOR = (187, 173, 160)

# Arcade (pyglet) key symbols.
KEY_UP = 65362
KEY_DOWN = 65364
KEY_LEFT = 65361
KEY_RIGHT = 65363
KEY_W = 119
KEY_A = 97
KEY_S = 115
KEY_D = 100
KEY_R = 114

WINDOW_WIDTH = 600
WINDOW_HEIGHT = 700
TILE_PADDING = 10
BOTTOM_MARGIN = 20
# Board maximum footprint relative to window.
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.80
