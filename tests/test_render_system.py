import pytest

from tilemerge.components.modifier import TileModifier
from tilemerge.systems.render import RenderSystem
from tilemerge.ui.layout import compute_board_geometry
from tests.helpers import build_world, place_rows


class DummyWindow:
    def __init__(self, width=600, height=700):
        self.width = width
        self.height = height


def test_board_geometry_fits_window():
    tile_size, start_x, start_y = compute_board_geometry(600, 700, 4, 4)
    assert tile_size * 4 <= 600
    assert start_x == (600 - tile_size * 4) / 2
    assert start_y > 0


def test_headless_render_builds_tile_layout():
    pytest.importorskip("arcade")
    world, bus = build_world()
    place_rows(world, [[2, 0, 0, 0], [0, 0, 0, "d"]])
    render = RenderSystem(world, bus, DummyWindow())
    render.process()
    layout = render._last_tile_layout
    assert set(layout) == {(0, 0), (3, 1)}
    assert layout[(3, 1)]["modifier"] is TileModifier.DOUBLER
    # Row 0 is drawn above row 1.
    assert layout[(0, 0)]["rect"][1] > layout[(3, 1)]["rect"][1]
