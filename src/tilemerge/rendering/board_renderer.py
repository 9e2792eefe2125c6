from __future__ import annotations

from typing import TYPE_CHECKING

from tilemerge.components.modifier import TileModifier
from tilemerge.constants import DOUBLER_OUTLINE, EMPTY_CELL_COLOR, HALVER_OUTLINE, TILE_TIERS
from tilemerge.systems.grid_ops import board_snapshot

if TYPE_CHECKING:
    from tilemerge.systems.render import RenderSystem


MODIFIER_OUTLINES = {
    TileModifier.DOUBLER: DOUBLER_OUTLINE,
    TileModifier.HALVER: HALVER_OUTLINE,
}
MODIFIER_BADGES = {
    TileModifier.DOUBLER: "x2",
    TileModifier.HALVER: "/2",
}


class BoardRenderer:
    def __init__(self, render_system: RenderSystem, padding: int = 4):
        self._rs = render_system
        self._padding = padding

    def render(self, arcade, tile_size: int, board_left: float, board_bottom: float, rows: int, cols: int, headless: bool) -> None:
        rs = self._rs
        rs._last_tile_layout = {}
        draw_size = max(tile_size - self._padding, 4)

        def cell_origin(x: int, y: int) -> tuple[float, float]:
            # Grid row 0 is the top row; arcade's y axis grows upward.
            left = board_left + x * tile_size + self._padding / 2
            bottom = board_bottom + (rows - 1 - y) * tile_size + self._padding / 2
            return left, bottom

        if not headless:
            for y in range(rows):
                for x in range(cols):
                    left, bottom = cell_origin(x, y)
                    arcade.draw_lbwh_rectangle_filled(left, bottom, draw_size, draw_size, EMPTY_CELL_COLOR)

        for snap in board_snapshot(rs.world):
            left, bottom = cell_origin(snap.x, snap.y)
            background, text_color = TILE_TIERS[min(snap.tier, len(TILE_TIERS) - 1)]
            rs._last_tile_layout[(snap.x, snap.y)] = {
                "entity": snap.tile,
                "rect": (left, bottom, draw_size, draw_size),
                "value": snap.value,
                "modifier": snap.modifier,
            }
            if headless:
                continue
            arcade.draw_lbwh_rectangle_filled(left, bottom, draw_size, draw_size, background)
            outline = MODIFIER_OUTLINES.get(snap.modifier)
            if outline is not None:
                arcade.draw_lbwh_rectangle_outline(left, bottom, draw_size, draw_size, outline, 4)
            cx = left + draw_size / 2
            cy = bottom + draw_size / 2
            font_size = max(10, int(draw_size * (0.34 if snap.value < 1000 else 0.26)))
            arcade.draw_text(
                str(snap.value), cx, cy, text_color, font_size,
                anchor_x="center", anchor_y="center", bold=True,
            )
            badge = MODIFIER_BADGES.get(snap.modifier)
            if badge is not None:
                arcade.draw_text(
                    badge, left + draw_size - 6, bottom + draw_size - 6, outline, max(8, font_size // 2),
                    anchor_x="right", anchor_y="top",
                )
