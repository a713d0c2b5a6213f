"""
Scene Preview Rendering

Draws the windows of a scene with Cairo and writes a PNG snapshot.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Tuple
import math
import cairo

from .layouts.cell_grid import CellGrid
from .geometry import Area

if TYPE_CHECKING:
    from .objects import Window


class PreviewRenderer:
    """Renders windows as scaled rectangles, optionally over the expose grid."""

    def __init__(
        self,
        width: int,
        height: int,
        background_color: Tuple[int, int, int, int] = (180, 180, 180, 255),
        border_color: Tuple[int, int, int, int] = (0, 0, 0, 255),
        window_color: Tuple[int, int, int, int] = (94, 129, 172, 255),
        border_width: float = 1.0,
        corner_radius: float = 20.0,
    ):
        self.width = width
        self.height = height
        self.background_color = background_color
        self.border_color = border_color
        self.window_color = window_color
        self.border_width = border_width
        self.corner_radius = corner_radius

    def render(
        self, windows: List["Window"], path: str, show_grid: bool = False
    ) -> str:
        """Render windows to a PNG file and return its path."""
        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, self.width, self.height)
        ctx = cairo.Context(surface)
        self.draw(ctx, windows, show_grid)
        surface.flush()
        surface.write_to_png(path)
        return path

    def draw(self, ctx: cairo.Context, windows: List["Window"], show_grid: bool = False):
        """Draw background, windows in list order, then the grid overlay."""
        self._set_cairo_color(ctx, self.background_color)
        ctx.rectangle(0, 0, self.width, self.height)
        ctx.fill()

        for window in windows:
            self._draw_window(ctx, window)

        if show_grid and windows:
            self._draw_grid(ctx, len(windows))

    def _draw_window(self, ctx: cairo.Context, window: "Window"):
        position = window.position
        width, height = window.scaled_size()
        if width <= 0 or height <= 0:
            return

        radius = min(self.corner_radius * window.scale.x, width / 2, height / 2)
        self._rounded_rectangle(ctx, position.x, position.y, width, height, radius)
        self._set_cairo_color(ctx, window.color or self.window_color)
        ctx.fill_preserve()
        self._set_cairo_color(ctx, self.border_color)
        ctx.set_line_width(self.border_width)
        ctx.stroke()

        label = window.title or str(window.object_id)
        ctx.select_font_face(
            "sans-serif", cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_NORMAL
        )
        ctx.set_font_size(max(8.0, 60.0 * window.scale.x))
        text_extents = ctx.text_extents(label)
        ctx.move_to(
            position.x + (width - text_extents.width) / 2,
            position.y + (height + text_extents.height) / 2,
        )
        ctx.show_text(label)

    def _draw_grid(self, ctx: cairo.Context, count: int):
        """Outline the expose cells for ``count`` windows."""
        grid = CellGrid(count, Area(0, 0, self.width, self.height))
        self._set_cairo_color(ctx, self.border_color)
        ctx.set_line_width(2)
        for row in range(grid.rows):
            for col in range(grid.cols):
                x, y = grid.cell_origin(row, col)
                ctx.rectangle(x, y, grid.cell_width, grid.cell_height)
        ctx.stroke()

    def _rounded_rectangle(
        self, ctx: cairo.Context, x: float, y: float, width: float, height: float, radius: float
    ):
        ctx.new_sub_path()
        ctx.arc(x + width - radius, y + radius, radius, -math.pi / 2, 0)
        ctx.arc(x + width - radius, y + height - radius, radius, 0, math.pi / 2)
        ctx.arc(x + radius, y + height - radius, radius, math.pi / 2, math.pi)
        ctx.arc(x + radius, y + radius, radius, math.pi, 3 * math.pi / 2)
        ctx.close_path()

    def _set_cairo_color(self, ctx: cairo.Context, color: Tuple[int, int, int, int]):
        """Set Cairo color from RGBA tuple (0-255 values)."""
        ctx.set_source_rgba(
            color[0] / 255.0, color[1] / 255.0, color[2] / 255.0, color[3] / 255.0
        )
