"""
Grid Preview Rendering with Cairo

Draws a screen grid as a picture of square cells: occupied cells carry the
output name and size, empty cells are drawn as drop targets.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import cairo

from .grid import ScreenGrid
from .protocol import Monitor


@dataclass
class GridPreviewStyle:
    """Styling configuration for grid previews."""

    cell_size: int = 108
    padding: int = 8
    background_color: Tuple[int, int, int, int] = (46, 52, 64, 255)
    cell_color: Tuple[int, int, int, int] = (94, 129, 172, 255)
    empty_color: Tuple[int, int, int, int] = (59, 66, 82, 255)
    text_color: Tuple[int, int, int, int] = (216, 222, 233, 255)
    font_family: str = "sans-serif"
    font_size: int = 11


class GridPreviewRenderer:
    """Renders a screen grid to an image surface."""

    def __init__(self, style: GridPreviewStyle):
        self.style = style

    def size(self, grid: ScreenGrid) -> Tuple[int, int]:
        """Image size in pixels for a grid."""
        step = self.style.cell_size + self.style.padding
        return (
            grid.cols * step + self.style.padding,
            grid.rows * step + self.style.padding,
        )

    def cell_origin(self, row_idx: int, col_idx: int) -> Tuple[int, int]:
        """Top-left pixel of a cell."""
        step = self.style.cell_size + self.style.padding
        return (
            self.style.padding + col_idx * step,
            self.style.padding + row_idx * step,
        )

    def render(self, grid: ScreenGrid) -> cairo.ImageSurface:
        """Render the grid.

        Args:
            grid: Grid to draw

        Returns:
            ARGB32 image surface
        """
        width, height = self.size(grid)
        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
        ctx = cairo.Context(surface)

        self._set_color(ctx, self.style.background_color)
        ctx.rectangle(0, 0, width, height)
        ctx.fill()

        ctx.select_font_face(
            self.style.font_family, cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_NORMAL
        )
        ctx.set_font_size(self.style.font_size)

        for row_idx, row in enumerate(grid.cells):
            for col_idx, monitor in enumerate(row):
                x, y = self.cell_origin(row_idx, col_idx)
                if monitor is None:
                    self._render_empty_cell(ctx, x, y)
                else:
                    self._render_monitor_cell(ctx, x, y, monitor)

        surface.flush()
        return surface

    def write_png(self, grid: ScreenGrid, path: str):
        """Render the grid and save it as a PNG file."""
        self.render(grid).write_to_png(str(path))

    def _render_empty_cell(self, ctx: cairo.Context, x: int, y: int):
        """Draw an outlined drop target."""
        size = self.style.cell_size
        self._set_color(ctx, self.style.empty_color)
        ctx.set_line_width(2)
        ctx.set_dash([6, 4])
        ctx.rectangle(x + 1, y + 1, size - 2, size - 2)
        ctx.stroke()
        ctx.set_dash([])

    def _render_monitor_cell(self, ctx: cairo.Context, x: int, y: int, monitor: Monitor):
        """Draw a filled cell labelled with name and size."""
        size = self.style.cell_size
        self._set_color(ctx, self.style.cell_color)
        ctx.rectangle(x, y, size, size)
        ctx.fill()

        self._set_color(ctx, self.style.text_color)
        lines = [monitor.name, f"{monitor.width}x{monitor.height}"]
        line_height = self.style.font_size + 4
        top = y + (size - line_height * len(lines)) / 2
        for i, text in enumerate(lines):
            text = self._fit_text(ctx, text, size - 8)
            extents = ctx.text_extents(text)
            ctx.move_to(
                x + (size - extents.width) / 2 - extents.x_bearing,
                top + (i + 1) * line_height - 4,
            )
            ctx.show_text(text)

    def _fit_text(self, ctx: cairo.Context, text: str, max_width: int) -> str:
        """Truncate text with an ellipsis until it fits max_width."""
        if ctx.text_extents(text).width <= max_width:
            return text
        while len(text) > 1 and ctx.text_extents(text + "…").width > max_width:
            text = text[:-1]
        return text + "…"

    def _set_color(self, ctx: cairo.Context, color: Tuple[int, int, int, int]):
        """Set Cairo color from RGBA tuple.

        Args:
            ctx: Cairo context
            color: (R, G, B, A) tuple with values 0-255
        """
        r, g, b, a = color
        ctx.set_source_rgba(r / 255.0, g / 255.0, b / 255.0, a / 255.0)
