"""
Unit tests for the cairo grid preview.
"""

import pytest
from smm.grid import ScreenGrid
from smm.preview import GridPreviewRenderer, GridPreviewStyle


def pixel(surface, x, y):
    """(R, G, B, A) of an opaque ARGB32 pixel."""
    data = surface.get_data()
    offset = y * surface.get_stride() + x * 4
    b, g, r, a = data[offset : offset + 4]
    return (r, g, b, a)


@pytest.fixture
def renderer():
    return GridPreviewRenderer(GridPreviewStyle())


@pytest.mark.unit
class TestGridPreviewRenderer:
    """Test rendering grids to images."""

    def test_size_follows_grid_shape(self, renderer, laptop_and_hdmi):
        grid = ScreenGrid.from_monitors(laptop_and_hdmi)
        grid.grow()

        # 4 columns, 3 rows of 108px cells with 8px padding
        assert renderer.size(grid) == (4 * 116 + 8, 3 * 116 + 8)

        surface = renderer.render(grid)
        assert (surface.get_width(), surface.get_height()) == renderer.size(grid)

    def test_cell_origin(self, renderer):
        assert renderer.cell_origin(0, 0) == (8, 8)
        assert renderer.cell_origin(1, 2) == (8 + 2 * 116, 8 + 116)

    def test_occupied_cell_filled(self, renderer, laptop):
        grid = ScreenGrid.from_monitors([laptop])
        grid.grow()

        surface = renderer.render(grid)

        x, y = renderer.cell_origin(1, 1)
        assert pixel(surface, x + 3, y + 3) == renderer.style.cell_color
        assert pixel(surface, 0, 0) == renderer.style.background_color

    def test_empty_cell_not_filled(self, renderer, laptop):
        grid = ScreenGrid.from_monitors([laptop])
        grid.grow()

        surface = renderer.render(grid)

        x, y = renderer.cell_origin(0, 0)
        center = renderer.style.cell_size // 2
        assert pixel(surface, x + center, y + center) == renderer.style.background_color

    def test_write_png(self, renderer, two_by_two, tmp_path):
        path = tmp_path / "grid.png"

        renderer.write_png(ScreenGrid.from_monitors(two_by_two), path)

        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
