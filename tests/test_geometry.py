"""
Tests for grid <-> pixel geometry.
"""

import pytest

from gridlab.config import GridConfig
from gridlab.grid.geometry import (
    compute_grid_math,
    grid_dimensions,
    grid_to_pixel,
    is_within_bounds,
    max_occupied_row,
    pixel_to_grid,
    round_half_up,
    visible_rows,
)
from gridlab.models.grid_models import GridRect, PixelRect


class TestGridMath:
    """Test derived grid measurements."""

    def test_cell_width_from_container(self, config):
        grid_math = compute_grid_math(896, config)
        assert grid_math.cell_width == pytest.approx(75.2)
        assert grid_math.row_height == 60
        assert grid_math.gap == 16
        assert grid_math.columns == 10

    def test_recomputed_for_new_width(self, config):
        narrow = compute_grid_math(500, config)
        wide = compute_grid_math(1200, config)
        assert narrow.cell_width == pytest.approx(35.6)
        assert wide.cell_width == pytest.approx(105.6)

    def test_custom_column_count(self):
        grid_math = compute_grid_math(1000, GridConfig(columns=12, gap=10))
        assert grid_math.cell_width == pytest.approx((1000 - 110) / 12)


class TestGridToPixel:
    """Test grid -> pixel conversion."""

    def test_origin_box(self, grid_math):
        rect = grid_to_pixel(GridRect(col=1, row=1, col_span=2, row_span=1), grid_math)
        assert rect.x == 0
        assert rect.y == 0
        assert rect.width == pytest.approx(2 * 75.2 + 16)
        assert rect.height == 60

    def test_offset_box(self, grid_math):
        rect = grid_to_pixel(GridRect(col=3, row=2, col_span=3, row_span=2), grid_math)
        assert rect.x == pytest.approx(2 * 91.2)
        assert rect.y == pytest.approx(76)
        assert rect.width == pytest.approx(3 * 75.2 + 2 * 16)
        assert rect.height == pytest.approx(2 * 60 + 16)


class TestPixelToGrid:
    """Test pixel -> grid conversion."""

    def test_exact_cell(self, grid_math):
        rect = pixel_to_grid(PixelRect(x=182.4, y=76, width=166.4, height=60), grid_math)
        assert rect == GridRect(col=3, row=2, col_span=2, row_span=1)

    def test_rounds_to_nearest_cell(self, grid_math):
        # 0.6 of a column pitch to the right rounds up to the next column
        rect = pixel_to_grid(PixelRect(x=0.6 * 91.2, y=0.4 * 76, width=80, height=60), grid_math)
        assert rect.col == 2
        assert rect.row == 1

    def test_spans_never_below_one(self, grid_math):
        rect = pixel_to_grid(PixelRect(x=0, y=0, width=1, height=1), grid_math)
        assert rect.col_span == 1
        assert rect.row_span == 1

    def test_does_not_clamp_position(self, grid_math):
        rect = pixel_to_grid(PixelRect(x=-200, y=-200, width=80, height=60), grid_math)
        assert rect.col == -1
        assert rect.row == -2


class TestRoundTrip:
    """pixel_to_grid(grid_to_pixel(r)) == r for every valid rectangle."""

    @pytest.mark.parametrize("container_width", [500, 896, 1200, 1920])
    def test_round_trip(self, config, container_width):
        grid_math = compute_grid_math(container_width, config)
        for col in range(1, config.columns + 1):
            for col_span in range(1, min(config.max_span, config.columns - col + 1) + 1):
                for row in (1, 2, 7, 40):
                    for row_span in range(1, config.max_span + 1):
                        rect = GridRect(col=col, row=row, col_span=col_span, row_span=row_span)
                        assert pixel_to_grid(grid_to_pixel(rect, grid_math), grid_math) == rect

    def test_deterministic(self, grid_math):
        rect = GridRect(col=4, row=9, col_span=3, row_span=2)
        assert grid_to_pixel(rect, grid_math) == grid_to_pixel(rect, grid_math)


class TestHelpers:
    """Test rounding and bounds helpers."""

    @pytest.mark.parametrize("value,expected", [
        (2.5, 3), (2.49, 2), (-2.5, -2), (-2.51, -3), (0.0, 0),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_is_within_bounds(self):
        assert is_within_bounds(GridRect(col=9, row=1, col_span=2, row_span=1), 10)
        assert not is_within_bounds(GridRect(col=9, row=1, col_span=3, row_span=1), 10)
        assert not is_within_bounds(GridRect(col=0, row=1, col_span=1, row_span=1), 10)

    def test_max_occupied_row(self):
        rects = [GridRect(col=1, row=1, col_span=1, row_span=1), GridRect(col=2, row=2, col_span=1, row_span=2)]
        assert max_occupied_row(rects) == 3
        assert max_occupied_row([]) == 0

    def test_visible_rows_has_minimum_and_slack(self):
        assert visible_rows([]) == 12
        assert visible_rows([GridRect(col=1, row=15, col_span=1, row_span=1)]) == 17

    def test_grid_dimensions(self, grid_math):
        width, height = grid_dimensions(grid_math, 12)
        assert width == pytest.approx(896)
        assert height == pytest.approx(12 * 60 + 11 * 16)
