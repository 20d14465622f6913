"""
Grid Geometry
=============

Pure conversions between grid units and pixel rectangles.

Formulas:
- x = (col - 1) * (cellWidth + gap)
- y = (row - 1) * (rowHeight + gap)
- width = colSpan * cellWidth + (colSpan - 1) * gap
- height = rowSpan * rowHeight + (rowSpan - 1) * gap

The inverse divides by the column/row pitch and rounds half up, so the two
directions are inverses of each other whenever the gap is narrower than a cell.
"""

import math
from typing import Iterable, Tuple

from ..config import GridConfig
from ..models.grid_models import GridMath, GridRect, PixelRect

MIN_VISIBLE_ROWS = 10
SPARE_ROWS = 2


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def compute_grid_math(container_width: float, config: GridConfig) -> GridMath:
    """Derive cell width from the container width."""
    total_gaps = (config.columns - 1) * config.gap
    cell_width = (container_width - total_gaps) / config.columns
    return GridMath(
        cell_width=cell_width,
        row_height=config.row_height,
        gap=config.gap,
        columns=config.columns,
        grid_width=container_width,
    )


def grid_to_pixel(rect: GridRect, grid_math: GridMath) -> PixelRect:
    """Convert a grid rectangle to its pixel rectangle."""
    return PixelRect(
        x=(rect.col - 1) * grid_math.col_pitch,
        y=(rect.row - 1) * grid_math.row_pitch,
        width=rect.col_span * grid_math.cell_width + (rect.col_span - 1) * grid_math.gap,
        height=rect.row_span * grid_math.row_height + (rect.row_span - 1) * grid_math.gap,
    )


def pixel_to_grid(rect: PixelRect, grid_math: GridMath) -> GridRect:
    """
    Convert a pixel rectangle to grid units without clamping.

    Only the spans are floored at 1; column and row may come out below 1
    or past the last column. Use `snapping.snap` for a valid result.
    """
    return GridRect(
        col=round_half_up(rect.x / grid_math.col_pitch) + 1,
        row=round_half_up(rect.y / grid_math.row_pitch) + 1,
        col_span=max(1, round_half_up(rect.width / grid_math.col_pitch)),
        row_span=max(1, round_half_up(rect.height / grid_math.row_pitch)),
    )


def is_within_bounds(rect: GridRect, columns: int) -> bool:
    """Check a grid rectangle against the grid's horizontal bounds."""
    return (
        rect.col >= 1
        and rect.row >= 1
        and rect.col_span > 0
        and rect.row_span > 0
        and rect.col + rect.col_span - 1 <= columns
    )


def max_occupied_row(rects: Iterable[GridRect]) -> int:
    """Last row covered by any rectangle, 0 when there are none."""
    return max((r.row + r.row_span - 1 for r in rects), default=0)


def visible_rows(rects: Iterable[GridRect]) -> int:
    """Rows the rendering layer should draw: content plus spare rows."""
    return max(max_occupied_row(rects), MIN_VISIBLE_ROWS) + SPARE_ROWS


def grid_dimensions(grid_math: GridMath, rows: int) -> Tuple[float, float]:
    """Total pixel (width, height) of a grid with `rows` rows."""
    width = grid_math.cell_width * grid_math.columns + (grid_math.columns - 1) * grid_math.gap
    height = grid_math.row_height * rows + max(rows - 1, 0) * grid_math.gap
    return width, height
