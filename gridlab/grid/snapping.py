"""
Snapping & Clamping
===================

Turns any pixel rectangle into a valid grid rectangle, and bounds free-mode
resizes in pixel terms.
"""

from typing import Tuple

from ..models.grid_models import GridMath, GridRect, PixelRect
from .geometry import pixel_to_grid

DEFAULT_MAX_SPAN = 5


def clamp_to_grid(rect: GridRect, columns: int, max_span: int = DEFAULT_MAX_SPAN) -> GridRect:
    """
    Clamp a grid rectangle so it satisfies the box invariants.

    A column past the last one collapses to a single cell in the last column.
    Rows are only bounded below; the grid grows downwards to fit content.
    """
    col = max(1, rect.col)
    row = max(1, rect.row)
    col_span = min(max(1, rect.col_span), max_span)
    row_span = min(max(1, rect.row_span), max_span)

    if col + col_span - 1 > columns:
        col_span = max(1, columns - col + 1)

    if col > columns:
        col = columns
        col_span = 1

    return GridRect(col=col, row=row, col_span=col_span, row_span=row_span)


def snap(rect: PixelRect, grid_math: GridMath, max_span: int = DEFAULT_MAX_SPAN) -> GridRect:
    """Snap a pixel rectangle to the nearest valid grid rectangle."""
    return clamp_to_grid(pixel_to_grid(rect, grid_math), grid_math.columns, max_span)


def clamp_pixel_size(
    width: float,
    height: float,
    grid_math: GridMath,
    max_span: int = DEFAULT_MAX_SPAN
) -> Tuple[float, float]:
    """Bound a free-mode size to between one and `max_span` cells per axis."""
    col_span = min(max_span, grid_math.columns)
    max_width = col_span * grid_math.cell_width + (col_span - 1) * grid_math.gap
    max_height = max_span * grid_math.row_height + (max_span - 1) * grid_math.gap
    return (
        min(max(width, grid_math.cell_width), max_width),
        min(max(height, grid_math.row_height), max_height),
    )
