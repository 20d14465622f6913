"""
Selection / Transition Manager
==============================

Moves boxes between the two positioning modes:

- GridAnchored -> Free when a box enters the selection: its grid rectangle
  is converted to an absolute pixel rectangle.
- Free -> GridAnchored when it leaves the selection: the pixel rectangle is
  snapped, resolved against the grid-anchored boxes and committed.

While free, drag and resize only touch the pixel rectangle. Nothing here
mutates state; every function returns new boxes.
"""

import logging
from typing import Iterable, List, Set, Tuple, Union

from ..config import GridConfig
from ..models.grid_models import FreeBox, GridBox, GridMath, GridRect, PixelRect
from ..grid.collision import Placement, overlaps, resolve
from ..grid.geometry import grid_to_pixel, max_occupied_row
from ..grid.snapping import clamp_pixel_size, snap

logger = logging.getLogger(__name__)


def apply_selection(selection: Iterable[str], box_id: str, multi: bool) -> Set[str]:
    """
    New selection after clicking `box_id`.

    With the multi-select modifier the id is toggled and the rest kept;
    a plain click selects exactly that id.
    """
    if not multi:
        return {box_id}
    result = set(selection)
    if box_id in result:
        result.discard(box_id)
    else:
        result.add(box_id)
    return result


def to_free(box: Union[GridBox, FreeBox], grid_math: GridMath) -> FreeBox:
    """Attach an absolute position to a grid-anchored box. Free boxes pass through."""
    if isinstance(box, FreeBox):
        return box
    rect = box.rect
    return FreeBox(
        id=box.id,
        col=box.col,
        row=box.row,
        col_span=box.col_span,
        row_span=box.row_span,
        absolute_position=grid_to_pixel(rect, grid_math),
        origin=rect,
    )


def _with_position(box: FreeBox, position: PixelRect, grid_math: GridMath, max_span: int) -> FreeBox:
    display = snap(position, grid_math, max_span)
    return box.model_copy(update={
        "absolute_position": position,
        "col": display.col,
        "row": display.row,
        "col_span": display.col_span,
        "row_span": display.row_span,
    })


def move_free(box: FreeBox, x: float, y: float, grid_math: GridMath, max_span: int) -> FreeBox:
    """Drag frame: move the pixel rectangle, keeping its size."""
    current = box.absolute_position
    position = PixelRect(x=x, y=y, width=current.width, height=current.height)
    return _with_position(box, position, grid_math, max_span)


def resize_free(
    box: FreeBox,
    x: float,
    y: float,
    width: float,
    height: float,
    grid_math: GridMath,
    max_span: int
) -> FreeBox:
    """Resize frame: size is bounded to [1, max_span] cells right away."""
    width, height = clamp_pixel_size(width, height, grid_math, max_span)
    position = PixelRect(x=x, y=y, width=width, height=height)
    return _with_position(box, position, grid_math, max_span)


def resnap_free(box: FreeBox, grid_math: GridMath, max_span: int) -> FreeBox:
    """Refresh the display grid rect against new grid math; the pixel rect is kept."""
    return _with_position(box, box.absolute_position, grid_math, max_span)


def nudge_free(box: FreeBox, dx: float, dy: float, grid_math: GridMath, max_span: int) -> FreeBox:
    """Keyboard nudge; the position never goes above or left of the origin."""
    current = box.absolute_position
    position = PixelRect(
        x=max(0.0, current.x + dx),
        y=max(0.0, current.y + dy),
        width=current.width,
        height=current.height,
    )
    return _with_position(box, position, grid_math, max_span)


def settle(
    box: FreeBox,
    anchored: List[GridRect],
    grid_math: GridMath,
    config: GridConfig
) -> Tuple[GridBox, Placement]:
    """
    Return a free box to the grid.

    `anchored` holds the rectangles of every other grid-anchored box. When the
    snapped position cannot be resolved the box goes back to where it was last
    committed; if that spot has been taken meanwhile, it is resolved from
    there, and as a last resort placed below all content.
    """
    candidate = snap(box.absolute_position, grid_math, config.span_limit)
    placement = resolve(candidate, anchored, config.max_resolve_attempts)

    if placement.resolved:
        rect = placement.rect
    else:
        logger.warning(f"[TRANSITION] Unresolved placement for {box.id}, keeping previous position")
        rect = box.origin
        if any(overlaps(rect, other) for other in anchored):
            fallback = resolve(rect, anchored, config.max_resolve_attempts)
            if fallback.resolved:
                rect = fallback.rect
            else:
                rect = GridRect(
                    col=rect.col,
                    row=max_occupied_row(anchored) + 1,
                    col_span=rect.col_span,
                    row_span=rect.row_span,
                )

    settled = GridBox(id=box.id, col=rect.col, row=rect.row, col_span=rect.col_span, row_span=rect.row_span)
    return settled, placement
