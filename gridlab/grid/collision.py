"""
Collision Resolver
==================

Axis-aligned overlap checks between grid rectangles and the downward row
probe used when a box returns to the grid.
"""

import logging
from typing import Iterable, List, Optional
from pydantic import BaseModel

from ..models.grid_models import GridRect

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100


class Placement(BaseModel):
    """Outcome of a resolve attempt."""
    resolved: bool
    rect: Optional[GridRect] = None
    attempts: int = 0


def overlaps(a: GridRect, b: GridRect) -> bool:
    """Open-interval overlap test; rectangles that only touch do not overlap."""
    return (
        a.col < b.col_end
        and a.col_end > b.col
        and a.row < b.row_end
        and a.row_end > b.row
    )


def find_collisions(candidate: GridRect, others: Iterable[GridRect]) -> List[GridRect]:
    """All rectangles in `others` that overlap `candidate`."""
    return [other for other in others if overlaps(candidate, other)]


def resolve(
    candidate: GridRect,
    others: Iterable[GridRect],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
) -> Placement:
    """
    Move `candidate` down one row at a time until it overlaps none of `others`.

    The stationary rectangles never move and columns never change. Gives up
    after `max_attempts` shifts and reports an unresolved placement.
    """
    obstacles = list(others)
    rect = candidate
    attempts = 0

    while any(overlaps(rect, other) for other in obstacles):
        if attempts >= max_attempts:
            logger.warning(
                f"[COLLISION] Unresolved placement for {candidate} after {attempts} attempts"
            )
            return Placement(resolved=False, attempts=attempts)
        rect = rect.shifted(1)
        attempts += 1

    if attempts:
        logger.debug(f"[COLLISION] Shifted {candidate} down {attempts} rows")
    return Placement(resolved=True, rect=rect, attempts=attempts)
