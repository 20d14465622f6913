"""
Shared test fixtures for Grid Labs tests.

Provides grid configuration, layout state and session fixtures
for testing the grid engine, reducer and HTTP routes.
"""

import pytest
from itertools import combinations
from pathlib import Path
from typing import List

from gridlab.config import GridConfig
from gridlab.canvas.layout_state import DEMO_BOXES, LayoutState
from gridlab.canvas.state_manager import StateManager
from gridlab.grid.collision import overlaps
from gridlab.grid.geometry import compute_grid_math
from gridlab.models.grid_models import GridBox, GridMath


@pytest.fixture
def config(tmp_path: Path) -> GridConfig:
    """Default 10-column grid with sessions stored under tmp_path."""
    return GridConfig(sessions_dir=tmp_path / "sessions")


@pytest.fixture
def grid_math(config: GridConfig) -> GridMath:
    """Grid math for the default 896px container (cell width 75.2px)."""
    return compute_grid_math(896, config)


@pytest.fixture
def empty_state(config: GridConfig) -> LayoutState:
    return LayoutState(config=config)


@pytest.fixture
def demo_state(config: GridConfig) -> LayoutState:
    """
    The four demo boxes:

        box-1 col 1 row 1 (2x1)    box-2 col 3 row 1 (3x2)
        box-3 col 6 row 1 (3x1)    box-4 col 1 row 2 (2x2)
    """
    return LayoutState(config=config, boxes=DEMO_BOXES)


@pytest.fixture
def state_manager(config: GridConfig) -> StateManager:
    return StateManager(config=config)


def anchored_overlaps(state: LayoutState) -> List[tuple]:
    """Pairs of grid-anchored boxes that overlap."""
    anchored = [b for b in state.boxes if isinstance(b, GridBox)]
    return [
        (a.id, b.id) for a, b in combinations(anchored, 2)
        if overlaps(a.rect, b.rect)
    ]
