"""
Layout Models for Grid Labs
===========================

History snapshots, the persisted JSON shape, and render output.
"""

from typing import FrozenSet, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from .grid_models import Box, GridMath, GridRect, PixelRect

EXPORT_VERSION = "2.0"


class HistoryEntry(BaseModel):
    """Immutable snapshot of layout and selection."""
    model_config = ConfigDict(frozen=True)

    boxes: Tuple[Box, ...] = ()
    selection: FrozenSet[str] = frozenset()


class BoxRecord(BaseModel):
    """One box in the exported JSON. Numbers must be real integers."""
    model_config = ConfigDict(strict=True, populate_by_name=True)

    id: Optional[str] = None
    col: int = Field(ge=1)
    row: int = Field(ge=1)
    col_span: int = Field(alias="colSpan", ge=1)
    row_span: int = Field(alias="rowSpan", ge=1)


class LayoutExport(BaseModel):
    """Canonical persisted layout: a `boxes` array with a version tag."""
    model_config = ConfigDict(populate_by_name=True)

    boxes: List[BoxRecord] = Field(default_factory=list)
    version: str = EXPORT_VERSION


class RenderedBox(BaseModel):
    """What the rendering layer needs to draw one box."""
    id: str
    mode: str
    selected: bool
    rect: PixelRect
    grid: GridRect
    gesture: Optional[str] = None


class LayoutRender(BaseModel):
    """A full frame for the rendering layer."""
    grid_math: GridMath
    rows: int
    width: float
    height: float
    boxes: List[RenderedBox] = Field(default_factory=list)
