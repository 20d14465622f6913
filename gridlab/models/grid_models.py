"""
Grid Models for Grid Labs
=========================

Grid rectangles, pixel rectangles, grid measurements and the two box variants.
"""

from typing import Annotated, Literal, Union
from pydantic import BaseModel, ConfigDict, Field


class GridRect(BaseModel):
    """Position and size in grid units (1-based)."""
    model_config = ConfigDict(frozen=True)

    col: int
    row: int
    col_span: int
    row_span: int

    @property
    def col_end(self) -> int:
        """Exclusive end column."""
        return self.col + self.col_span

    @property
    def row_end(self) -> int:
        """Exclusive end row."""
        return self.row + self.row_span

    def shifted(self, rows: int) -> "GridRect":
        """Same rectangle moved down by `rows` rows."""
        return GridRect(col=self.col, row=self.row + rows, col_span=self.col_span, row_span=self.row_span)


class PixelRect(BaseModel):
    """Absolute position in pixels relative to the grid origin."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float


class GridMath(BaseModel):
    """Measurements derived from the container width. Never persisted."""
    model_config = ConfigDict(frozen=True)

    cell_width: float
    row_height: float
    gap: float
    columns: int
    grid_width: float

    @property
    def col_pitch(self) -> float:
        """Horizontal distance between the starts of adjacent columns."""
        return self.cell_width + self.gap

    @property
    def row_pitch(self) -> float:
        """Vertical distance between the starts of adjacent rows."""
        return self.row_height + self.gap


class GridBox(BaseModel):
    """A box anchored to grid cells."""
    model_config = ConfigDict(frozen=True)

    mode: Literal["grid"] = "grid"
    id: str
    col: int = Field(ge=1)
    row: int = Field(ge=1)
    col_span: int = Field(ge=1)
    row_span: int = Field(ge=1)

    @property
    def rect(self) -> GridRect:
        return GridRect(col=self.col, row=self.row, col_span=self.col_span, row_span=self.row_span)

    def moved_to(self, rect: GridRect) -> "GridBox":
        return GridBox(id=self.id, col=rect.col, row=rect.row, col_span=rect.col_span, row_span=rect.row_span)


class FreeBox(BaseModel):
    """
    A selected box positioned in pixels.

    `col/row/col_span/row_span` mirror the snapped absolute position for
    display only; `origin` is the last committed grid position, kept as
    the fallback when the box cannot be placed on settle.
    """
    model_config = ConfigDict(frozen=True)

    mode: Literal["free"] = "free"
    id: str
    col: int = Field(ge=1)
    row: int = Field(ge=1)
    col_span: int = Field(ge=1)
    row_span: int = Field(ge=1)
    absolute_position: PixelRect
    origin: GridRect

    @property
    def rect(self) -> GridRect:
        return GridRect(col=self.col, row=self.row, col_span=self.col_span, row_span=self.row_span)


Box = Annotated[Union[GridBox, FreeBox], Field(discriminator="mode")]
