"""
Command Models for Grid Labs
============================

Gestures and toolbar actions as explicit messages for the layout reducer.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union
from pydantic import BaseModel, Field


class Direction(str, Enum):
    """Arrow-key nudge direction."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class AddBox(BaseModel):
    type: Literal["add_box"] = "add_box"


class Delete(BaseModel):
    type: Literal["delete"] = "delete"
    box_id: str


class DeleteSelected(BaseModel):
    type: Literal["delete_selected"] = "delete_selected"


class ClearAll(BaseModel):
    type: Literal["clear_all"] = "clear_all"


class Select(BaseModel):
    """Click on a box; `multi` is the multi-select modifier (Shift)."""
    type: Literal["select"] = "select"
    box_id: str
    multi: bool = False


class Deselect(BaseModel):
    """Drop one id from the selection, or all of them when `box_id` is None."""
    type: Literal["deselect"] = "deselect"
    box_id: Optional[str] = None


class BeginDrag(BaseModel):
    type: Literal["begin_drag"] = "begin_drag"
    box_id: str


class UpdateDrag(BaseModel):
    type: Literal["update_drag"] = "update_drag"
    box_id: str
    x: float
    y: float


class EndDrag(BaseModel):
    type: Literal["end_drag"] = "end_drag"
    box_id: str
    x: float
    y: float


class BeginResize(BaseModel):
    type: Literal["begin_resize"] = "begin_resize"
    box_id: str


class UpdateResize(BaseModel):
    type: Literal["update_resize"] = "update_resize"
    box_id: str
    x: float
    y: float
    width: float
    height: float


class EndResize(BaseModel):
    type: Literal["end_resize"] = "end_resize"
    box_id: str
    x: float
    y: float
    width: float
    height: float


class Nudge(BaseModel):
    """Arrow key: half a cell, or a whole cell when `coarse` (Shift held)."""
    type: Literal["nudge"] = "nudge"
    direction: Direction
    coarse: bool = False


class Undo(BaseModel):
    type: Literal["undo"] = "undo"


class Redo(BaseModel):
    type: Literal["redo"] = "redo"


class ImportLayout(BaseModel):
    type: Literal["import_layout"] = "import_layout"
    payload: Any


class SetContainerWidth(BaseModel):
    type: Literal["set_container_width"] = "set_container_width"
    width: float = Field(gt=0)


Command = Annotated[
    Union[
        AddBox, Delete, DeleteSelected, ClearAll, Select, Deselect,
        BeginDrag, UpdateDrag, EndDrag, BeginResize, UpdateResize, EndResize,
        Nudge, Undo, Redo, ImportLayout, SetContainerWidth,
    ],
    Field(discriminator="type"),
]


class CommandResult(BaseModel):
    """Outcome of dispatching one command."""
    command: str
    applied: bool
    committed: bool = False
    box_id: Optional[str] = None
    error: Optional[str] = None
