"""
Layout Reducer
==============

Single entry point that applies command messages to a LayoutState.
"""

import logging
from typing import Callable, Dict

from ..models.command_models import (
    AddBox, BeginDrag, BeginResize, ClearAll, Command, CommandResult, Delete,
    DeleteSelected, Deselect, EndDrag, EndResize, ImportLayout, Nudge, Redo,
    Select, SetContainerWidth, Undo, UpdateDrag, UpdateResize
)
from ..services.layout_codec import LayoutImportError
from .layout_state import LayoutState

logger = logging.getLogger(__name__)


def _add_box(state: LayoutState, cmd: AddBox) -> CommandResult:
    box = state.add_box()
    return CommandResult(command=cmd.type, applied=True, committed=True, box_id=box.id)


def _delete(state: LayoutState, cmd: Delete) -> CommandResult:
    applied = state.delete_box(cmd.box_id)
    return CommandResult(command=cmd.type, applied=applied, committed=applied, box_id=cmd.box_id)


def _delete_selected(state: LayoutState, cmd: DeleteSelected) -> CommandResult:
    applied = state.delete_selected() > 0
    return CommandResult(command=cmd.type, applied=applied, committed=applied)


def _clear_all(state: LayoutState, cmd: ClearAll) -> CommandResult:
    applied = state.clear_all()
    return CommandResult(command=cmd.type, applied=applied, committed=applied)


def _select(state: LayoutState, cmd: Select) -> CommandResult:
    before = state.history.current
    applied = state.select(cmd.box_id, cmd.multi)
    return CommandResult(
        command=cmd.type, applied=applied,
        committed=state.history.current is not before, box_id=cmd.box_id
    )


def _deselect(state: LayoutState, cmd: Deselect) -> CommandResult:
    before = state.history.current
    applied = state.deselect(cmd.box_id)
    return CommandResult(
        command=cmd.type, applied=applied,
        committed=state.history.current is not before, box_id=cmd.box_id
    )


def _begin_drag(state: LayoutState, cmd: BeginDrag) -> CommandResult:
    return CommandResult(command=cmd.type, applied=state.begin_drag(cmd.box_id), box_id=cmd.box_id)


def _update_drag(state: LayoutState, cmd: UpdateDrag) -> CommandResult:
    return CommandResult(command=cmd.type, applied=state.update_drag(cmd.box_id, cmd.x, cmd.y), box_id=cmd.box_id)


def _end_drag(state: LayoutState, cmd: EndDrag) -> CommandResult:
    return CommandResult(command=cmd.type, applied=state.end_drag(cmd.box_id, cmd.x, cmd.y), box_id=cmd.box_id)


def _begin_resize(state: LayoutState, cmd: BeginResize) -> CommandResult:
    return CommandResult(command=cmd.type, applied=state.begin_resize(cmd.box_id), box_id=cmd.box_id)


def _update_resize(state: LayoutState, cmd: UpdateResize) -> CommandResult:
    applied = state.update_resize(cmd.box_id, cmd.x, cmd.y, cmd.width, cmd.height)
    return CommandResult(command=cmd.type, applied=applied, box_id=cmd.box_id)


def _end_resize(state: LayoutState, cmd: EndResize) -> CommandResult:
    applied = state.end_resize(cmd.box_id, cmd.x, cmd.y, cmd.width, cmd.height)
    return CommandResult(command=cmd.type, applied=applied, box_id=cmd.box_id)


def _nudge(state: LayoutState, cmd: Nudge) -> CommandResult:
    return CommandResult(command=cmd.type, applied=state.nudge(cmd.direction, cmd.coarse) > 0)


def _undo(state: LayoutState, cmd: Undo) -> CommandResult:
    return CommandResult(command=cmd.type, applied=state.undo())


def _redo(state: LayoutState, cmd: Redo) -> CommandResult:
    return CommandResult(command=cmd.type, applied=state.redo())


def _import_layout(state: LayoutState, cmd: ImportLayout) -> CommandResult:
    try:
        state.import_layout(cmd.payload)
    except LayoutImportError as e:
        logger.warning(f"[REDUCER] Import rejected: {e}")
        return CommandResult(command=cmd.type, applied=False, error=str(e))
    return CommandResult(command=cmd.type, applied=True, committed=True)


def _set_container_width(state: LayoutState, cmd: SetContainerWidth) -> CommandResult:
    return CommandResult(command=cmd.type, applied=state.set_container_width(cmd.width))


HANDLERS: Dict[type, Callable[[LayoutState, Command], CommandResult]] = {
    AddBox: _add_box,
    Delete: _delete,
    DeleteSelected: _delete_selected,
    ClearAll: _clear_all,
    Select: _select,
    Deselect: _deselect,
    BeginDrag: _begin_drag,
    UpdateDrag: _update_drag,
    EndDrag: _end_drag,
    BeginResize: _begin_resize,
    UpdateResize: _update_resize,
    EndResize: _end_resize,
    Nudge: _nudge,
    Undo: _undo,
    Redo: _redo,
    ImportLayout: _import_layout,
    SetContainerWidth: _set_container_width,
}


def dispatch(state: LayoutState, command: Command) -> CommandResult:
    """Apply one command to `state` and report what happened."""
    handler = HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unknown command: {type(command).__name__}")
    result = handler(state, command)
    if not result.applied:
        logger.debug(f"[REDUCER] {result.command} was a no-op")
    return result
