"""
Box Routes
==========

API routes for box management and gestures.
"""

from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..canvas.state_manager import StateManager
from ..models.command_models import AddBox, Command, CommandResult, Delete, DeleteSelected, Deselect, Select
from .layout_routes import get_state_manager, run_command

router = APIRouter(prefix="/api/box", tags=["boxes"])


class SelectRequest(BaseModel):
    """Click on a box."""
    multi: bool = False


class CommandRequest(BaseModel):
    """Wrapper for a single gesture command."""
    command: Command


@router.post("/{session_id}")
async def add_box(session_id: str, manager: StateManager = Depends(get_state_manager)) -> CommandResult:
    """Add a box below all existing content."""
    return run_command(manager, session_id, AddBox())


@router.delete("/{session_id}")
async def delete_selected(session_id: str, manager: StateManager = Depends(get_state_manager)) -> CommandResult:
    """Delete every selected box."""
    return run_command(manager, session_id, DeleteSelected())


@router.post("/{session_id}/deselect")
async def deselect_all(session_id: str, manager: StateManager = Depends(get_state_manager)) -> CommandResult:
    """Deselect everything, settling free boxes onto the grid."""
    return run_command(manager, session_id, Deselect())


@router.post("/{session_id}/commands")
async def run_gesture(
    session_id: str,
    request: CommandRequest,
    manager: StateManager = Depends(get_state_manager)
) -> CommandResult:
    """Dispatch any command (drag, resize, nudge, ...)."""
    return run_command(manager, session_id, request.command)


@router.delete("/{session_id}/{box_id}")
async def delete_box(
    session_id: str,
    box_id: str,
    manager: StateManager = Depends(get_state_manager)
) -> CommandResult:
    """Remove a box. Unknown ids are a no-op."""
    return run_command(manager, session_id, Delete(box_id=box_id))


@router.post("/{session_id}/{box_id}/select")
async def select_box(
    session_id: str,
    box_id: str,
    request: Optional[SelectRequest] = None,
    manager: StateManager = Depends(get_state_manager)
) -> CommandResult:
    """Select a box; `multi` toggles it without clearing the rest."""
    multi = request.multi if request else False
    return run_command(manager, session_id, Select(box_id=box_id, multi=multi))
