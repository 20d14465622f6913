"""
Layout Routes
=============

API routes for layout sessions: state, history, export and import.
"""

from fastapi import APIRouter, Body, Depends, HTTPException
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field

from ..canvas.state_manager import StateManager
from ..models.command_models import ClearAll, CommandResult, ImportLayout, Redo, SetContainerWidth, Undo
from ..models.layout_models import LayoutExport, LayoutRender

router = APIRouter(prefix="/api/layout", tags=["layout"])

# Injected by server
state_manager: Optional[StateManager] = None


def get_state_manager() -> StateManager:
    """Dependency to get state manager."""
    if state_manager is None:
        raise HTTPException(500, "State manager not initialized")
    return state_manager


class CreateSessionRequest(BaseModel):
    """Request to create a layout session."""
    seed_demo: bool = False
    container_width: Optional[float] = Field(default=None, gt=0)


class LayoutStateResponse(BaseModel):
    """Response for layout state."""
    session_id: str
    box_count: int
    selected: List[str]
    can_undo: bool
    can_redo: bool
    render: LayoutRender
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ContainerRequest(BaseModel):
    """Container width reported by the rendering layer."""
    width: float = Field(gt=0)


def build_state_response(manager: StateManager, session_id: str) -> LayoutStateResponse:
    state = manager.get_session(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    info = manager.session_info(session_id)
    return LayoutStateResponse(
        session_id=session_id,
        box_count=state.box_count,
        selected=sorted(state.selection),
        can_undo=state.can_undo,
        can_redo=state.can_redo,
        render=state.render(),
        created_at=info.get("created_at"),
        updated_at=info.get("updated_at"),
    )


def run_command(manager: StateManager, session_id: str, command) -> CommandResult:
    result = manager.dispatch(session_id, command)
    if result is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return result


@router.post("/session")
async def create_session(
    request: Optional[CreateSessionRequest] = None,
    manager: StateManager = Depends(get_state_manager)
):
    """Create a new layout session."""
    request = request or CreateSessionRequest()
    session_id = manager.create_session(
        seed_demo=request.seed_demo,
        container_width=request.container_width
    )
    return {"session_id": session_id, "message": "Session created"}


@router.get("/state/{session_id}")
async def get_state(
    session_id: str,
    manager: StateManager = Depends(get_state_manager)
) -> LayoutStateResponse:
    """Get layout state and render rectangles for a session."""
    return build_state_response(manager, session_id)


@router.delete("/state/{session_id}")
async def clear_layout(session_id: str, manager: StateManager = Depends(get_state_manager)):
    """Clear all boxes from the layout."""
    result = run_command(manager, session_id, ClearAll())
    return {"message": "Layout cleared" if result.applied else "Layout already empty", "session_id": session_id}


@router.get("/export/{session_id}")
async def export_layout(
    session_id: str,
    manager: StateManager = Depends(get_state_manager)
) -> Dict[str, Any]:
    """Export the layout in the canonical JSON shape."""
    state = manager.get_session(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    export: LayoutExport = state.export_layout()
    return export.model_dump(by_alias=True)


@router.post("/import/{session_id}")
async def import_layout(
    session_id: str,
    payload: Any = Body(...),
    manager: StateManager = Depends(get_state_manager)
) -> CommandResult:
    """Replace the layout with an imported one (envelope or bare array)."""
    result = run_command(manager, session_id, ImportLayout(payload=payload))
    if result.error:
        raise HTTPException(status_code=400, detail=result.error)
    return result


@router.post("/undo/{session_id}")
async def undo(session_id: str, manager: StateManager = Depends(get_state_manager)) -> CommandResult:
    """Step back in history. A no-op at the oldest entry."""
    return run_command(manager, session_id, Undo())


@router.post("/redo/{session_id}")
async def redo(session_id: str, manager: StateManager = Depends(get_state_manager)) -> CommandResult:
    """Step forward in history. A no-op at the newest entry."""
    return run_command(manager, session_id, Redo())


@router.put("/container/{session_id}")
async def set_container(
    session_id: str,
    request: ContainerRequest,
    manager: StateManager = Depends(get_state_manager)
) -> CommandResult:
    """Recompute grid math for a new container width."""
    return run_command(manager, session_id, SetContainerWidth(width=request.width))
