"""
Grid Labs Server
================

FastAPI server for the interactive box grid.

Features:
- Layout sessions with JSON persistence
- Box add/delete/select and drag/resize gestures
- Undo/redo over committed layout snapshots
- JSON export/import of layouts
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

from .config import GridConfig
from .canvas.state_manager import StateManager
from .models.layout_models import EXPORT_VERSION

# Import API routers
from .api import layout_routes, box_routes


# Shared service instances
config: GridConfig = GridConfig.from_env(sessions_dir=Path(__file__).parent.parent / "sessions")
state_manager: StateManager = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global state_manager

    logger.info("[GRIDLAB] Starting up...")

    state_manager = StateManager(config=config)

    # Inject into route modules
    layout_routes.state_manager = state_manager

    logger.info(f"[GRIDLAB] Grid {config.columns} columns, row height {config.row_height}, gap {config.gap}")

    yield

    logger.info("[GRIDLAB] Shutting down...")
    layout_routes.state_manager = None


# Create FastAPI app
app = FastAPI(
    title="Grid Labs",
    description="Interactive N-column box grid with snapping, collision resolution and undo/redo",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(layout_routes.router)
app.include_router(box_routes.router)


@app.get("/")
async def root():
    """Return API info."""
    return {
        "service": "Grid Labs",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "layout": "/api/layout/state/{session_id}",
            "boxes": "/api/box/{session_id}",
            "commands": "/api/box/{session_id}/commands"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "grid-labs",
        "sessions_dir": str(config.sessions_dir)
    }


@app.get("/api/info")
async def api_info():
    """Get grid constants for the rendering layer."""
    return {
        "service": "Grid Labs",
        "version": "1.0.0",
        "export_version": EXPORT_VERSION,
        "grid": {
            "columns": config.columns,
            "row_height_px": config.row_height,
            "gap_px": config.gap,
            "max_span": config.max_span,
            "default_container_width": config.default_container_width,
            "new_box_size": {"col_span": config.new_box_col_span, "row_span": config.new_box_row_span}
        },
        "history": {"max_entries": config.max_history},
        "commands": [
            "add_box", "delete", "delete_selected", "clear_all", "select", "deselect",
            "begin_drag", "update_drag", "end_drag", "begin_resize", "update_resize", "end_resize",
            "nudge", "undo", "redo", "import_layout", "set_container_width"
        ]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "gridlab.server:app",
        host="0.0.0.0",
        port=8080,
        reload=True
    )
