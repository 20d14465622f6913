"""
Layout State Manager
====================

Manages per-session layout state with JSON persistence.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime
import uuid

from ..config import GridConfig
from ..models.command_models import Command, CommandResult
from ..services.layout_codec import LayoutImportError
from .layout_state import DEMO_BOXES, LayoutState
from .reducer import dispatch

logger = logging.getLogger(__name__)


class StateManager:
    """Manages layout state for sessions."""

    def __init__(self, sessions_dir: Optional[Path] = None, config: Optional[GridConfig] = None):
        self.config = config or GridConfig()
        self.sessions_dir = sessions_dir or self.config.sessions_dir
        self.sessions_dir.mkdir(parents=True, exist_ok=True)
        self._cache: Dict[str, LayoutState] = {}
        self._meta: Dict[str, Dict[str, Any]] = {}
        logger.info(f"[STATE-MANAGER] Initialized with sessions_dir={self.sessions_dir}")

    def create_session(
        self,
        session_id: Optional[str] = None,
        seed_demo: bool = False,
        container_width: Optional[float] = None
    ) -> str:
        """Create a new session with optional ID."""
        if session_id is None:
            session_id = str(uuid.uuid4())

        if session_id not in self._cache:
            self._cache[session_id] = LayoutState(
                config=self.config,
                container_width=container_width,
                boxes=DEMO_BOXES if seed_demo else None,
            )
            self._meta[session_id] = {"created_at": datetime.now().isoformat()}
            self._save_session(session_id)
            logger.info(f"[STATE-MANAGER] Created session {session_id} (seed_demo={seed_demo})")
        return session_id

    def get_session(self, session_id: str) -> Optional[LayoutState]:
        """Get session state, loading it from disk if needed."""
        if session_id in self._cache:
            return self._cache[session_id]

        session_path = self._session_path(session_id)
        if session_path.exists():
            try:
                with open(session_path) as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise LayoutImportError("Session file is not a JSON object")
                state = LayoutState(config=self.config, container_width=data.get("container_width"))
                state.import_layout(data.get("layout", {"boxes": []}))
            except (json.JSONDecodeError, UnicodeDecodeError, OSError, LayoutImportError) as e:
                logger.error(f"[STATE-MANAGER] Stored layout for {session_id} is unreadable: {e}")
                return None
            # A freshly loaded session starts with a single history entry
            state.history.reset(state.boxes)
            self._cache[session_id] = state
            self._meta[session_id] = {
                "created_at": data.get("created_at", datetime.now().isoformat()),
                "updated_at": data.get("updated_at"),
            }
            return state
        return None

    def dispatch(self, session_id: str, command: Command) -> Optional[CommandResult]:
        """Apply a command to a session. Returns None when the session does not exist."""
        state = self.get_session(session_id)
        if state is None:
            return None

        result = dispatch(state, command)
        if result.applied:
            self._meta[session_id]["updated_at"] = datetime.now().isoformat()
            if result.committed or command.type in ("undo", "redo", "set_container_width"):
                self._save_session(session_id)
        return result

    def session_info(self, session_id: str) -> Dict[str, Any]:
        """Timestamps for a session."""
        return dict(self._meta.get(session_id, {}))

    def delete_session(self, session_id: str) -> bool:
        """Forget a session and remove its file."""
        existed = self._cache.pop(session_id, None) is not None
        self._meta.pop(session_id, None)
        session_path = self._session_path(session_id)
        if session_path.exists():
            session_path.unlink()
            existed = True
        return existed

    def save_session(self, session_id: str) -> bool:
        """Explicitly save session to disk."""
        if session_id in self._cache:
            self._save_session(session_id)
            return True
        return False

    def _session_path(self, session_id: str) -> Path:
        return self.sessions_dir / f"{session_id}.json"

    def _save_session(self, session_id: str):
        """Save session to disk as a single JSON blob."""
        state = self._cache.get(session_id)
        if state is None:
            return
        meta = self._meta.get(session_id, {})
        blob = {
            "id": session_id,
            "created_at": meta.get("created_at"),
            "updated_at": meta.get("updated_at"),
            "container_width": state.container_width,
            "layout": state.export_layout().model_dump(by_alias=True),
        }
        with open(self._session_path(session_id), "w") as f:
            json.dump(blob, f, indent=2)
