"""
Grid Labs Configuration
=======================

Grid constants and runtime settings, overridable through environment variables.
"""

import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field


class GridConfig(BaseModel):
    """Configuration for the grid engine and session storage."""
    columns: int = Field(default=10, ge=1)
    row_height: float = Field(default=60.0, gt=0)
    gap: float = Field(default=16.0, ge=0)
    max_span: int = Field(default=5, ge=1)
    max_history: int = Field(default=100, ge=1)
    max_resolve_attempts: int = Field(default=100, ge=1)
    default_container_width: float = Field(default=896.0, gt=0)
    new_box_col_span: int = Field(default=2, ge=1)
    new_box_row_span: int = Field(default=1, ge=1)
    sessions_dir: Path = Path("sessions")

    @classmethod
    def from_env(cls, sessions_dir: Optional[Path] = None) -> "GridConfig":
        """Build config from GRIDLAB_* environment variables."""
        return cls(
            columns=int(os.getenv("GRIDLAB_COLUMNS", "10")),
            row_height=float(os.getenv("GRIDLAB_ROW_HEIGHT", "60")),
            gap=float(os.getenv("GRIDLAB_GAP", "16")),
            max_history=int(os.getenv("GRIDLAB_MAX_HISTORY", "100")),
            default_container_width=float(os.getenv("GRIDLAB_CONTAINER_WIDTH", "896")),
            sessions_dir=sessions_dir or Path(os.getenv("GRIDLAB_SESSIONS_DIR", "sessions")),
        )

    @property
    def span_limit(self) -> int:
        """Largest column span a box may take on this grid."""
        return min(self.max_span, self.columns)
