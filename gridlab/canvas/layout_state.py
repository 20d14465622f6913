"""
Layout State
============

The authoritative list of boxes, the selection set and the undo history for
one grid. Gesture methods return True when they changed anything; calls that
reference an unknown box id are no-ops.

History is committed on add, delete, clear, import and whenever a box
settles back onto the grid. Intermediate drag and resize frames never commit.
Ending a drag or resize does not commit either: the box stays free until it
is deselected. An undo issued after `end_drag` but before the deselect
restores the entry before the last commit, so the uncommitted gesture is
discarded along with the last committed change.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Set, Union

from ..config import GridConfig
from ..models.command_models import Direction
from ..models.grid_models import Box, FreeBox, GridBox, GridRect
from ..models.layout_models import HistoryEntry, LayoutExport, LayoutRender, RenderedBox
from ..grid.collision import resolve
from ..grid.geometry import (
    compute_grid_math, grid_dimensions, grid_to_pixel, max_occupied_row, visible_rows
)
from ..grid.snapping import clamp_to_grid
from ..services.layout_codec import export_layout, parse_layout
from .history import History
from .transitions import (
    apply_selection, move_free, nudge_free, resize_free, resnap_free, settle, to_free
)

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 100

DEMO_BOXES = [
    GridBox(id="box-1", col=1, row=1, col_span=2, row_span=1),
    GridBox(id="box-2", col=3, row=1, col_span=3, row_span=2),
    GridBox(id="box-3", col=6, row=1, col_span=3, row_span=1),
    GridBox(id="box-4", col=1, row=2, col_span=2, row_span=2),
]


class LayoutState:
    """Boxes, selection and history for one grid."""

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        container_width: Optional[float] = None,
        boxes: Optional[Iterable[GridBox]] = None,
        id_factory: Optional[Callable[[], str]] = None
    ):
        self.config = config or GridConfig()
        self.container_width = container_width or self.config.default_container_width
        self.grid_math = compute_grid_math(self.container_width, self.config)
        self.boxes: List[Box] = list(boxes or [])
        self.selection: Set[str] = set()
        self.history = History(max_entries=self.config.max_history)
        self._id_factory = id_factory
        self._counter = len(self.boxes)
        self._gestures: Dict[str, str] = {}
        self.history.reset(self.boxes)

    # Queries

    @property
    def box_count(self) -> int:
        return len(self.boxes)

    @property
    def selected_count(self) -> int:
        return len(self.selection)

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def get_box(self, box_id: str) -> Optional[Box]:
        index = self._index(box_id)
        return self.boxes[index] if index >= 0 else None

    def gesture_for(self, box_id: str) -> Optional[str]:
        return self._gestures.get(box_id)

    def _index(self, box_id: str) -> int:
        for i, box in enumerate(self.boxes):
            if box.id == box_id:
                return i
        return -1

    def _anchored_rects(self, exclude: Optional[str] = None) -> List[GridRect]:
        return [b.rect for b in self.boxes if isinstance(b, GridBox) and b.id != exclude]

    def _next_id(self) -> str:
        taken = {b.id for b in self.boxes}
        if self._id_factory:
            for _ in range(MAX_ID_ATTEMPTS):
                box_id = self._id_factory()
                if box_id not in taken:
                    return box_id
            logger.warning(
                f"[LAYOUT] id factory returned taken ids {MAX_ID_ATTEMPTS} times, "
                f"falling back to box-N ids"
            )
        while True:
            self._counter += 1
            box_id = f"box-{self._counter}"
            if box_id not in taken:
                return box_id

    def _commit(self, reason: str) -> HistoryEntry:
        entry = self.history.push(self.boxes, self.selection)
        logger.info(
            f"[LAYOUT] Committed '{reason}' ({len(self.boxes)} boxes, "
            f"history {self.history.cursor + 1}/{len(self.history)})"
        )
        return entry

    def _restore(self, entry: HistoryEntry) -> None:
        self.boxes = list(entry.boxes)
        self.selection = set(entry.selection)
        self._gestures.clear()

    # Toolbar actions

    def add_box(self) -> GridBox:
        """Append a box at column 1 on the row below all existing content."""
        row = max_occupied_row(b.rect for b in self.boxes) + 1
        box = GridBox(
            id=self._next_id(),
            col=1,
            row=row,
            col_span=min(self.config.new_box_col_span, self.config.columns),
            row_span=self.config.new_box_row_span,
        )
        self.boxes.append(box)
        self._commit(f"add {box.id}")
        return box

    def delete_box(self, box_id: str) -> bool:
        index = self._index(box_id)
        if index < 0:
            logger.debug(f"[LAYOUT] Delete ignored, unknown box {box_id}")
            return False
        del self.boxes[index]
        self.selection.discard(box_id)
        self._gestures.pop(box_id, None)
        self._commit(f"delete {box_id}")
        return True

    def delete_selected(self) -> int:
        """Delete every selected box as one undoable step."""
        if not self.selection:
            return 0
        doomed = set(self.selection)
        self.boxes = [b for b in self.boxes if b.id not in doomed]
        self.selection.clear()
        for box_id in doomed:
            self._gestures.pop(box_id, None)
        self._commit(f"delete {len(doomed)} selected")
        return len(doomed)

    def clear_all(self) -> bool:
        if not self.boxes:
            return False
        self.boxes = []
        self.selection.clear()
        self._gestures.clear()
        self._commit("clear all")
        return True

    # Selection

    def select(self, box_id: str, multi: bool = False) -> bool:
        """Click on a box. Newly selected boxes go free, dropped ones settle."""
        if self._index(box_id) < 0:
            logger.debug(f"[LAYOUT] Select ignored, unknown box {box_id}")
            return False

        new_selection = apply_selection(self.selection, box_id, multi)
        if new_selection == self.selection:
            return False

        dropped = self.selection - new_selection
        self.selection = new_selection
        self.boxes = [
            to_free(b, self.grid_math) if b.id in new_selection else b
            for b in self.boxes
        ]
        if dropped and self._settle(dropped):
            self._commit("settle")
        return True

    def deselect(self, box_id: Optional[str] = None) -> bool:
        """Deselect one box, or all when `box_id` is None, settling them on the grid."""
        if box_id is None:
            dropped = set(self.selection)
        elif box_id in self.selection:
            dropped = {box_id}
        else:
            return False
        if not dropped:
            return False

        self.selection -= dropped
        if self._settle(dropped):
            self._commit("settle")
        return True

    def _settle(self, box_ids: Set[str]) -> int:
        """Return free boxes to the grid in list order; earlier ones become obstacles for later ones."""
        settled = 0
        for i, box in enumerate(self.boxes):
            if box.id not in box_ids or not isinstance(box, FreeBox):
                continue
            grid_box, placement = settle(
                box, self._anchored_rects(exclude=box.id), self.grid_math, self.config
            )
            self.boxes[i] = grid_box
            self._gestures.pop(box.id, None)
            settled += 1
            if not placement.resolved:
                logger.warning(f"[LAYOUT] Unresolved placement for {box.id}")
        return settled

    # Gestures on free boxes

    def _free_box(self, box_id: str) -> int:
        index = self._index(box_id)
        if index < 0 or not isinstance(self.boxes[index], FreeBox):
            logger.debug(f"[LAYOUT] Gesture ignored for {box_id}, not a free box")
            return -1
        return index

    def begin_drag(self, box_id: str) -> bool:
        return self._begin(box_id, "drag")

    def begin_resize(self, box_id: str) -> bool:
        return self._begin(box_id, "resize")

    def _begin(self, box_id: str, gesture: str) -> bool:
        index = self._index(box_id)
        if index < 0 or box_id not in self.selection:
            logger.debug(f"[LAYOUT] Begin {gesture} ignored for {box_id}, not selected")
            return False
        self.boxes[index] = to_free(self.boxes[index], self.grid_math)
        self._gestures[box_id] = gesture
        return True

    def update_drag(self, box_id: str, x: float, y: float) -> bool:
        index = self._free_box(box_id)
        if index < 0:
            return False
        self.boxes[index] = move_free(self.boxes[index], x, y, self.grid_math, self.config.span_limit)
        return True

    def end_drag(self, box_id: str, x: float, y: float) -> bool:
        """Last drag frame. The box stays free until it is deselected."""
        applied = self.update_drag(box_id, x, y)
        self._gestures.pop(box_id, None)
        return applied

    def update_resize(self, box_id: str, x: float, y: float, width: float, height: float) -> bool:
        index = self._free_box(box_id)
        if index < 0:
            return False
        self.boxes[index] = resize_free(
            self.boxes[index], x, y, width, height, self.grid_math, self.config.span_limit
        )
        return True

    def end_resize(self, box_id: str, x: float, y: float, width: float, height: float) -> bool:
        """Last resize frame. The box stays free until it is deselected."""
        applied = self.update_resize(box_id, x, y, width, height)
        self._gestures.pop(box_id, None)
        return applied

    def nudge(self, direction: Union[Direction, str], coarse: bool = False) -> int:
        """Move every free box by half a cell, or a whole cell when coarse."""
        direction = Direction(direction)
        factor = 1.0 if coarse else 0.5
        dx = dy = 0.0
        if direction == Direction.LEFT:
            dx = -self.grid_math.col_pitch * factor
        elif direction == Direction.RIGHT:
            dx = self.grid_math.col_pitch * factor
        elif direction == Direction.UP:
            dy = -self.grid_math.row_pitch * factor
        else:
            dy = self.grid_math.row_pitch * factor

        moved = 0
        for i, box in enumerate(self.boxes):
            if isinstance(box, FreeBox):
                self.boxes[i] = nudge_free(box, dx, dy, self.grid_math, self.config.span_limit)
                moved += 1
        return moved

    # History

    def undo(self) -> bool:
        entry = self.history.undo()
        if entry is None:
            return False
        self._restore(entry)
        logger.info(f"[LAYOUT] Undo to {self.history.cursor + 1}/{len(self.history)}")
        return True

    def redo(self) -> bool:
        entry = self.history.redo()
        if entry is None:
            return False
        self._restore(entry)
        logger.info(f"[LAYOUT] Redo to {self.history.cursor + 1}/{len(self.history)}")
        return True

    # Import / export

    def import_layout(self, payload) -> int:
        """
        Replace the whole layout with an imported one.

        Raises LayoutImportError without touching any state when the payload
        is invalid. Boxes are clamped to the grid and, if they overlap an
        earlier imported box, pushed down until they fit.
        """
        records = parse_layout(payload)

        imported: List[GridBox] = []
        taken = {r.id for r in records if r.id is not None}
        for record in records:
            raw = GridRect(col=record.col, row=record.row, col_span=record.col_span, row_span=record.row_span)
            rect = clamp_to_grid(raw, self.config.columns, self.config.span_limit)
            if rect != raw:
                logger.warning(f"[LAYOUT] Clamped imported box {record.id} from {raw} to {rect}")

            placement = resolve(rect, [b.rect for b in imported], self.config.max_resolve_attempts)
            if placement.resolved:
                rect = placement.rect
            else:
                rect = rect.shifted(max_occupied_row(b.rect for b in imported) + 1 - rect.row)
            if rect.row != record.row:
                logger.warning(f"[LAYOUT] Moved overlapping imported box {record.id} to row {rect.row}")

            box_id = record.id
            if box_id is None:
                box_id = self._generate_unused(taken)
                taken.add(box_id)
            imported.append(GridBox(id=box_id, col=rect.col, row=rect.row, col_span=rect.col_span, row_span=rect.row_span))

        self.boxes = list(imported)
        self.selection.clear()
        self._gestures.clear()
        self._commit(f"import {len(imported)} boxes")
        return len(imported)

    def _generate_unused(self, taken: Set[str]) -> str:
        while True:
            box_id = self._next_id()
            if box_id not in taken:
                return box_id

    def export_layout(self) -> LayoutExport:
        return export_layout(self.boxes)

    # Rendering

    def set_container_width(self, width: float) -> bool:
        """Recompute grid math. Free boxes keep their pixel rectangles and re-snap their display cells."""
        if width == self.container_width:
            return False
        self.container_width = width
        self.grid_math = compute_grid_math(width, self.config)
        self.boxes = [
            resnap_free(b, self.grid_math, self.config.span_limit) if isinstance(b, FreeBox) else b
            for b in self.boxes
        ]
        logger.debug(f"[LAYOUT] Container width {width}, cell width {self.grid_math.cell_width:.1f}")
        return True

    def render(self) -> LayoutRender:
        """Pixel rectangles for every box in list order."""
        rows = visible_rows(b.rect for b in self.boxes)
        width, height = grid_dimensions(self.grid_math, rows)
        rendered = []
        for box in self.boxes:
            if isinstance(box, FreeBox):
                rect = box.absolute_position
            else:
                rect = grid_to_pixel(box.rect, self.grid_math)
            rendered.append(RenderedBox(
                id=box.id,
                mode=box.mode,
                selected=box.id in self.selection,
                rect=rect,
                grid=box.rect,
                gesture=self._gestures.get(box.id),
            ))
        return LayoutRender(grid_math=self.grid_math, rows=rows, width=width, height=height, boxes=rendered)
