"""
Layout Codec
============

JSON export and import of layouts.

Canonical shape:
    {"boxes": [{"id": "box-1", "col": 1, "row": 1, "colSpan": 2, "rowSpan": 1}], "version": "2.0"}

A bare array of boxes (the older export format) is accepted on import.
"""

import json
import logging
from typing import Any, Iterable, List, Union
from pydantic import ValidationError

from ..models.grid_models import Box
from ..models.layout_models import BoxRecord, LayoutExport

logger = logging.getLogger(__name__)


class LayoutImportError(ValueError):
    """The payload is not valid JSON or does not have the layout shape."""


def export_layout(boxes: Iterable[Box]) -> LayoutExport:
    """Build the canonical export from the current boxes (display rects for free boxes)."""
    return LayoutExport(boxes=[
        BoxRecord(id=box.id, col=box.col, row=box.row, col_span=box.col_span, row_span=box.row_span)
        for box in boxes
    ])


def dumps_layout(boxes: Iterable[Box]) -> str:
    """Serialize the current boxes to the canonical JSON text."""
    return json.dumps(export_layout(boxes).model_dump(by_alias=True), indent=2)


def parse_layout(payload: Union[str, bytes, dict, list, Any]) -> List[BoxRecord]:
    """
    Parse an import payload into box records.

    Accepts JSON text or an already-decoded object. Raises LayoutImportError
    for malformed JSON, a missing `boxes` array, any box whose numeric
    fields are missing or not integers, and duplicate ids.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"[LAYOUT-CODEC] Malformed JSON: {e}")
            raise LayoutImportError(f"Invalid JSON: {e}") from e

    if isinstance(payload, dict):
        items = payload.get("boxes")
        if not isinstance(items, list):
            raise LayoutImportError("Layout must contain a 'boxes' array")
    elif isinstance(payload, list):
        logger.info("[LAYOUT-CODEC] Reading legacy bare-array layout")
        items = payload
    else:
        raise LayoutImportError(f"Unsupported layout payload: {type(payload).__name__}")

    records: List[BoxRecord] = []
    seen = set()
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise LayoutImportError(f"Box {index} is not an object")
        if item.get("id") == "":
            item = {k: v for k, v in item.items() if k != "id"}
        try:
            record = BoxRecord.model_validate(item)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise LayoutImportError(f"Box {index} has invalid fields: {fields}") from e
        if record.id is not None:
            if record.id in seen:
                raise LayoutImportError(f"Duplicate box id: {record.id}")
            seen.add(record.id)
        records.append(record)

    logger.info(f"[LAYOUT-CODEC] Parsed {len(records)} boxes")
    return records
