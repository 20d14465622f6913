"""
Tests for layout JSON export and import parsing.
"""

import json
import pytest

from gridlab.models.grid_models import GridBox
from gridlab.services.layout_codec import LayoutImportError, dumps_layout, export_layout, parse_layout


BOXES = [
    GridBox(id="box-1", col=1, row=1, col_span=2, row_span=1),
    GridBox(id="box-2", col=3, row=1, col_span=3, row_span=2),
]


class TestExport:
    """Test the canonical export shape."""

    def test_envelope_with_version(self):
        data = json.loads(dumps_layout(BOXES))
        assert data["version"] == "2.0"
        assert data["boxes"] == [
            {"id": "box-1", "col": 1, "row": 1, "colSpan": 2, "rowSpan": 1},
            {"id": "box-2", "col": 3, "row": 1, "colSpan": 3, "rowSpan": 2},
        ]

    def test_empty_layout(self):
        assert export_layout([]).model_dump(by_alias=True) == {"boxes": [], "version": "2.0"}


class TestParse:
    """Test import parsing and rejection."""

    def test_envelope(self):
        records = parse_layout('{"boxes":[{"id":"x","col":1,"row":1,"colSpan":2,"rowSpan":1}]}')
        assert len(records) == 1
        assert records[0].id == "x"
        assert records[0].col_span == 2

    def test_legacy_bare_array(self):
        records = parse_layout('[{"id":"x","col":4,"row":2,"colSpan":1,"rowSpan":3}]')
        assert records[0].row_span == 3

    def test_accepts_decoded_objects_and_bytes(self):
        assert parse_layout({"boxes": []}) == []
        assert len(parse_layout(b'[{"col":1,"row":1,"colSpan":1,"rowSpan":1}]')) == 1

    def test_invalid_utf8_bytes_rejected(self):
        with pytest.raises(LayoutImportError, match="Invalid JSON"):
            parse_layout(b'{"boxes": [\xff]}')

    def test_extra_keys_ignored(self):
        records = parse_layout([{"id": "a", "col": 1, "row": 1, "colSpan": 1, "rowSpan": 1, "color": "red"}])
        assert records[0].id == "a"

    def test_empty_id_treated_as_missing(self):
        records = parse_layout([{"id": "", "col": 1, "row": 1, "colSpan": 1, "rowSpan": 1}])
        assert records[0].id is None

    @pytest.mark.parametrize("payload", [
        "{not json",
        '"just a string"',
        "42",
        '{"version": "2.0"}',
        '{"boxes": {"id": "a"}}',
        '[1, 2]',
    ])
    def test_shape_errors(self, payload):
        with pytest.raises(LayoutImportError):
            parse_layout(payload)

    @pytest.mark.parametrize("box", [
        {"id": "a", "col": 1, "row": 1, "colSpan": 2},
        {"id": "a", "col": "1", "row": 1, "colSpan": 2, "rowSpan": 1},
        {"id": "a", "col": 1.5, "row": 1, "colSpan": 2, "rowSpan": 1},
        {"id": "a", "col": True, "row": 1, "colSpan": 2, "rowSpan": 1},
        {"id": "a", "col": 1, "row": None, "colSpan": 2, "rowSpan": 1},
        {"id": "a", "col": 0, "row": 1, "colSpan": 2, "rowSpan": 1},
        {"id": 7, "col": 1, "row": 1, "colSpan": 2, "rowSpan": 1},
    ])
    def test_invalid_boxes_rejected(self, box):
        with pytest.raises(LayoutImportError):
            parse_layout({"boxes": [box]})

    def test_duplicate_ids_rejected(self):
        box = {"id": "a", "col": 1, "row": 1, "colSpan": 1, "rowSpan": 1}
        with pytest.raises(LayoutImportError, match="Duplicate"):
            parse_layout([box, dict(box, row=2)])

    def test_error_is_a_value_error(self):
        assert issubclass(LayoutImportError, ValueError)
