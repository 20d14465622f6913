"""
Tests for the linear undo/redo history.
"""

from gridlab.canvas.history import History
from gridlab.models.grid_models import GridBox


def box(box_id, row=1):
    return GridBox(id=box_id, col=1, row=row, col_span=1, row_span=1)


class TestPush:
    """Test pushing snapshots."""

    def test_push_advances_cursor(self):
        history = History()
        history.push([box("a")], [])
        history.push([box("a"), box("b", 2)], ["b"])
        assert len(history) == 2
        assert history.cursor == 1
        assert history.current.selection == frozenset({"b"})

    def test_snapshot_is_independent_of_caller_list(self):
        history = History()
        boxes = [box("a")]
        selection = {"a"}
        entry = history.push(boxes, selection)
        boxes.append(box("b", 2))
        selection.clear()
        assert len(entry.boxes) == 1
        assert entry.selection == frozenset({"a"})

    def test_push_discards_redo_branch(self):
        history = History()
        for i in range(4):
            history.push([box(str(i))], [])
        history.undo()
        history.undo()
        history.push([box("new")], [])
        assert len(history) == 3
        assert not history.can_redo
        assert history.redo() is None

    def test_depth_cap_drops_oldest(self):
        history = History(max_entries=3)
        for i in range(5):
            history.push([box(str(i))], [])
        assert len(history) == 3
        assert history.cursor == 2
        assert [e.boxes[0].id for e in history._entries] == ["2", "3", "4"]


class TestUndoRedo:
    """Test moving the cursor."""

    def test_undo_at_oldest_is_noop(self):
        history = History()
        history.push([], [])
        assert history.undo() is None
        assert history.cursor == 0

    def test_redo_at_newest_is_noop(self):
        history = History()
        history.push([], [])
        history.push([box("a")], [])
        assert history.redo() is None
        assert history.cursor == 1

    def test_undo_then_redo_round_trips(self):
        history = History()
        history.push([], [])
        latest = history.push([box("a")], ["a"])
        undone = history.undo()
        assert undone.boxes == ()
        redone = history.redo()
        assert redone == latest

    def test_reset_starts_over(self):
        history = History()
        history.push([box("a")], [])
        history.push([box("b")], [])
        history.reset([box("c")])
        assert len(history) == 1
        assert not history.can_undo
        assert history.current.boxes[0].id == "c"
