"""Tests for column mutation operations."""

import random

import pytest

from kanbandoc.errors import InvalidIndexError, NotFoundError
from kanbandoc.model.column import (
    add_column,
    apply_template,
    archive_column,
    delete_column,
    reorder_columns,
    update_column,
)
from kanbandoc.model.document import ArchiveEntry, archived_task_count, check_invariants, live_task_count
from kanbandoc.model.taskmap import build_task_map

from .conftest import FixedIds, _make_board, _make_column, _make_task, _task_ids


def _board():
    return _make_board(
        [
            _make_column("todo", "To Do", [_make_task("a"), _make_task("b")], color="#AF522B"),
            _make_column("doing", "Doing", [_make_task("c")], color="#23863D"),
            _make_column("done", "Done", [_make_task("d"), _make_task("e")], color="#3247D8"),
        ]
    )


def test_add_column_appends_empty():
    doc = add_column(_board(), "Review", ids=FixedIds("col"), rng=random.Random(1))
    assert doc.column_order == ("todo", "doing", "done", "col1")
    col = doc.columns["col1"]
    assert col.title == "Review"
    assert col.tasks == ()
    assert col.highlight_color not in {"#AF522B", "#23863D", "#3247D8"}
    check_invariants(doc)


def test_reorder_columns():
    doc = reorder_columns(_board(), 0, 2)
    assert doc.column_order == ("doing", "done", "todo")


def test_reorder_columns_is_permutation():
    original = _board()
    for from_index in range(3):
        for to_index in range(3):
            doc = reorder_columns(original, from_index, to_index)
            assert sorted(doc.column_order) == sorted(original.column_order)
            assert doc.columns == original.columns


def test_reorder_columns_same_index():
    doc = _board()
    assert reorder_columns(doc, 1, 1) is doc


@pytest.mark.parametrize("from_index, to_index", [(3, 0), (0, 3), (-1, 0)])
def test_reorder_columns_bad_index(from_index, to_index):
    with pytest.raises(InvalidIndexError):
        reorder_columns(_board(), from_index, to_index)


def test_delete_column():
    doc = delete_column(_board(), "doing")
    assert doc.column_order == ("todo", "done")
    assert "doing" not in doc.columns
    assert "c" not in build_task_map(doc)
    assert doc.archive_history == ()


def test_delete_column_unknown():
    with pytest.raises(NotFoundError):
        delete_column(_board(), "nope")


def test_delete_column_cuts_links_to_lost_tasks():
    doc = _make_board(
        [
            _make_column("todo", tasks=[_make_task("p", subtasks=["c"])]),
            _make_column("done", tasks=[_make_task("c", parent_id="p")]),
        ]
    )
    doc = delete_column(doc, "done")
    assert doc.columns["todo"].tasks[0].subtasks == ()
    check_invariants(doc)


def test_update_column_merges_patch():
    doc = update_column(_board(), "todo", {"title": "Backlog", "minimized": True})
    col = doc.columns["todo"]
    assert col.title == "Backlog"
    assert col.minimized is True
    assert col.highlight_color == "#AF522B"
    assert _task_ids(doc, "todo") == ["a", "b"]


def test_update_column_color():
    doc = update_column(_board(), "todo", {"highlight_color": "#000000"})
    assert doc.columns["todo"].highlight_color == "#000000"


def test_update_column_rejects_bad_color():
    with pytest.raises(ValueError):
        update_column(_board(), "todo", {"highlight_color": "red"})


def test_update_column_rejects_tasks():
    with pytest.raises(ValueError):
        update_column(_board(), "todo", {"tasks": ()})


def test_update_column_unknown():
    with pytest.raises(NotFoundError):
        update_column(_board(), "nope", {"title": "X"})


def test_archive_column():
    doc = archive_column(_board(), "done", "2025-01-15")
    assert doc.columns["done"].tasks == ()
    assert "done" in doc.column_order
    [entry] = doc.archive_history
    assert entry.date == "2025-01-15"
    assert [t.id for t in entry.tasks] == ["d", "e"]
    for task in entry.tasks:
        assert task.archived_at == "2025-01-15"
        assert task.column_title == "Done"
        assert task.highlight_color == "#3247D8"


def test_archive_column_conserves_tasks():
    before = _board()
    after = archive_column(before, "done", "2025-01-15")
    assert live_task_count(after) + archived_task_count(after) == live_task_count(before) + archived_task_count(
        before
    )


def test_archive_column_appends_to_existing_date():
    earlier = _make_task("x", archived_at="2025-01-15")
    doc = _make_board(
        [_make_column("done", "Done", [_make_task("d")])],
        archive_history=[ArchiveEntry(date="2025-01-15", tasks=(earlier,))],
    )
    doc = archive_column(doc, "done", "2025-01-15")
    [entry] = doc.archive_history
    assert [t.id for t in entry.tasks] == ["x", "d"]


def test_archive_column_empty_is_noop():
    doc = _make_board([_make_column("done")])
    assert archive_column(doc, "done", "2025-01-15") is doc


def test_archive_column_unknown():
    with pytest.raises(NotFoundError):
        archive_column(_board(), "nope", "2025-01-15")


def test_apply_template_replaces_columns():
    history = (ArchiveEntry(date="2025-01-01", tasks=(_make_task("old", archived_at="2025-01-01"),)),)
    doc = _make_board([_make_column("todo", tasks=[_make_task("a")])], archive_history=history, description="Mine")
    doc = apply_template(doc, "Standard 3 columns", ids=FixedIds("c"))
    assert doc.column_order == ("c1", "c2", "c3")
    assert [c.title for c in doc.ordered_columns()] == ["To Do", "In Progress", "Done"]
    assert live_task_count(doc) == 0
    assert doc.archive_history == history
    assert doc.description == "Mine"
    check_invariants(doc)


def test_apply_template_unknown_empties_board():
    doc = apply_template(_board(), "No such template")
    assert doc.columns == {}
    assert doc.column_order == ()


def test_column_order_stays_permutation_across_operations():
    ids = FixedIds("x")
    doc = _board()
    doc = add_column(doc, "Review", ids=ids)
    doc = reorder_columns(doc, 3, 0)
    doc = delete_column(doc, "doing")
    doc = add_column(doc, "Later", ids=ids)
    doc = reorder_columns(doc, 0, 3)
    assert len(doc.column_order) == len(set(doc.column_order))
    assert set(doc.column_order) == set(doc.columns)
    check_invariants(doc)


def test_archive_done_column_of_three():
    doc = _make_board([_make_column("done", "Done", [_make_task("x"), _make_task("y"), _make_task("z")])])
    doc = archive_column(doc, "done", "2025-01-15")
    assert len(doc.columns["done"].tasks) == 0
    [entry] = doc.archive_history
    assert entry.date == "2025-01-15"
    assert [t.id for t in entry.tasks] == ["x", "y", "z"]
    assert all(t.column_title == "Done" for t in entry.tasks)
