"""Tests for the flattened task index."""

import pytest

from kanbandoc.model.task import add_task
from kanbandoc.model.taskmap import TaskMap, build_task_map, find_task, find_task_column, resolve_task_ref

from .conftest import FixedIds, _make_board, _make_column, _make_task


def _board():
    return _make_board(
        [
            _make_column("todo", tasks=[_make_task("a", display_id="1"), _make_task("b", display_id="2")]),
            _make_column("done", tasks=[_make_task("c", display_id="3")]),
        ]
    )


def test_build_task_map_in_column_order():
    assert list(build_task_map(_board())) == ["a", "b", "c"]


def test_find_task_and_column():
    doc = _board()
    assert find_task_column(doc, "c").id == "done"
    assert find_task(doc, "b").display_id == "2"
    assert find_task_column(doc, "zzz") is None
    assert find_task(doc, "zzz") is None


def test_resolve_task_ref():
    doc = _board()
    assert resolve_task_ref(doc, "a").id == "a"
    assert resolve_task_ref(doc, "3").id == "c"
    assert resolve_task_ref(doc, "99") is None


def test_task_map_cache_follows_document():
    cache = TaskMap()
    doc = _board()
    assert set(cache.get(doc)) == {"a", "b", "c"}

    doc = add_task(doc, "done", "New", ids=FixedIds("n"))
    assert "n1" in cache.get(doc)


def test_task_map_is_read_only():
    cache = TaskMap()
    doc = _board()
    tasks = cache.get(doc)
    with pytest.raises(TypeError):
        tasks["zzz"] = tasks["a"]
    assert len(cache.get(doc)) == 3


def test_task_map_views_keep_their_snapshot():
    cache = TaskMap()
    doc = _board()
    old = cache.get(doc)
    assert dict(cache.get(doc)) == dict(old)

    cache.get(add_task(doc, "done", "New", ids=FixedIds("n")))
    assert "n1" not in old


def test_task_map_invalidate():
    cache = TaskMap()
    doc = _board()
    first = cache.get(doc)
    cache.invalidate()
    assert dict(cache.get(doc)) == dict(first)
