"""Tests for 'kanbandoc task' commands."""

import json

import pytest

from kanbandoc.cli.task import (
    task_add,
    task_archive,
    task_candidates,
    task_delete,
    task_get,
    task_list,
    task_move,
    task_parent,
    task_subtasks,
    task_update,
)
from kanbandoc.model.taskmap import build_task_map, resolve_task_ref
from kanbandoc.store import load_board

from .conftest import _args


def _doc(repo):
    return load_board(repo, "default")[1]


def _titles(repo, column_title):
    doc = _doc(repo)
    [col] = [c for c in doc.ordered_columns() if c.title == column_title]
    return [t.content for t in col.tasks]


def test_task_list(initialized_repo, capsys):
    assert task_list(_args(initialized_repo, column=None)) == 0

    out = capsys.readouterr().out
    assert "Backlog" in out
    assert "First task" in out
    assert "Second task" in out


def test_task_list_json_filtered(initialized_repo, capsys):
    assert task_list(_args(initialized_repo, json=True, column="Doing")) == 0
    assert json.loads(capsys.readouterr().out) == []


def test_task_get(initialized_repo, capsys):
    assert task_get(_args(initialized_repo, id="1")) == 0
    out = capsys.readouterr().out
    assert "#1 First task" in out
    assert "[Backlog]" in out


def test_task_get_json(initialized_repo, capsys):
    assert task_get(_args(initialized_repo, json=True, id="2")) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["content"] == "Second task"
    assert data["column"]["title"] == "Backlog"
    assert data["description"] == ""


def test_task_get_not_found(initialized_repo):
    with pytest.raises(SystemExit, match="1"):
        task_get(_args(initialized_repo, id="99"))


def test_task_add(initialized_repo, capsys):
    args = _args(initialized_repo, content="Third task", column="Doing", description="Details", due="2025-03-01")
    assert task_add(args) == 0
    assert "Created task #3 in Doing" in capsys.readouterr().out

    task = resolve_task_ref(_doc(initialized_repo), "3")
    assert task.content == "Third task"
    assert task.description == "Details"
    assert task.due_date == "2025-03-01"
    assert _titles(initialized_repo, "Doing") == ["Third task"]


def test_task_add_default_column(initialized_repo, capsys):
    args = _args(initialized_repo, json=True, content="Third task", column=None, description="", due=None)
    assert task_add(args) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["column"]["title"] == "Backlog"
    assert _titles(initialized_repo, "Backlog")[-1] == "Third task"


def test_task_move(initialized_repo, capsys):
    assert task_move(_args(initialized_repo, id="1", column="Done", position=None)) == 0
    assert "Moved task #1 to Done" in capsys.readouterr().out
    assert _titles(initialized_repo, "Done") == ["First task"]
    assert _titles(initialized_repo, "Backlog") == ["Second task"]


def test_task_move_within_column(initialized_repo):
    assert task_move(_args(initialized_repo, id="2", column="1", position=1)) == 0
    assert _titles(initialized_repo, "Backlog") == ["Second task", "First task"]


def test_task_update(initialized_repo, capsys):
    args = _args(initialized_repo, id="1", content="Renamed", description=None, due=None, completed=True)
    assert task_update(args) == 0
    task = resolve_task_ref(_doc(initialized_repo), "1")
    assert task.content == "Renamed"
    assert task.completed is True


def test_task_update_nothing(initialized_repo):
    args = _args(initialized_repo, id="1", content=None, description=None, due=None, completed=None)
    with pytest.raises(SystemExit, match="1"):
        task_update(args)


def test_task_delete(initialized_repo, capsys):
    assert task_delete(_args(initialized_repo, id="1")) == 0
    assert _titles(initialized_repo, "Backlog") == ["Second task"]
    assert _doc(initialized_repo).archive_history == ()


def test_task_archive(initialized_repo, capsys):
    assert task_archive(_args(initialized_repo, id="1", date="2025-01-15")) == 0
    assert "on 2025-01-15" in capsys.readouterr().out

    doc = _doc(initialized_repo)
    [entry] = doc.archive_history
    assert entry.date == "2025-01-15"
    assert entry.tasks[0].column_title == "Backlog"
    assert _titles(initialized_repo, "Backlog") == ["Second task"]


def test_task_parent_and_clear(initialized_repo, capsys):
    assert task_parent(_args(initialized_repo, id="2", parent="1")) == 0
    tasks = {t.display_id: t for t in build_task_map(_doc(initialized_repo)).values()}
    assert tasks["2"].parent_id == tasks["1"].id
    assert tasks["1"].subtasks == (tasks["2"].id,)

    assert task_parent(_args(initialized_repo, id="2", parent=None)) == 0
    tasks = {t.display_id: t for t in build_task_map(_doc(initialized_repo)).values()}
    assert tasks["2"].parent_id is None
    assert tasks["1"].subtasks == ()


def test_task_parent_cycle(initialized_repo, capsys):
    assert task_parent(_args(initialized_repo, id="2", parent="1")) == 0
    with pytest.raises(SystemExit, match="1"):
        task_parent(_args(initialized_repo, id="1", parent="2"))
    assert "cycle" in capsys.readouterr().err


def test_task_subtasks(initialized_repo, capsys):
    assert task_subtasks(_args(initialized_repo, id="1", subtasks=["2"], clear=False)) == 0
    capsys.readouterr()

    assert task_subtasks(_args(initialized_repo, json=True, id="1", subtasks=[], clear=False)) == 0
    [sub] = json.loads(capsys.readouterr().out)
    assert sub["display_id"] == "2"

    assert task_subtasks(_args(initialized_repo, id="1", subtasks=[], clear=True)) == 0
    assert resolve_task_ref(_doc(initialized_repo), "1").subtasks == ()


def test_task_candidates(initialized_repo, capsys):
    assert task_candidates(_args(initialized_repo, json=True, id="1")) == 0
    data = json.loads(capsys.readouterr().out)
    assert [c["display_id"] for c in data] == ["2"]
