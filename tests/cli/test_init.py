"""Tests for 'kanbandoc init' and argument parsing."""

import json

import pytest

from kanbandoc.cli import build_parser
from kanbandoc.cli.init import init_board
from kanbandoc.config import is_git_repo, write_config_key
from kanbandoc.store import has_board, load_board

from .conftest import _args


def test_init_creates_board(temp_repo, capsys):
    args = _args(temp_repo, template=None, templates=None, name="Project")
    assert init_board(args) == 0

    out = capsys.readouterr().out
    assert "Initialized board 'Project'" in out
    assert "To Do, In Progress, Done" in out

    name, doc = load_board(temp_repo, "default")
    assert name == "Project"
    assert len(doc.gradient_colors) == 2


def test_init_creates_repo(tmp_path, capsys):
    path = tmp_path / "fresh"
    path.mkdir()
    assert init_board(_args(path, template="1 Column", templates=None, name=None)) == 0
    assert is_git_repo(path)
    assert has_board(path, "default")


def test_init_is_idempotent(temp_repo, capsys):
    args = _args(temp_repo, json=True, template=None, templates=None, name=None)
    assert init_board(args) == 0
    assert json.loads(capsys.readouterr().out)["created"] is True

    assert init_board(args) == 0
    assert json.loads(capsys.readouterr().out)["created"] is False


def test_init_unknown_template(temp_repo):
    with pytest.raises(SystemExit, match="1"):
        init_board(_args(temp_repo, template="Nope", templates=None, name=None))


def test_init_custom_templates(temp_repo, tmp_path, capsys):
    path = tmp_path / "templates.yaml"
    path.write_text("Pipeline:\n  - Ideas\n  - Building\n")
    assert init_board(_args(temp_repo, template="Pipeline", templates=str(path), name=None)) == 0

    doc = load_board(temp_repo, "default")[1]
    assert [c.title for c in doc.ordered_columns()] == ["Ideas", "Building"]


def test_init_uses_configured_branch_and_template(temp_repo, capsys):
    write_config_key(temp_repo, "branch", "boards")
    write_config_key(temp_repo, "default_template", "Standard 4 columns")
    assert init_board(_args(temp_repo, template=None, templates=None, name=None)) == 0

    assert not has_board(temp_repo, "default")
    doc = load_board(temp_repo, "default", branch="boards")[1]
    assert len(doc.column_order) == 4


def test_parser_dispatch():
    parser = build_parser()

    args = parser.parse_args(["task", "move", "3", "--column", "Done", "--position", "2"])
    assert args.func.__name__ == "task_move"
    assert (args.id, args.column, args.position) == ("3", "Done", 2)

    args = parser.parse_args(["column", "update", "Doing", "--minimized"])
    assert args.minimized is True

    args = parser.parse_args(["column"])
    assert args.func.__name__ == "column_list"

    args = parser.parse_args(["task", "--json"])
    assert args.func.__name__ == "task_list"
    assert args.json is True
