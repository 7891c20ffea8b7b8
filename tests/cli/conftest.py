"""Shared fixtures for CLI tests."""

from argparse import Namespace

import pytest

from kanbandoc.model.column import add_column
from kanbandoc.model.document import BoardDocument
from kanbandoc.model.task import add_task
from kanbandoc.store import save_board


def _args(repo, json=False, board="default", **kwargs):
    """Namespace shaped like the parser's output for one command."""
    return Namespace(repo=str(repo), board=board, json=json, verbose=False, **kwargs)


@pytest.fixture
def initialized_repo(temp_repo):
    """A repo holding board 'default' with 3 columns and 2 tasks in Backlog."""
    doc = BoardDocument()
    for title in ("Backlog", "Doing", "Done"):
        doc = add_column(doc, title)
    backlog = doc.column_order[0]
    doc = add_task(doc, backlog, "First task")
    doc = add_task(doc, backlog, "Second task")
    save_board(temp_repo, "default", "Test Board", doc, message="Initialize test board")
    return temp_repo
