"""Shared test helpers for model tests."""

from kanbandoc.model.document import BoardDocument, Column, Task


def _make_task(task_id, content=None, parent_id=None, subtasks=(), display_id=None, **kwargs):
    """Helper to build a live Task."""
    return Task(
        id=task_id,
        display_id=display_id or task_id,
        content=content or task_id.upper(),
        parent_id=parent_id,
        subtasks=tuple(subtasks),
        **kwargs,
    )


def _make_column(column_id, title=None, tasks=(), color="#123456", minimized=False):
    """Helper to build a Column."""
    return Column(
        id=column_id,
        title=title or column_id.title(),
        tasks=tuple(tasks),
        highlight_color=color,
        minimized=minimized,
    )


def _make_board(columns=(), archive_history=(), description=""):
    """Helper to build a BoardDocument with columns in the given order."""
    return BoardDocument(
        columns={col.id: col for col in columns},
        column_order=tuple(col.id for col in columns),
        archive_history=tuple(archive_history),
        description=description,
    )


def _task_ids(doc, column_id):
    return [t.id for t in doc.columns[column_id].tasks]


class FixedIds:
    """IdGenerator stand-in handing out predictable ids."""

    def __init__(self, prefix="id"):
        self.prefix = prefix
        self.count = 0

    def new_id(self):
        self.count += 1
        return f"{self.prefix}{self.count}"

    def display_id(self, existing=()):
        return str(100 + self.count)
