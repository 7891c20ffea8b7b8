"""Flattened id -> Task index derived from a document's columns."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from kanbandoc.model.document import BoardDocument, Column, Task


def build_task_map(doc: BoardDocument) -> dict[str, Task]:
    """Index every live task by id, in column display order."""
    tasks: dict[str, Task] = {}
    for col in doc.ordered_columns():
        for task in col.tasks:
            tasks[task.id] = task
    return tasks


def find_task_column(doc: BoardDocument, task_id: str) -> Column | None:
    """Find the column containing a live task."""
    for col in doc.columns.values():
        if col.index_of(task_id) is not None:
            return col
    return None


def find_task(doc: BoardDocument, task_id: str) -> Task | None:
    col = find_task_column(doc, task_id)
    if col is None:
        return None
    return col.tasks[col.index_of(task_id)]


def resolve_task_ref(doc: BoardDocument, ref: str) -> Task | None:
    """Find a live task by real id, falling back to its display id."""
    task = find_task(doc, ref)
    if task is not None:
        return task
    for candidate in build_task_map(doc).values():
        if candidate.display_id == ref:
            return candidate
    return None


class TaskMap:
    """Cached task index, rebuilt whenever the document's columns change.

    Documents never mutate their columns dict in place, so identity of
    ``doc.columns`` is enough to tell whether the cache is stale.
    """

    def __init__(self) -> None:
        self._columns: dict[str, Column] | None = None
        self._tasks: dict[str, Task] = {}

    def get(self, doc: BoardDocument) -> Mapping[str, Task]:
        """Read-only view of the index for doc."""
        if doc.columns is not self._columns:
            self._tasks = build_task_map(doc)
            self._columns = doc.columns
        return MappingProxyType(self._tasks)

    def invalidate(self) -> None:
        self._columns = None
        self._tasks = {}
