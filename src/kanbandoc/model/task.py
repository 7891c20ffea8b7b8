"""Task mutation operations for kanbandoc boards.

Every function takes a BoardDocument and returns a new one. Errors are
raised before anything is built, so a failed call leaves the caller
holding its original document.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from kanbandoc.errors import InvalidIndexError, NotFoundError, RelationshipError
from kanbandoc.ids import IdGenerator
from kanbandoc.model.archive import add_entry, archived_tasks
from kanbandoc.model.document import BoardDocument, Column, Task
from kanbandoc.model.relations import detach, find_ancestors, find_descendants
from kanbandoc.model.taskmap import build_task_map, find_task_column

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"content", "description", "due_date", "completed"})


def require_column(doc: BoardDocument, column_id: str) -> Column:
    """Return the column or raise NotFoundError."""
    col = doc.columns.get(column_id)
    if col is None:
        raise NotFoundError(f"Column '{column_id}' not found")
    return col


def _require_task(doc: BoardDocument, task_id: str) -> tuple[Column, int]:
    col = find_task_column(doc, task_id)
    if col is None:
        raise NotFoundError(f"Task '{task_id}' not found")
    return col, col.index_of(task_id)


def _with_columns(doc: BoardDocument, *changed: Column) -> BoardDocument:
    columns = dict(doc.columns)
    for col in changed:
        columns[col.id] = col
    return replace(doc, columns=columns)


def _with_tasks(doc: BoardDocument, updated: dict[str, Task]) -> BoardDocument:
    """Swap in replacement tasks by id, wherever they live."""
    columns = dict(doc.columns)
    for column_id, col in doc.columns.items():
        if any(task.id in updated for task in col.tasks):
            columns[column_id] = replace(col, tasks=tuple(updated.get(t.id, t) for t in col.tasks))
    return replace(doc, columns=columns)


def display_ids(doc: BoardDocument) -> list[str]:
    """Display ids in use, live and archived."""
    ids = [task.display_id for col in doc.columns.values() for task in col.tasks]
    ids.extend(task.display_id for task in archived_tasks(doc.archive_history))
    return ids


def add_task(doc: BoardDocument, column_id: str, content: str, ids: IdGenerator | None = None) -> BoardDocument:
    """Append a new unparented task to the end of a column."""
    col = require_column(doc, column_id)
    ids = ids or IdGenerator()
    task = Task(id=ids.new_id(), display_id=ids.display_id(display_ids(doc)), content=content)
    logger.debug("add task %s to column %s", task.id, column_id)
    return _with_columns(doc, replace(col, tasks=col.tasks + (task,)))


def delete_task(doc: BoardDocument, task_id: str) -> BoardDocument:
    """Remove a task permanently. Unknown ids are a no-op.

    Links from other tasks to the deleted one are cut in the same step.
    """
    col = find_task_column(doc, task_id)
    if col is None:
        return doc
    logger.debug("delete task %s from column %s", task_id, col.id)
    columns = dict(doc.columns)
    columns[col.id] = replace(col, tasks=tuple(t for t in col.tasks if t.id != task_id))
    return replace(doc, columns=detach(columns, [task_id]))


def move_task_within_column(doc: BoardDocument, column_id: str, from_index: int, to_index: int) -> BoardDocument:
    """Move the task at from_index to to_index inside one column."""
    col = require_column(doc, column_id)
    size = len(col.tasks)
    for index in (from_index, to_index):
        if not 0 <= index < size:
            raise InvalidIndexError(f"Index {index} out of range for column '{column_id}' with {size} tasks")
    if from_index == to_index:
        return doc
    tasks = list(col.tasks)
    tasks.insert(to_index, tasks.pop(from_index))
    return _with_columns(doc, replace(col, tasks=tuple(tasks)))


def move_task_between_columns(
    doc: BoardDocument,
    task_id: str,
    source_column_id: str,
    dest_column_id: str,
    dest_index: int,
) -> BoardDocument:
    """Move a task from one column to dest_index in another.

    dest_index is clamped to the destination list, so a drop past the end
    (or onto a list that shrank meanwhile) appends instead of failing.
    """
    source = require_column(doc, source_column_id)
    dest = require_column(doc, dest_column_id)
    index = source.index_of(task_id)
    if index is None:
        raise NotFoundError(f"Task '{task_id}' not found in column '{source_column_id}'")

    task = source.tasks[index]
    remaining = source.tasks[:index] + source.tasks[index + 1 :]

    if source_column_id == dest_column_id:
        target = list(remaining)
        target.insert(max(0, min(dest_index, len(target))), task)
        return _with_columns(doc, replace(source, tasks=tuple(target)))

    target = list(dest.tasks)
    target.insert(max(0, min(dest_index, len(target))), task)
    logger.debug("move task %s from %s to %s", task_id, source_column_id, dest_column_id)
    return _with_columns(doc, replace(source, tasks=remaining), replace(dest, tasks=tuple(target)))


def archive_task(doc: BoardDocument, task_id: str, as_of_date: str) -> BoardDocument:
    """Move a live task into the archive under as_of_date. Unknown ids are a no-op.

    The archived copy records its column's title and colour and carries no
    parent/subtask links; links to it from live tasks are cut.
    """
    col = find_task_column(doc, task_id)
    if col is None:
        return doc
    task = col.tasks[col.index_of(task_id)]
    archived = replace(
        task,
        archived_at=as_of_date,
        highlight_color=col.highlight_color,
        column_title=col.title,
        parent_id=None,
        subtasks=(),
    )
    columns = dict(doc.columns)
    columns[col.id] = replace(col, tasks=tuple(t for t in col.tasks if t.id != task_id))
    logger.debug("archive task %s on %s", task_id, as_of_date)
    return replace(
        doc,
        columns=detach(columns, [task_id]),
        archive_history=add_entry(doc.archive_history, archived, as_of_date),
    )


def update_task(doc: BoardDocument, task_id: str, **changes) -> BoardDocument:
    """Edit a task's content, description, due_date or completed flag."""
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update task field(s): {', '.join(sorted(unknown))}")
    col, index = _require_task(doc, task_id)
    task = col.tasks[index]
    updated = replace(task, **changes)
    if updated == task:
        return doc
    return _with_tasks(doc, {task_id: updated})


def set_parent(doc: BoardDocument, task_id: str, parent_id: str | None) -> BoardDocument:
    """Make task_id a subtask of parent_id, or unparent it with None.

    Keeps parent_id and the parents' subtasks lists in step. Raises
    RelationshipError when the new parent is not a live task, is the task
    itself, or sits below it.
    """
    tasks = build_task_map(doc)
    task = tasks.get(task_id)
    if task is None:
        raise NotFoundError(f"Task '{task_id}' not found")
    if task.parent_id == parent_id:
        return doc
    if parent_id is not None:
        if parent_id not in tasks:
            raise RelationshipError(f"Parent '{parent_id}' is not a live task")
        if parent_id == task_id:
            raise RelationshipError("A task cannot be its own parent")
        if parent_id in find_descendants(task_id, tasks.values()):
            raise RelationshipError(f"Task '{parent_id}' is below '{task_id}'; that would create a cycle")

    updated: dict[str, Task] = {task_id: replace(task, parent_id=parent_id)}
    old_parent = tasks.get(task.parent_id) if task.parent_id else None
    if old_parent is not None:
        updated[old_parent.id] = replace(old_parent, subtasks=tuple(s for s in old_parent.subtasks if s != task_id))
    if parent_id is not None:
        new_parent = tasks[parent_id]
        if task_id not in new_parent.subtasks:
            updated[parent_id] = replace(new_parent, subtasks=new_parent.subtasks + (task_id,))
    logger.debug("set parent of %s to %s", task_id, parent_id)
    return _with_tasks(doc, updated)


def set_subtasks(doc: BoardDocument, task_id: str, subtask_ids: Iterable[str]) -> BoardDocument:
    """Replace task_id's subtasks with subtask_ids, in that order.

    Dropped subtasks become unparented; new ones point back at task_id.
    Raises RelationshipError if a candidate is not live, is the task
    itself, already belongs to another parent, or sits above task_id.
    """
    tasks = build_task_map(doc)
    task = tasks.get(task_id)
    if task is None:
        raise NotFoundError(f"Task '{task_id}' not found")

    wanted = tuple(dict.fromkeys(subtask_ids))
    ancestors = find_ancestors(task_id, tasks.values())
    for sub_id in wanted:
        sub = tasks.get(sub_id)
        if sub is None:
            raise RelationshipError(f"Subtask '{sub_id}' is not a live task")
        if sub_id == task_id:
            raise RelationshipError("A task cannot be its own subtask")
        if sub.parent_id is not None and sub.parent_id != task_id:
            raise RelationshipError(f"Task '{sub_id}' already belongs to '{sub.parent_id}'")
        if sub_id in ancestors:
            raise RelationshipError(f"Task '{sub_id}' is above '{task_id}'; that would create a cycle")

    if wanted == task.subtasks:
        return doc

    updated: dict[str, Task] = {task_id: replace(task, subtasks=wanted)}
    for sub_id in task.subtasks:
        if sub_id not in wanted and sub_id in tasks and tasks[sub_id].parent_id == task_id:
            updated[sub_id] = replace(tasks[sub_id], parent_id=None)
    for sub_id in wanted:
        if tasks[sub_id].parent_id != task_id:
            updated[sub_id] = replace(tasks[sub_id], parent_id=task_id)
    logger.debug("set subtasks of %s to %s", task_id, list(wanted))
    return _with_tasks(doc, updated)
