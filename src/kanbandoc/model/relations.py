"""Parent/subtask graph queries and repairs.

Nothing here raises on bad data: imported boards may already contain
cycles or dangling ids, and every traversal stops when it revisits a
task.
"""

from __future__ import annotations

from collections import deque
from dataclasses import replace
from typing import Iterable

from kanbandoc.model.document import Column, Task


def with_pending_subtasks(task_id: str, tasks: Iterable[Task], pending_subtask_ids: Iterable[str]) -> list[Task]:
    """Overlay an unsaved subtask selection onto the stored tasks.

    Tasks in pending_subtask_ids are treated as children of task_id.
    Stored children of task_id that are no longer selected are treated
    as unparented.
    """
    pending = set(pending_subtask_ids)
    result = []
    for task in tasks:
        if task.id in pending:
            task = replace(task, parent_id=task_id)
        elif task.parent_id == task_id:
            task = replace(task, parent_id=None)
        result.append(task)
    return result


def find_descendants(task_id: str, tasks: Iterable[Task]) -> set[str]:
    """All transitive children of task_id, breadth first."""
    children: dict[str, list[str]] = {}
    for task in tasks:
        if task.parent_id is not None:
            children.setdefault(task.parent_id, []).append(task.id)

    descendants: set[str] = set()
    visited: set[str] = set()
    queue = deque([task_id])
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        for child_id in children.get(current, ()):
            if child_id not in descendants:
                descendants.add(child_id)
                queue.append(child_id)
    return descendants


def find_ancestors(task_id: str, tasks: Iterable[Task]) -> set[str]:
    """Every task above task_id, following parent_id until a root or a loop."""
    by_id = {task.id: task for task in tasks}
    ancestors: set[str] = set()
    visited: set[str] = set()
    task = by_id.get(task_id)
    while task is not None and task.parent_id is not None:
        if task.id in visited:
            break
        visited.add(task.id)
        ancestors.add(task.parent_id)
        task = by_id.get(task.parent_id)
    return ancestors


def can_set_parent(task_id: str, parent_id: str, tasks: Iterable[Task]) -> bool:
    """True if task_id may become a child of parent_id without a cycle."""
    if task_id == parent_id:
        return False
    return parent_id not in find_descendants(task_id, tasks)


def assignable_subtasks(task_id: str, tasks: Iterable[Task], pending_subtask_ids: Iterable[str] = ()) -> list[Task]:
    """Tasks that may be added to task_id's subtask selection.

    Excludes the task itself, its parent, tasks already selected, tasks
    that belong to another parent, and anything above or below task_id
    in the graph as it would look with the pending selection applied.
    """
    tasks = list(tasks)
    pending = list(pending_subtask_ids)
    selected = set(pending)
    projected = with_pending_subtasks(task_id, tasks, pending)
    descendants = find_descendants(task_id, projected)
    ancestors = find_ancestors(task_id, projected)
    own_parent = next((t.parent_id for t in tasks if t.id == task_id), None)

    candidates = []
    for task in tasks:
        if task.id == task_id or task.id == own_parent or task.id in selected:
            continue
        if task.parent_id is not None and task.parent_id != task_id:
            continue
        if task.id in descendants or task.id in ancestors:
            continue
        candidates.append(task)
    return candidates


def normalize_relationships(tasks: Iterable[Task]) -> list[Task]:
    """Repair parent/subtask links on a flat list of live tasks.

    parent_id is authoritative. References to unknown tasks are dropped,
    every subtasks tuple is rebuilt from the children that point at it
    (keeping the stored order first), and a parent_id that closes a
    loop is cleared.
    """
    tasks = list(tasks)
    known = {task.id for task in tasks}
    parents: dict[str, str | None] = {
        task.id: task.parent_id if task.parent_id in known and task.parent_id != task.id else None for task in tasks
    }

    for task in tasks:
        seen: set[str] = set()
        current = parents[task.id]
        while current is not None:
            if current == task.id:
                parents[task.id] = None
                break
            if current in seen:
                break
            seen.add(current)
            current = parents[current]

    children: dict[str, list[str]] = {}
    for task in tasks:
        parent = parents[task.id]
        if parent is not None:
            children.setdefault(parent, []).append(task.id)

    result = []
    for task in tasks:
        kids = children.get(task.id, [])
        ordered = [sid for sid in dict.fromkeys(task.subtasks) if sid in kids]
        ordered += [sid for sid in kids if sid not in ordered]
        result.append(replace(task, parent_id=parents[task.id], subtasks=tuple(ordered)))
    return result


def detach(columns: dict[str, Column], removed_ids: Iterable[str]) -> dict[str, Column]:
    """Drop every link to removed_ids from the tasks left in columns.

    Removed ids disappear from subtasks tuples and their children become
    unparented. Columns with nothing to change are reused as-is.
    """
    removed = set(removed_ids)
    if not removed:
        return dict(columns)

    result: dict[str, Column] = {}
    for column_id, col in columns.items():
        changed = False
        tasks = []
        for task in col.tasks:
            parent_id = None if task.parent_id in removed else task.parent_id
            subtasks = tuple(sid for sid in task.subtasks if sid not in removed)
            if parent_id != task.parent_id or subtasks != task.subtasks:
                task = replace(task, parent_id=parent_id, subtasks=subtasks)
                changed = True
            tasks.append(task)
        result[column_id] = replace(col, tasks=tuple(tasks)) if changed else col
    return result
