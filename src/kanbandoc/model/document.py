"""Immutable value types for one board's full state."""

from __future__ import annotations

from dataclasses import dataclass, field

from kanbandoc.errors import InvariantError
from kanbandoc.palette import DEFAULT_HIGHLIGHT


@dataclass(frozen=True)
class Task:
    """A unit of work living in exactly one column, or in the archive.

    highlight_color and column_title are only set on archived copies,
    recording the column the task was archived from.
    """

    id: str
    display_id: str
    content: str
    description: str = ""
    due_date: str | None = None
    parent_id: str | None = None
    subtasks: tuple[str, ...] = ()
    archived_at: str | None = None
    completed: bool = False
    highlight_color: str | None = None
    column_title: str | None = None


@dataclass(frozen=True)
class Column:
    """An ordered lane of tasks."""

    id: str
    title: str
    tasks: tuple[Task, ...] = ()
    highlight_color: str = DEFAULT_HIGHLIGHT
    minimized: bool = False

    def index_of(self, task_id: str) -> int | None:
        """Position of task_id in this column, or None."""
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                return i
        return None


@dataclass(frozen=True)
class ArchiveEntry:
    """Tasks archived on one day (YYYY-MM-DD)."""

    date: str
    tasks: tuple[Task, ...] = ()


@dataclass(frozen=True)
class BoardDocument:
    """The board: columns keyed by id, their display order, and the archive.

    ``columns`` is never mutated in place; every operation builds a new
    dict, so a document is safe to share between callers.
    """

    columns: dict[str, Column] = field(default_factory=dict)
    column_order: tuple[str, ...] = ()
    archive_history: tuple[ArchiveEntry, ...] = ()
    gradient_colors: tuple[str, ...] = ()
    description: str = ""

    def ordered_columns(self) -> list[Column]:
        """Columns in display order."""
        return [self.columns[cid] for cid in self.column_order if cid in self.columns]

    def column(self, column_id: str) -> Column | None:
        return self.columns.get(column_id)


def live_task_count(doc: BoardDocument) -> int:
    return sum(len(col.tasks) for col in doc.columns.values())


def archived_task_count(doc: BoardDocument) -> int:
    return sum(len(entry.tasks) for entry in doc.archive_history)


def _find_cycle_members(tasks: dict[str, Task]) -> set[str]:
    """Ids of tasks that are their own ancestor."""
    looped: set[str] = set()
    for task_id in tasks:
        seen: set[str] = set()
        current = tasks[task_id].parent_id
        while current is not None and current in tasks and current not in seen:
            if current == task_id:
                looped.add(task_id)
                break
            seen.add(current)
            current = tasks[current].parent_id
    return looped


def invariant_problems(doc: BoardDocument) -> list[str]:
    """Describe every structural invariant doc violates. Empty when valid."""
    problems: list[str] = []

    order = list(doc.column_order)
    if len(order) != len(set(order)):
        problems.append("column order contains duplicates")
    if set(order) != set(doc.columns):
        missing = sorted(set(doc.columns) - set(order))
        extra = sorted(set(order) - set(doc.columns))
        problems.append(f"column order is not a permutation of columns (missing={missing}, extra={extra})")

    for key, col in doc.columns.items():
        if col.id != key:
            problems.append(f"column keyed '{key}' has id '{col.id}'")

    tasks: dict[str, Task] = {}
    for col in doc.columns.values():
        for task in col.tasks:
            if task.id in tasks:
                problems.append(f"task '{task.id}' appears more than once")
            tasks[task.id] = task

    for task in tasks.values():
        if task.archived_at is not None:
            problems.append(f"live task '{task.id}' is stamped archived")
        if task.parent_id is not None:
            parent = tasks.get(task.parent_id)
            if parent is None:
                problems.append(f"task '{task.id}' has unknown parent '{task.parent_id}'")
            elif task.id not in parent.subtasks:
                problems.append(f"parent '{parent.id}' does not list subtask '{task.id}'")
        if len(task.subtasks) != len(set(task.subtasks)):
            problems.append(f"task '{task.id}' lists a subtask twice")
        for sub_id in task.subtasks:
            sub = tasks.get(sub_id)
            if sub is None:
                problems.append(f"task '{task.id}' has unknown subtask '{sub_id}'")
            elif sub.parent_id != task.id:
                problems.append(f"subtask '{sub_id}' does not point back to '{task.id}'")

    for task_id in sorted(_find_cycle_members(tasks)):
        problems.append(f"task '{task_id}' is its own ancestor")

    dates = [entry.date for entry in doc.archive_history]
    if len(dates) != len(set(dates)):
        problems.append("archive history has duplicate dates")
    if dates != sorted(dates, reverse=True):
        problems.append("archive history is not sorted newest first")

    archived: set[str] = set()
    for entry in doc.archive_history:
        for task in entry.tasks:
            if task.id in tasks:
                problems.append(f"task '{task.id}' is both live and archived")
            elif task.id in archived:
                problems.append(f"task '{task.id}' is archived more than once")
            archived.add(task.id)

    return problems


def check_invariants(doc: BoardDocument) -> None:
    """Raise InvariantError if doc breaks any structural invariant."""
    problems = invariant_problems(doc)
    if problems:
        raise InvariantError(problems)
