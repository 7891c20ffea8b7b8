"""Date-bucketed archive history."""

from __future__ import annotations

from datetime import date as _date
from typing import Iterable, Iterator

from kanbandoc.model.document import ArchiveEntry, Task


def today() -> str:
    """Current local date as YYYY-MM-DD."""
    return _date.today().isoformat()


def _sorted_newest_first(history: list[ArchiveEntry]) -> tuple[ArchiveEntry, ...]:
    return tuple(sorted(history, key=lambda entry: entry.date, reverse=True))


def add_entry(history: Iterable[ArchiveEntry], task: Task, date: str) -> tuple[ArchiveEntry, ...]:
    """Return history with task appended under date.

    An existing entry for date gets the task appended; otherwise a new
    entry is created and the whole history re-sorted newest first.
    """
    return add_entries(history, [task], date)


def add_entries(history: Iterable[ArchiveEntry], tasks: Iterable[Task], date: str) -> tuple[ArchiveEntry, ...]:
    """Append several tasks under one date in a single transition."""
    tasks = tuple(tasks)
    entries = list(history)
    if not tasks:
        return tuple(entries)
    for i, entry in enumerate(entries):
        if entry.date == date:
            entries[i] = ArchiveEntry(date=date, tasks=entry.tasks + tasks)
            return tuple(entries)
    entries.append(ArchiveEntry(date=date, tasks=tasks))
    return _sorted_newest_first(entries)


def archived_tasks(history: Iterable[ArchiveEntry]) -> Iterator[Task]:
    """Every archived task, newest day first."""
    for entry in history:
        yield from entry.tasks


def find_archived(history: Iterable[ArchiveEntry], task_id: str) -> Task | None:
    for task in archived_tasks(history):
        if task.id == task_id:
            return task
    return None
