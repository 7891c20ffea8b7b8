"""Build a BoardDocument from parsed JSON.

This is the one place untrusted board data is normalised. Everything
past here can assume the document invariants hold.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any

from kanbandoc.ids import IdGenerator
from kanbandoc.model.document import ArchiveEntry, BoardDocument, Column, Task
from kanbandoc.model.relations import normalize_relationships
from kanbandoc.palette import DEFAULT_HIGHLIGHT, is_hex_color

logger = logging.getLogger(__name__)


def _str_or_none(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _task_from_dict(raw: dict, ids: IdGenerator, archived_on: str | None = None) -> Task:
    """Deserialize one task. archived_on is the archive entry date, if any.

    Archived tasks are cut out of the parent/subtask graph. A missing
    displayId is left blank here and filled in by board_from_dict.
    """
    subtasks = raw.get("subtasks")
    if not isinstance(subtasks, list):
        subtasks = []
    task = Task(
        id=str(raw.get("id") or ids.new_id()),
        display_id=str(raw.get("displayId") or ""),
        content=str(raw.get("content") or ""),
        description=str(raw.get("description") or ""),
        due_date=_str_or_none(raw.get("dueDate")),
        parent_id=_str_or_none(raw.get("parentId")),
        subtasks=tuple(dict.fromkeys(str(s) for s in subtasks if s)),
        completed=bool(raw.get("completed", False)),
    )
    if archived_on is not None:
        color = raw.get("highlightColor")
        task = replace(
            task,
            archived_at=_str_or_none(raw.get("archivedAt")) or archived_on,
            highlight_color=color if is_hex_color(color) else None,
            column_title=_str_or_none(raw.get("columnTitle")),
            parent_id=None,
            subtasks=(),
        )
    return task


def _columns_as_map(raw_columns: Any, ids: IdGenerator) -> dict[str, dict]:
    """Accept the map shape or the legacy list shape of ``columns``."""
    if isinstance(raw_columns, dict):
        return {str(k): v for k, v in raw_columns.items() if isinstance(v, dict)}
    if isinstance(raw_columns, list):
        logger.warning("converting list-shaped columns to a map")
        result: dict[str, dict] = {}
        for raw in raw_columns:
            if isinstance(raw, dict):
                result[str(raw.get("id") or ids.new_id())] = raw
        return result
    if raw_columns is not None:
        logger.warning("ignoring columns of type %s", type(raw_columns).__name__)
    return {}


def _repair_order(raw_order: Any, column_ids: list[str]) -> tuple[str, ...]:
    """Make column order a permutation of column_ids, keeping valid entries first."""
    known = set(column_ids)
    order: list[str] = []
    if isinstance(raw_order, list):
        for cid in raw_order:
            cid = str(cid)
            if cid in known and cid not in order:
                order.append(cid)
    order += [cid for cid in column_ids if cid not in order]
    if isinstance(raw_order, list) and order != [str(c) for c in raw_order]:
        logger.warning("repaired column order")
    return tuple(order)


def _load_archive(raw_history: Any, ids: IdGenerator, live_ids: set[str]) -> tuple[ArchiveEntry, ...]:
    """Archive entries merged by date, newest first.

    A task id may only appear once across the board, so archived copies of
    live tasks and repeated archived ids are dropped.
    """
    if not isinstance(raw_history, list):
        return ()
    seen = set(live_ids)
    by_date: dict[str, list[Task]] = {}
    for raw in raw_history:
        if not isinstance(raw, dict) or not raw.get("date"):
            continue
        date = str(raw["date"])
        tasks = []
        for raw_task in raw.get("tasks") or []:
            if not isinstance(raw_task, dict):
                continue
            task = _task_from_dict(raw_task, ids, date)
            if task.id in seen:
                reason = "live" if task.id in live_ids else "already archived"
                logger.warning("dropping archived task %s on %s: %s", task.id, date, reason)
                continue
            seen.add(task.id)
            tasks.append(task)
        by_date.setdefault(date, []).extend(tasks)
    entries = [ArchiveEntry(date=d, tasks=tuple(ts)) for d, ts in by_date.items()]
    return tuple(sorted(entries, key=lambda entry: entry.date, reverse=True))


def _fill_archived_display_ids(
    history: tuple[ArchiveEntry, ...], ids: IdGenerator, used_display: list[str]
) -> tuple[ArchiveEntry, ...]:
    entries = []
    for entry in history:
        tasks = []
        for task in entry.tasks:
            if not task.display_id:
                task = replace(task, display_id=ids.display_id(used_display))
                used_display.append(task.display_id)
            tasks.append(task)
        entries.append(replace(entry, tasks=tuple(tasks)))
    return tuple(entries)


def board_from_dict(data: Any, ids: IdGenerator | None = None) -> BoardDocument:
    """Normalise a parsed board payload into a valid BoardDocument."""
    if not isinstance(data, dict):
        raise ValueError("Board data must be a JSON object")
    ids = ids or IdGenerator()

    raw_columns = _columns_as_map(data.get("columns"), ids)

    seen: set[str] = set()
    column_tasks: dict[str, list[Task]] = {}
    for column_id, raw in raw_columns.items():
        tasks = []
        raw_tasks = raw.get("tasks")
        for raw_task in raw_tasks if isinstance(raw_tasks, list) else []:
            if not isinstance(raw_task, dict):
                continue
            task = _task_from_dict(raw_task, ids)
            if task.id in seen:
                logger.warning("dropping duplicate task %s in column %s", task.id, column_id)
                continue
            seen.add(task.id)
            tasks.append(task)
        column_tasks[column_id] = tasks

    flat = [task for tasks in column_tasks.values() for task in tasks]
    repaired = {task.id: task for task in normalize_relationships(flat)}
    if any(repaired[t.id] != t for t in flat):
        logger.warning("repaired parent/subtask links")

    history = _load_archive(data.get("archiveHistory"), ids, seen)
    used_display = [t.display_id for t in flat if t.display_id]
    used_display += [t.display_id for entry in history for t in entry.tasks if t.display_id]
    columns: dict[str, Column] = {}
    for column_id, raw in raw_columns.items():
        tasks = []
        for task in column_tasks[column_id]:
            task = repaired[task.id]
            if not task.display_id:
                task = replace(task, display_id=ids.display_id(used_display))
                used_display.append(task.display_id)
            tasks.append(task)
        color = raw.get("highlightColor")
        columns[column_id] = Column(
            id=column_id,
            title=str(raw.get("title") or "Untitled"),
            tasks=tuple(tasks),
            highlight_color=color if is_hex_color(color) else DEFAULT_HIGHLIGHT,
            minimized=bool(raw.get("minimized", False)),
        )

    gradient = data.get("gradientColors")
    return BoardDocument(
        columns=columns,
        column_order=_repair_order(data.get("columnOrder"), list(columns)),
        archive_history=_fill_archived_display_ids(history, ids, used_display),
        gradient_colors=tuple(str(c) for c in gradient) if isinstance(gradient, list) else (),
        description=str(data.get("description") or ""),
    )


def board_from_json(text: str, ids: IdGenerator | None = None) -> BoardDocument:
    """Parse and normalise a JSON board export."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid board JSON: {e}") from e
    return board_from_dict(data, ids)
