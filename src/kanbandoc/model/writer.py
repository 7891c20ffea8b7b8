"""Serialize a BoardDocument to its JSON wire shape."""

from __future__ import annotations

import json

from kanbandoc.model.document import BoardDocument, Column, Task


def task_to_dict(task: Task) -> dict:
    data = {
        "id": task.id,
        "displayId": task.display_id,
        "content": task.content,
        "description": task.description,
        "dueDate": task.due_date,
        "parentId": task.parent_id,
        "subtasks": list(task.subtasks),
        "archivedAt": task.archived_at,
        "completed": task.completed,
    }
    if task.highlight_color is not None:
        data["highlightColor"] = task.highlight_color
    if task.column_title is not None:
        data["columnTitle"] = task.column_title
    return data


def column_to_dict(col: Column) -> dict:
    return {
        "id": col.id,
        "title": col.title,
        "tasks": [task_to_dict(t) for t in col.tasks],
        "highlightColor": col.highlight_color,
        "minimized": col.minimized,
    }


def board_to_dict(doc: BoardDocument) -> dict:
    """Plain dict in the camelCase shape board_from_dict reads back."""
    return {
        "columns": {cid: column_to_dict(col) for cid, col in doc.columns.items()},
        "columnOrder": list(doc.column_order),
        "archiveHistory": [
            {"date": entry.date, "tasks": [task_to_dict(t) for t in entry.tasks]} for entry in doc.archive_history
        ],
        "gradientColors": list(doc.gradient_colors),
        "description": doc.description,
    }


def board_to_json(doc: BoardDocument, indent: int | None = 2) -> str:
    return json.dumps(board_to_dict(doc), indent=indent)
