"""Immutable board document and the operations on it."""

from kanbandoc.model.archive import add_entry, today
from kanbandoc.model.column import (
    add_column,
    apply_template,
    archive_column,
    delete_column,
    reorder_columns,
    update_column,
)
from kanbandoc.model.document import ArchiveEntry, BoardDocument, Column, Task, check_invariants
from kanbandoc.model.drag import DragSession, resolve_drop
from kanbandoc.model.loader import board_from_dict, board_from_json
from kanbandoc.model.relations import assignable_subtasks, find_ancestors, find_descendants, with_pending_subtasks
from kanbandoc.model.task import (
    add_task,
    archive_task,
    delete_task,
    move_task_between_columns,
    move_task_within_column,
    set_parent,
    set_subtasks,
    update_task,
)
from kanbandoc.model.taskmap import TaskMap, build_task_map, find_task_column
from kanbandoc.model.templates import create_columns_from_template
from kanbandoc.model.writer import board_to_dict, board_to_json

__all__ = [
    "ArchiveEntry",
    "BoardDocument",
    "Column",
    "DragSession",
    "Task",
    "TaskMap",
    "add_column",
    "add_entry",
    "add_task",
    "apply_template",
    "archive_column",
    "archive_task",
    "assignable_subtasks",
    "board_from_dict",
    "board_from_json",
    "board_to_dict",
    "board_to_json",
    "build_task_map",
    "check_invariants",
    "create_columns_from_template",
    "delete_column",
    "delete_task",
    "find_ancestors",
    "find_descendants",
    "find_task_column",
    "move_task_between_columns",
    "move_task_within_column",
    "reorder_columns",
    "resolve_drop",
    "set_parent",
    "set_subtasks",
    "today",
    "update_column",
    "update_task",
    "with_pending_subtasks",
]
