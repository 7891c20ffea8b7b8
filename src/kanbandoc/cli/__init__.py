"""CLI argument parser and dispatch for kanbandoc."""

import argparse

from kanbandoc.cli.archive import archive_list
from kanbandoc.cli.board import board_export, board_import, board_summary, board_template
from kanbandoc.cli.column import (
    column_add,
    column_archive,
    column_delete,
    column_list,
    column_move,
    column_update,
)
from kanbandoc.cli.init import init_board
from kanbandoc.cli.task import (
    task_add,
    task_archive,
    task_candidates,
    task_delete,
    task_get,
    task_list,
    task_move,
    task_parent,
    task_subtasks,
    task_update,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--repo", default=".", help="Path to git repository (default: .)")
    common.add_argument("--board", default="default", help="Board id (default: default)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")

    parser = argparse.ArgumentParser(
        prog="kanbandoc",
        description="Kanban boards stored on a git branch",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- init ---
    init_p = nouns.add_parser("init", help="Create a board", parents=[common])
    init_p.add_argument("--template", help="Column template (default from git config)")
    init_p.add_argument("--templates", help="YAML file with extra templates")
    init_p.add_argument("--name", help="Board display name (default: board id)")
    init_p.set_defaults(func=init_board)

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_summary_p = board_verbs.add_parser("summary", help="Show board summary", parents=[common])
    board_summary_p.set_defaults(func=board_summary)

    board_export_p = board_verbs.add_parser("export", help="Dump board JSON", parents=[common])
    board_export_p.set_defaults(func=board_export)

    board_import_p = board_verbs.add_parser("import", help="Replace board from JSON", parents=[common])
    board_import_p.add_argument("file", help="JSON file, or - for stdin")
    board_import_p.add_argument("--name", help="Board display name")
    board_import_p.set_defaults(func=board_import)

    board_template_p = board_verbs.add_parser("template", help="Reset columns from a template", parents=[common])
    board_template_p.add_argument("template", help="Template name")
    board_template_p.add_argument("--yes", action="store_true", help="Discard existing tasks")
    board_template_p.set_defaults(func=board_template)

    # board with no verb = summary
    board_p.set_defaults(func=board_summary)

    # --- column ---
    col_p = nouns.add_parser("column", help="Column operations", parents=[common])
    col_verbs = col_p.add_subparsers(dest="verb")

    col_list_p = col_verbs.add_parser("list", help="List columns", parents=[common])
    col_list_p.set_defaults(func=column_list)

    col_add_p = col_verbs.add_parser("add", help="Create a column", parents=[common])
    col_add_p.add_argument("title", help="Column title")
    col_add_p.set_defaults(func=column_add)

    col_move_p = col_verbs.add_parser("move", help="Move a column", parents=[common])
    col_move_p.add_argument("id", help="Column id, position or title")
    col_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    col_move_p.set_defaults(func=column_move)

    col_update_p = col_verbs.add_parser("update", help="Edit a column", parents=[common])
    col_update_p.add_argument("id", help="Column id, position or title")
    col_update_p.add_argument("--title", help="New title")
    col_update_p.add_argument("--color", help="Highlight colour (#RRGGBB)")
    col_update_p.add_argument("--minimized", dest="minimized", action="store_true", default=None)
    col_update_p.add_argument("--expanded", dest="minimized", action="store_false")
    col_update_p.set_defaults(func=column_update)

    col_archive_p = col_verbs.add_parser("archive", help="Archive all tasks in a column", parents=[common])
    col_archive_p.add_argument("id", help="Column id, position or title")
    col_archive_p.add_argument("--date", help="Archive date YYYY-MM-DD (default: today)")
    col_archive_p.set_defaults(func=column_archive)

    col_delete_p = col_verbs.add_parser("delete", help="Delete a column and its tasks", parents=[common])
    col_delete_p.add_argument("id", help="Column id, position or title")
    col_delete_p.add_argument("--yes", action="store_true", help="Confirm deletion")
    col_delete_p.set_defaults(func=column_delete)

    # column with no verb = list
    col_p.set_defaults(func=column_list)

    # --- task ---
    task_p = nouns.add_parser("task", help="Task operations", parents=[common])
    task_verbs = task_p.add_subparsers(dest="verb")

    task_list_p = task_verbs.add_parser("list", help="List tasks", parents=[common])
    task_list_p.add_argument("--column", dest="column", help="Filter by column")
    task_list_p.set_defaults(func=task_list)

    task_get_p = task_verbs.add_parser("get", help="Show a task", parents=[common])
    task_get_p.add_argument("id", help="Task id or display id")
    task_get_p.set_defaults(func=task_get)

    task_add_p = task_verbs.add_parser("add", help="Create a task", parents=[common])
    task_add_p.add_argument("content", help="Task title")
    task_add_p.add_argument("--column", dest="column", help="Target column (default: first)")
    task_add_p.add_argument("--description", default="", help="Markdown description")
    task_add_p.add_argument("--due", help="Due date YYYY-MM-DD")
    task_add_p.set_defaults(func=task_add)

    task_move_p = task_verbs.add_parser("move", help="Move a task", parents=[common])
    task_move_p.add_argument("id", help="Task id or display id")
    task_move_p.add_argument("--column", dest="column", required=True, help="Target column")
    task_move_p.add_argument("--position", type=int, help="Position in column (1-indexed)")
    task_move_p.set_defaults(func=task_move)

    task_update_p = task_verbs.add_parser("update", help="Edit a task", parents=[common])
    task_update_p.add_argument("id", help="Task id or display id")
    task_update_p.add_argument("--content", help="New title")
    task_update_p.add_argument("--description", help="New description")
    task_update_p.add_argument("--due", help="Due date YYYY-MM-DD, empty to clear")
    task_update_p.add_argument("--done", dest="completed", action="store_true", default=None)
    task_update_p.add_argument("--not-done", dest="completed", action="store_false")
    task_update_p.set_defaults(func=task_update)

    task_delete_p = task_verbs.add_parser("delete", help="Delete a task", parents=[common])
    task_delete_p.add_argument("id", help="Task id or display id")
    task_delete_p.set_defaults(func=task_delete)

    task_archive_p = task_verbs.add_parser("archive", help="Archive a task", parents=[common])
    task_archive_p.add_argument("id", help="Task id or display id")
    task_archive_p.add_argument("--date", help="Archive date YYYY-MM-DD (default: today)")
    task_archive_p.set_defaults(func=task_archive)

    task_parent_p = task_verbs.add_parser("parent", help="Set or clear a task's parent", parents=[common])
    task_parent_p.add_argument("id", help="Task id or display id")
    task_parent_p.add_argument("parent", nargs="?", help="Parent task (omit to clear)")
    task_parent_p.set_defaults(func=task_parent)

    task_subtasks_p = task_verbs.add_parser("subtasks", help="Show or set a task's subtasks", parents=[common])
    task_subtasks_p.add_argument("id", help="Task id or display id")
    task_subtasks_p.add_argument("subtasks", nargs="*", help="New subtask list")
    task_subtasks_p.add_argument("--clear", action="store_true", help="Remove all subtasks")
    task_subtasks_p.set_defaults(func=task_subtasks)

    task_candidates_p = task_verbs.add_parser("candidates", help="Tasks that could be subtasks", parents=[common])
    task_candidates_p.add_argument("id", help="Task id or display id")
    task_candidates_p.set_defaults(func=task_candidates)

    # task with no verb = list
    task_p.set_defaults(func=task_list, column=None)

    # --- archive ---
    archive_p = nouns.add_parser("archive", help="Archive history", parents=[common])
    archive_verbs = archive_p.add_subparsers(dest="verb")

    archive_list_p = archive_verbs.add_parser("list", help="List archived tasks", parents=[common])
    archive_list_p.set_defaults(func=archive_list)

    archive_p.set_defaults(func=archive_list)

    return parser
