"""Shared helpers for CLI command handlers."""

import json
import sys
from pathlib import Path

from kanbandoc.config import DEFAULTS, is_git_repo, read_config
from kanbandoc.errors import KanbanError
from kanbandoc.ids import IdGenerator
from kanbandoc.model.document import BoardDocument, Column, Task
from kanbandoc.model.taskmap import find_task_column, resolve_task_ref
from kanbandoc.store import load_board, save_board


def repo_path(args) -> Path:
    return Path(args.repo).resolve()


def settings(args) -> dict:
    """[kanbandoc] git config for the repo, or the defaults outside a repo."""
    path = repo_path(args)
    if not is_git_repo(path):
        return {k.replace("-", "_"): v for k, v in DEFAULTS.items()}
    return read_config(path)


def id_generator(args) -> IdGenerator:
    return IdGenerator(mode=settings(args)["display_ids"])


def load_board_or_die(args) -> tuple[str, BoardDocument]:
    """Load (name, document) for args.board. Exit 1 with message if not found."""
    try:
        return load_board(repo_path(args), args.board, branch=settings(args)["branch"])
    except (KanbanError, ValueError) as e:
        error(str(e), args.json)


def save(args, name: str, doc: BoardDocument, message: str) -> str:
    """Save board and return commit hash. Exit 1 if the store fails."""
    try:
        return save_board(repo_path(args), args.board, name, doc, message=message, branch=settings(args)["branch"])
    except KanbanError as e:
        error(str(e), args.json)


def find_column(doc: BoardDocument, ref: str, json_mode: bool) -> Column:
    """Lookup column by id, 1-indexed position or title.

    Exit 1 listing available columns if not found.
    """
    col = doc.columns.get(ref)
    if col is not None:
        return col
    ordered = doc.ordered_columns()
    if ref.isdigit() and 1 <= int(ref) <= len(ordered):
        return ordered[int(ref) - 1]
    for col in ordered:
        if col.title.lower() == ref.lower():
            return col
    available = [f"  {i}  {c.title}" for i, c in enumerate(ordered, 1)]
    msg = f"Column '{ref}' not found. Available:\n" + "\n".join(available)
    error(msg, json_mode)


def find_task(doc: BoardDocument, ref: str, json_mode: bool) -> Task:
    """Lookup live task by id or display id. Exit 1 if not found."""
    task = resolve_task_ref(doc, ref)
    if task is not None:
        return task
    error(f"Task '{ref}' not found.", json_mode)


def task_summary(doc: BoardDocument, task: Task) -> dict:
    col = find_task_column(doc, task.id)
    data = {
        "id": task.id,
        "display_id": task.display_id,
        "content": task.content,
        "completed": task.completed,
        "due_date": task.due_date,
        "parent_id": task.parent_id,
        "subtasks": list(task.subtasks),
    }
    if col is not None:
        data["column"] = {"id": col.id, "title": col.title}
    return data


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)
