"""Handlers for 'kanbandoc board' commands."""

import json
import sys
from pathlib import Path

from kanbandoc.cli._common import (
    error,
    id_generator,
    load_board_or_die,
    output_json,
    output_result,
    save,
    settings,
)
from kanbandoc.model.column import apply_template
from kanbandoc.model.document import archived_task_count, live_task_count
from kanbandoc.model.loader import board_from_dict
from kanbandoc.model.templates import TEMPLATES
from kanbandoc.model.writer import board_to_dict


def build_column_summaries(doc) -> list[dict]:
    """Build column summary dicts in display order."""
    return [
        {
            "id": col.id,
            "position": i,
            "title": col.title,
            "tasks": len(col.tasks),
            "color": col.highlight_color,
            "minimized": col.minimized,
        }
        for i, col in enumerate(doc.ordered_columns(), 1)
    ]


def format_column_line(c: dict, indent: str = "") -> str:
    """Format a column summary dict as a text line."""
    minimized = "  (minimized)" if c["minimized"] else ""
    tasks = "task" if c["tasks"] == 1 else "tasks"
    return f"{indent}{c['position']}  {c['title']:<16} {c['tasks']} {tasks}{minimized}"


def board_summary(args) -> int:
    """Show board name, description and column counts."""
    name, doc = load_board_or_die(args)
    columns = build_column_summaries(doc)
    archived = archived_task_count(doc)

    if args.json:
        output_json(
            {
                "board": args.board,
                "name": name,
                "description": doc.description,
                "columns": columns,
                "tasks": live_task_count(doc),
                "archived": archived,
            }
        )
    else:
        print(name)
        if doc.description:
            print(doc.description)
        print()
        for c in columns:
            print(format_column_line(c, indent="  "))
        if archived:
            print(f"\n  {archived} archived")

    return 0


def board_export(args) -> int:
    """Write the board as JSON to stdout."""
    name, doc = load_board_or_die(args)
    output_json({"name": name, "data": board_to_dict(doc)})
    return 0


def board_import(args) -> int:
    """Replace the board with a JSON export read from a file or stdin."""
    try:
        text = sys.stdin.read() if args.file == "-" else Path(args.file).read_text(encoding="utf-8")
        payload = json.loads(text)
    except (OSError, ValueError) as e:
        error(f"Cannot read board JSON: {e}", args.json)

    name = args.name
    data = payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        name = name or payload.get("name")
        data = payload["data"]
    name = name or args.board

    try:
        doc = board_from_dict(data, ids=id_generator(args))
    except ValueError as e:
        error(str(e), args.json)

    commit = save(args, name, doc, f"Import board {name}")
    output_result(
        {"board": args.board, "name": name, "columns": len(doc.columns), "commit": commit},
        f"Imported board '{name}' with {len(doc.columns)} columns ({commit[:7]})",
        args.json,
    )
    return 0


def board_template(args) -> int:
    """Replace the board's columns with a template."""
    name, doc = load_board_or_die(args)
    if args.template not in TEMPLATES:
        error(f"Unknown template '{args.template}'. Available: {', '.join(TEMPLATES)}", args.json)
    if live_task_count(doc) and not args.yes:
        error("Board has tasks that would be discarded; pass --yes to confirm.", args.json)

    doc = apply_template(doc, args.template, ids=id_generator(args), color_attempts=settings(args)["color_attempts"])
    commit = save(args, name, doc, f"Apply template {args.template}")

    titles = [c.title for c in doc.ordered_columns()]
    output_result(
        {"board": args.board, "template": args.template, "columns": titles, "commit": commit},
        f"Applied '{args.template}': {', '.join(titles)} ({commit[:7]})",
        args.json,
    )
    return 0
